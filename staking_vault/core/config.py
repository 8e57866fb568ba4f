"""Vault configuration."""
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfiguration
from .schedule import AccrualSegment

CONFIG_ENV_VAR = "STAKING_VAULT_CONFIG"


def default_schedule() -> List[AccrualSegment]:
    """Four-week schedule installed when no other is configured."""
    return [
        AccrualSegment(start=0, end=7, flat_rate=7),
        AccrualSegment(start=7, end=14, ramp_slope=1, is_ramp=True),
        AccrualSegment(start=14, end=21, flat_rate=14),
        AccrualSegment(start=21, end=28, ramp_slope=1, is_ramp=True),
    ]


class VaultConfig(BaseModel):
    """Staking vault configuration."""
    model_config = ConfigDict(extra="forbid")

    admin: str = "admin"
    vault_principal: str = "vault"
    lock_days: int = Field(default=7, ge=0)
    seconds_per_day: int = Field(default=86400, gt=0)
    schedule: List[AccrualSegment] = Field(default_factory=default_schedule)

    @field_validator("schedule")
    @classmethod
    def _schedule_not_empty(cls, value: List[AccrualSegment]) -> List[AccrualSegment]:
        if not value:
            raise ValueError("schedule needs at least one segment")
        return value

    @property
    def lock_seconds(self) -> int:
        return self.lock_days * self.seconds_per_day


def get_config_path() -> Optional[Path]:
    """Get the configuration path from the environment, if set."""
    path = os.getenv(CONFIG_ENV_VAR)
    return Path(path) if path else None


def load_config(config_path: Optional[Union[str, Path]] = None) -> VaultConfig:
    """Load and validate configuration.

    Args:
        config_path: Path to a YAML configuration file. Falls back to
            ``STAKING_VAULT_CONFIG`` and then to the defaults.

    Returns:
        Validated configuration

    Raises:
        InvalidConfiguration: If the file cannot be parsed or validated
    """
    if config_path is None:
        config_path = get_config_path()
    if config_path is None:
        return VaultConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}
        if not isinstance(config_dict, dict) or not all(isinstance(key, str) for key in config_dict):
            raise InvalidConfiguration(f"Expected a mapping in {config_path}")
        config = VaultConfig.model_validate(config_dict)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
        logger.error(f"Failed to load config: {e}")
        raise InvalidConfiguration(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def save_config(config: VaultConfig, config_path: Union[str, Path]) -> None:
    """Write configuration to disk as YAML."""
    with open(config_path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, sort_keys=False)
