"""Test configuration and fixtures for the staking vault."""
import os
import pytest
from unittest.mock import MagicMock
from staking_vault.core import (
    AccrualSegment,
    InMemoryCustody,
    InMemoryRewardIssuer,
    ManualClock,
    RewardIssuer,
    StakingVault,
    VaultConfig,
)

DAY = 86400
T0 = 1_700_000_000

@pytest.fixture
def scenario_segments():
    """Four-week schedule: flat, ramp, flat, ramp."""
    return [
        AccrualSegment(start=0, end=7, flat_rate=7),
        AccrualSegment(start=7, end=14, ramp_slope=1, is_ramp=True),
        AccrualSegment(start=14, end=21, flat_rate=14),
        AccrualSegment(start=21, end=28, ramp_slope=1, is_ramp=True),
    ]

@pytest.fixture
def config(scenario_segments):
    return VaultConfig(admin="admin", vault_principal="vault", schedule=scenario_segments)

@pytest.fixture
def clock():
    return ManualClock(now=T0)

@pytest.fixture
def custody():
    """Custody provider holding assets 1-3 for alice and 4 for bob."""
    custody = InMemoryCustody()
    for asset_id in (1, 2, 3):
        custody.register(asset_id, "alice")
    custody.register(4, "bob")
    return custody

@pytest.fixture
def issuer():
    return InMemoryRewardIssuer()

@pytest.fixture
def mock_issuer():
    """Create a mock reward issuer for call assertions."""
    return MagicMock(spec=RewardIssuer)

@pytest.fixture
def vault(custody, issuer, config, clock):
    return StakingVault(custody, issuer, config=config, clock=clock)

@pytest.fixture
def env_setup(tmp_path):
    """Set up environment variables for testing."""
    config_path = tmp_path / "env_config.yaml"
    os.environ["STAKING_VAULT_CONFIG"] = str(config_path)
    os.environ["STAKING_VAULT_LOG_LEVEL"] = "DEBUG"
    yield config_path
    del os.environ["STAKING_VAULT_CONFIG"]
    del os.environ["STAKING_VAULT_LOG_LEVEL"]
