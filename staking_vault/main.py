"""Staking vault CLI."""
import os
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from loguru import logger

from .core.accrual import accrue
from .core.config import VaultConfig, load_config, save_config
from .core.errors import NothingToClaim, StakingError
from .core.providers import InMemoryCustody, InMemoryRewardIssuer, ManualClock
from .core.vault import StakingVault

LOG_LEVEL_ENV_VAR = "STAKING_VAULT_LOG_LEVEL"


def configure_logging(level: Optional[str] = None) -> None:
    """Send log output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or os.getenv(LOG_LEVEL_ENV_VAR, "INFO")).upper())


def _load(config_path: Optional[str]) -> VaultConfig:
    try:
        return load_config(config_path)
    except StakingError as e:
        logger.error(f"Could not load configuration: {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="staking-vault")
@click.option('--log-level', default=None, help='Log level (defaults to $STAKING_VAULT_LOG_LEVEL or INFO)')
def cli(log_level: Optional[str]):
    """Staking vault CLI for inspecting reward schedules and simulating stakes."""
    configure_logging(log_level)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True), help='Path to YAML config')
def schedule(config_path: Optional[str]):
    """Show the configured reward schedule."""
    config = _load(config_path)

    click.echo(f"\nReward schedule ({len(config.schedule)} segments):")
    click.echo("-" * 60)
    click.echo(f"{'#':<4}{'Days':<14}{'Kind':<8}{'Rate':<12}{'Slope':<10}")
    click.echo("-" * 60)
    for i, segment in enumerate(config.schedule, 1):
        kind = "ramp" if segment.is_ramp else "flat"
        slope = str(segment.ramp_slope) if segment.is_ramp else "-"
        click.echo(
            f"{i:<4}{f'{segment.start}-{segment.end}':<14}{kind:<8}"
            f"{segment.flat_rate:<12}{slope:<10}"
        )


@cli.command(name="accrue")
@click.argument('days', type=click.IntRange(min=0))
@click.option('--config', 'config_path', type=click.Path(exists=True), help='Path to YAML config')
def accrue_cmd(days: int, config_path: Optional[str]):
    """Show the reward accrued by a deposit that is DAYS days old."""
    config = _load(config_path)
    click.echo(f"Reward after {days} days: {accrue(days, config.schedule)}")


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True), help='Path to YAML config')
@click.option('--settle-at', type=click.IntRange(min=0), multiple=True, help='Day to settle on (repeatable)')
@click.option('--withdraw-at', type=click.IntRange(min=0), default=None, help='Day to withdraw on')
@click.option('--owner', default='alice', help='Depositing principal')
@click.option('--asset-id', type=click.IntRange(min=1), default=1, help='Asset to stake')
def simulate(config_path: Optional[str], settle_at: Tuple[int, ...], withdraw_at: Optional[int],
             owner: str, asset_id: int):
    """Run a deposit through an in-memory vault and print every payout."""
    config = _load(config_path)
    custody = InMemoryCustody()
    issuer = InMemoryRewardIssuer()
    clock = ManualClock(now=0)
    vault = StakingVault(custody, issuer, config=config, clock=clock)

    custody.register(asset_id, owner)
    vault.deposit(owner, asset_id)
    click.echo(f"Day 0: {owner} deposited asset {asset_id}")

    last_day = 0
    try:
        for day in sorted(settle_at):
            clock.now = day * config.seconds_per_day
            last_day = day
            try:
                reward = vault.settle(owner, asset_id)
                click.echo(f"Day {day}: settled {reward}")
            except NothingToClaim:
                click.echo(f"Day {day}: nothing to claim")

        if withdraw_at is not None:
            clock.now = withdraw_at * config.seconds_per_day
            last_day = max(last_day, withdraw_at)
            reward = vault.withdraw(owner, asset_id)
            click.echo(f"Day {withdraw_at}: withdrew asset {asset_id} with reward {reward}")
    except StakingError as e:
        logger.error(f"Simulation stopped: {e}")
        sys.exit(1)

    click.echo(f"\nTotal minted to {owner}: {issuer.balance_of(owner)}")
    click.echo(f"Single settlement on day {last_day}: {accrue(last_day, config.schedule)}")


@cli.command(name="init-config")
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init_config(path: Path, force: bool):
    """Write the default configuration to PATH."""
    if path.exists() and not force:
        logger.error(f"{path} already exists, use --force to overwrite")
        sys.exit(1)
    save_config(VaultConfig(), path)
    logger.info(f"Wrote default configuration to {path}")


if __name__ == "__main__":
    cli()
