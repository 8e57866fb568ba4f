"""Core staking vault components."""
from .accrual import accrue, elapsed_days, unsettled_reward
from .config import VaultConfig, load_config, save_config
from .errors import (
    AlreadyStaked,
    InvalidConfiguration,
    LockNotExpired,
    NotOwner,
    NothingToClaim,
    StakingError,
)
from .providers import CustodyProvider, InMemoryCustody, InMemoryRewardIssuer, ManualClock, RewardIssuer
from .schedule import AccrualSegment, RewardSchedule
from .store import DepositRecord, StakeRecordStore
from .vault import StakingVault

__all__ = [
    "AccrualSegment",
    "AlreadyStaked",
    "CustodyProvider",
    "DepositRecord",
    "InMemoryCustody",
    "InMemoryRewardIssuer",
    "InvalidConfiguration",
    "LockNotExpired",
    "ManualClock",
    "NotOwner",
    "NothingToClaim",
    "RewardIssuer",
    "RewardSchedule",
    "StakeRecordStore",
    "StakingError",
    "StakingVault",
    "VaultConfig",
    "accrue",
    "elapsed_days",
    "load_config",
    "save_config",
    "unsettled_reward",
]
