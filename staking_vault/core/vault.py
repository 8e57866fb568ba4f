"""Stake lifecycle: deposit, settlement and withdrawal."""
import time
from typing import Callable, Iterable, Optional

from loguru import logger

from .accrual import unsettled_reward
from .config import VaultConfig
from .errors import AlreadyStaked, LockNotExpired, NotOwner, NothingToClaim
from .providers import CustodyProvider, RewardIssuer
from .schedule import RewardSchedule, SegmentLike
from .store import DepositRecord, StakeRecordStore


def _wall_clock() -> int:
    return int(time.time())


class StakingVault:
    """Takes custody of assets and pays out rewards accrued while staked.

    Every operation checks all of its preconditions before the first side
    effect, and updates the record store only after the custody and reward
    collaborators have returned.
    """

    def __init__(self,
                 custody: CustodyProvider,
                 issuer: RewardIssuer,
                 config: Optional[VaultConfig] = None,
                 clock: Callable[[], int] = _wall_clock):
        """Initialize the vault.

        Args:
            custody: Ownership registry for the staked assets
            issuer: Issuer of the reward balance
            config: Vault configuration, defaults when omitted
            clock: Returns the current time in unix seconds
        """
        self.config = config or VaultConfig()
        self.custody = custody
        self.issuer = issuer
        self.clock = clock
        self.store = StakeRecordStore()
        self.schedule = RewardSchedule(self.config.schedule)

    def _require_owner(self, caller: str, asset_id: int) -> DepositRecord:
        record = self.store.get(asset_id)
        if record is None or record.owner != caller:
            logger.warning(f"{caller} is not the depositor of asset {asset_id}")
            raise NotOwner(f"{caller} has no stake on asset {asset_id}")
        return record

    def _owed(self, record: DepositRecord, now: int) -> int:
        return unsettled_reward(record, now, self.schedule, self.config.seconds_per_day)

    def deposit(self, caller: str, asset_id: int) -> DepositRecord:
        """Take custody of an asset and start accruing rewards.

        Args:
            caller: Principal depositing the asset
            asset_id: Asset to stake

        Returns:
            The new deposit record

        Raises:
            AlreadyStaked: If the asset is already in custody
            NotOwner: If ``caller`` does not own the asset
        """
        if asset_id <= 0:
            raise ValueError(f"Asset id must be positive, got {asset_id}")
        if not caller:
            raise ValueError("Caller principal must not be empty")

        existing = self.store.get(asset_id)
        if existing is not None and existing.owner == caller:
            raise AlreadyStaked(f"Asset {asset_id} is already staked by {caller}")
        if self.custody.owner_of(asset_id) != caller:
            logger.warning(f"{caller} tried to deposit asset {asset_id} it does not own")
            raise NotOwner(f"{caller} does not own asset {asset_id}")
        if existing is not None:
            raise AlreadyStaked(f"Asset {asset_id} is already staked")

        now = self.clock()
        record = DepositRecord(asset_id=asset_id, owner=caller, deposited_at=now, settled_at=now)
        self.custody.transfer(caller, self.config.vault_principal, asset_id)
        self.store.insert(asset_id, record)
        logger.info(f"{caller} deposited asset {asset_id} at {now}")
        return record

    def settle(self, caller: str, asset_id: int) -> int:
        """Pay out rewards accrued since the last settlement.

        Returns:
            Reward units minted to ``caller``

        Raises:
            NotOwner: If ``caller`` has no stake on the asset
            NothingToClaim: If no reward has accrued
        """
        record = self._require_owner(caller, asset_id)
        now = self.clock()
        reward = self._owed(record, now)
        if reward <= 0:
            raise NothingToClaim(f"No reward accrued on asset {asset_id}")

        self.issuer.mint(caller, reward)
        self.store.touch_settled_at(asset_id, now)
        logger.info(f"{caller} settled {reward} on asset {asset_id}")
        return reward

    def withdraw(self, caller: str, asset_id: int) -> int:
        """Return an asset to its depositor and pay the final reward.

        Returns:
            Reward units minted to ``caller``

        Raises:
            NotOwner: If ``caller`` has no stake on the asset
            LockNotExpired: If the lock duration has not passed yet
        """
        record = self._require_owner(caller, asset_id)
        now = self.clock()
        if now - record.deposited_at < self.config.lock_seconds:
            unlock_at = record.deposited_at + self.config.lock_seconds
            logger.warning(f"Withdrawal of asset {asset_id} rejected, locked until {unlock_at}")
            raise LockNotExpired(f"Asset {asset_id} is locked until {unlock_at}")

        reward = self._owed(record, now)
        self.custody.transfer(self.config.vault_principal, caller, asset_id)
        if reward > 0:
            try:
                self.issuer.mint(caller, reward)
            except Exception:
                logger.error(f"Mint failed on withdrawal of asset {asset_id}, returning it to the vault")
                self.custody.transfer(caller, self.config.vault_principal, asset_id)
                raise
        self.store.remove(asset_id)
        logger.info(f"{caller} withdrew asset {asset_id} with final reward {reward}")
        return max(reward, 0)

    def set_schedule(self, caller: str, segments: Iterable[SegmentLike]) -> None:
        """Replace the reward schedule.

        Raises:
            NotOwner: If ``caller`` is not the administrator
            InvalidConfiguration: If ``segments`` is empty
        """
        if caller != self.config.admin:
            logger.warning(f"{caller} tried to replace the reward schedule")
            raise NotOwner(f"{caller} is not the administrator")
        self.schedule.set_schedule(segments)

    def segment_count(self) -> int:
        return self.schedule.segment_count()

    def get_stake(self, asset_id: int) -> Optional[DepositRecord]:
        return self.store.get(asset_id)

    def is_staked(self, asset_id: int) -> bool:
        return asset_id in self.store

    def pending_reward(self, asset_id: int) -> int:
        """Reward a settlement would pay right now, 0 if none."""
        record = self.store.get(asset_id)
        if record is None:
            return 0
        return max(self._owed(record, self.clock()), 0)

    def lock_expires_at(self, asset_id: int) -> Optional[int]:
        record = self.store.get(asset_id)
        if record is None:
            return None
        return record.deposited_at + self.config.lock_seconds
