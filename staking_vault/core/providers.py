"""Custody and reward collaborators used by the vault."""
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from loguru import logger

from .errors import NotOwner


class CustodyProvider(ABC):
    """Ownership registry for the staked assets."""

    @abstractmethod
    def owner_of(self, asset_id: int) -> Optional[str]:
        """Get the current owner of an asset."""
        pass

    @abstractmethod
    def transfer(self, sender: str, recipient: str, asset_id: int) -> None:
        """Move an asset from ``sender`` to ``recipient``."""
        pass


class RewardIssuer(ABC):
    """Issuer of the fungible reward balance."""

    @abstractmethod
    def mint(self, principal: str, amount: int) -> None:
        """Credit ``amount`` reward units to ``principal``."""
        pass


class InMemoryCustody(CustodyProvider):
    """Dictionary-backed custody provider."""

    def __init__(self):
        self._owners: Dict[int, str] = {}

    def register(self, asset_id: int, owner: str) -> None:
        self._owners[asset_id] = owner

    def owner_of(self, asset_id: int) -> Optional[str]:
        return self._owners.get(asset_id)

    def transfer(self, sender: str, recipient: str, asset_id: int) -> None:
        if self._owners.get(asset_id) != sender:
            raise NotOwner(f"{sender} does not own asset {asset_id}")
        self._owners[asset_id] = recipient
        logger.debug(f"Asset {asset_id} moved from {sender} to {recipient}")


class InMemoryRewardIssuer(RewardIssuer):
    """Keeps reward balances and a log of every mint."""

    def __init__(self):
        self.balances: Dict[str, int] = {}
        self.mints: List[Tuple[str, int]] = []

    def mint(self, principal: str, amount: int) -> None:
        self.balances[principal] = self.balances.get(principal, 0) + amount
        self.mints.append((principal, amount))
        logger.debug(f"Minted {amount} to {principal}")

    def balance_of(self, principal: str) -> int:
        return self.balances.get(principal, 0)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now: Optional[int] = None):
        self.now = int(time.time()) if now is None else now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 0, days: int = 0, seconds_per_day: int = 86400) -> int:
        self.now += seconds + days * seconds_per_day
        return self.now
