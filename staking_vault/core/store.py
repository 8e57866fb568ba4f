"""Keyed storage of deposit records."""
from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator

from .errors import AlreadyStaked


class DepositRecord(BaseModel):
    """Custody record for one staked asset."""
    asset_id: int = Field(gt=0)
    owner: str = Field(min_length=1)
    deposited_at: int
    settled_at: int

    @model_validator(mode="after")
    def _settled_not_before_deposit(self) -> "DepositRecord":
        if self.settled_at < self.deposited_at:
            raise ValueError("settled_at cannot precede deposited_at")
        return self


class StakeRecordStore:
    """Map of asset id to its deposit record.

    The store applies no ownership or timing policy; callers decide whether
    an operation is allowed before touching it.
    """

    def __init__(self):
        self._records: Dict[int, DepositRecord] = {}

    def get(self, asset_id: int) -> Optional[DepositRecord]:
        return self._records.get(asset_id)

    def insert(self, asset_id: int, record: DepositRecord) -> None:
        """Store a new record.

        Raises:
            AlreadyStaked: If the asset already has a record
        """
        if asset_id in self._records:
            raise AlreadyStaked(f"Asset {asset_id} is already staked")
        self._records[asset_id] = record

    def remove(self, asset_id: int) -> None:
        self._records.pop(asset_id, None)

    def touch_settled_at(self, asset_id: int, new_time: int) -> None:
        """Advance the settlement timestamp of an existing record."""
        record = self._records[asset_id]
        self._records[asset_id] = record.model_copy(update={"settled_at": new_time})

    def __contains__(self, asset_id: int) -> bool:
        return asset_id in self._records

    def __len__(self) -> int:
        return len(self._records)
