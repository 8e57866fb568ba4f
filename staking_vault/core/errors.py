"""Errors raised by the staking vault."""


class StakingError(Exception):
    """Base class for every rejected vault operation."""


class NotOwner(StakingError):
    """Caller does not match the principal the operation requires."""


class AlreadyStaked(StakingError):
    """Asset already has a deposit record."""


class LockNotExpired(StakingError):
    """Withdrawal attempted before the lock duration has passed."""


class NothingToClaim(StakingError):
    """Settlement computed no reward."""


class InvalidConfiguration(StakingError):
    """Schedule or vault configuration is unusable."""
