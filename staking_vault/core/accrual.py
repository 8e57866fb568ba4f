"""Reward accrual engine."""
from typing import Iterable

from loguru import logger

from .schedule import AccrualSegment
from .store import DepositRecord

SECONDS_PER_DAY = 86400


def _ramp_area(segment: AccrualSegment, days: int) -> int:
    """Trapezoid accrual over the first ``days`` of a ramp segment.

    Division by two truncates toward zero, so a negative area removes half
    its magnitude rounded down.
    """
    rate_sum = segment.rate_at(segment.start) + segment.rate_at(segment.start + days)
    area = rate_sum * days
    if area >= 0:
        return area // 2
    return -((-area) // 2)


def accrue(elapsed_days_total: int, schedule: Iterable[AccrualSegment]) -> int:
    """Reward owed to a deposit that is ``elapsed_days_total`` days old.

    Segments are walked in schedule order. Each one contributes the part of
    its window the deposit has reached; the walk stops at the first segment
    starting at or after the elapsed day, or once every elapsed day has been
    consumed.

    Args:
        elapsed_days_total: Whole days since the deposit was made
        schedule: Accrual segments in walk order

    Returns:
        Total reward units accrued since the deposit
    """
    total = 0
    remaining = elapsed_days_total
    for segment in schedule:
        if elapsed_days_total <= segment.start:
            break

        if elapsed_days_total > segment.end:
            days = segment.end - segment.start
        else:
            days = elapsed_days_total - segment.start

        if segment.is_ramp:
            total += _ramp_area(segment, days)
        else:
            total += days * segment.flat_rate

        remaining -= days
        if remaining <= 0:
            break

    logger.debug(f"Accrued {total} units over {elapsed_days_total} days")
    return total


def elapsed_days(since: int, now: int, seconds_per_day: int = SECONDS_PER_DAY) -> int:
    """Whole days between two timestamps, never negative."""
    if now <= since:
        return 0
    return (now - since) // seconds_per_day


def unsettled_reward(record: DepositRecord, now: int, schedule: Iterable[AccrualSegment],
                     seconds_per_day: int = SECONDS_PER_DAY) -> int:
    """Reward accrued between the last settlement and ``now``.

    Both ends are re-derived from the deposit time, so settling at several
    intermediate points pays out exactly what a single settlement would.
    """
    segments = tuple(schedule)
    accrued_now = accrue(elapsed_days(record.deposited_at, now, seconds_per_day), segments)
    accrued_before = accrue(elapsed_days(record.deposited_at, record.settled_at, seconds_per_day), segments)
    return accrued_now - accrued_before
