"""Reward schedule: the ordered accrual segments the engine walks."""
from typing import Any, Iterable, Iterator, Mapping, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidConfiguration


class AccrualSegment(BaseModel):
    """A day window with its own accrual rate.

    Offsets are relative to the deposit, not calendar time. ``flat_rate`` is
    the per-day reward of a flat segment and the intercept of a ramp segment;
    ``ramp_slope`` is only read when ``is_ramp`` is set.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    flat_rate: int = 0
    ramp_slope: int = 0
    is_ramp: bool = False

    def rate_at(self, day: int) -> int:
        """Per-day rate of a ramp segment at a day offset."""
        return day * self.ramp_slope + self.flat_rate


SegmentLike = Union[AccrualSegment, Mapping[str, Any]]


def _coerce(segment: SegmentLike) -> AccrualSegment:
    if isinstance(segment, AccrualSegment):
        return segment
    return AccrualSegment(**segment)


class RewardSchedule:
    """Replace-all container for accrual segments.

    Segments are kept in insertion order, which is the walk order used by
    :func:`staking_vault.core.accrual.accrue`.
    """

    def __init__(self, segments: Iterable[SegmentLike] = ()):
        self._segments: Tuple[AccrualSegment, ...] = tuple(_coerce(s) for s in segments)

    def set_schedule(self, segments: Iterable[SegmentLike]) -> None:
        """Discard every configured segment and install ``segments``.

        Args:
            segments: Replacement segments, in walk order

        Raises:
            InvalidConfiguration: If ``segments`` is empty
        """
        try:
            replacement = tuple(_coerce(s) for s in segments)
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid segment: {e}") from e
        if not replacement:
            raise InvalidConfiguration("Reward schedule needs at least one segment")
        self._segments = replacement
        logger.info(f"Reward schedule replaced with {len(replacement)} segments")

    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> Tuple[AccrualSegment, ...]:
        return self._segments

    def __iter__(self) -> Iterator[AccrualSegment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)
