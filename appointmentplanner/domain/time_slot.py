"""
Time slot value types.

A time slot is the half-open range ``[start, end)``: ``start`` is part of the
slot, ``end`` belongs to whatever follows. A slot whose start equals its end
has zero duration and is used as a sentinel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import pendulum
from pendulum import DateTime, Duration

from .exceptions import InvalidIntervalError

if TYPE_CHECKING:
    from .local_day import LocalDayProtocol


logger = logging.getLogger(__name__)


def _as_duration(delta: timedelta) -> Duration:
    return pendulum.duration(
        days=delta.days,
        seconds=delta.seconds,
        microseconds=delta.microseconds
    )


def _format_duration(duration: timedelta) -> str:
    """Render a duration as [-]HH:MM:SS, with microseconds when present."""
    total = timedelta.__floordiv__(duration, timedelta(microseconds=1))
    sign = "-" if total < 0 else ""
    whole_seconds, microseconds = divmod(abs(total), 1_000_000)
    hours, rest = divmod(whole_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if microseconds:
        text += f".{microseconds:06d}"
    return text


def _as_instant(value: datetime) -> DateTime:
    """Normalize a datetime to a UTC pendulum instant. Naive values are taken as UTC."""
    if not isinstance(value, datetime):
        raise TypeError(f"Expected a datetime, got {type(value).__name__}")
    return pendulum.instance(value, tz="UTC").in_timezone("UTC")


@runtime_checkable
class TimeSlot(Protocol):
    """
    Capability shared by every time slot representation.

    The protocol itself cannot be instantiated. Representations subclass it
    explicitly and only provide ``start`` and ``end`` (attributes or
    properties holding aware instants); everything else is derived from
    those two. Slots are ordered by duration alone: two slots of equal
    length compare as equal under ``compare_to`` and the ``<``/``>``
    operators, whatever their position in time. Keeping slots in time
    order is up to the caller, e.g. by list insertion order.

    Precondition: ``end >= start``. Representations that do not validate
    this (``Slot`` does) yield a negative duration.
    """
    start: datetime
    end: datetime

    def duration(self) -> Duration:
        """Return ``end - start``; zero for a sentinel slot."""
        return _as_duration(self.end - self.start)

    def duration_minutes(self) -> int:
        """Return the duration in whole minutes."""
        return int(self.duration().total_seconds() / 60)

    def is_sentinel(self) -> bool:
        """Check if this slot has zero duration."""
        return self.start == self.end

    def compare_to(self, other: TimeSlot) -> int:
        """Compare two slots by length: negative, zero or positive."""
        mine = self.duration()
        theirs = other.duration()
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.compare_to(other) >= 0

    def fits_duration(self, duration: timedelta) -> bool:
        """Check if this slot is long enough to accommodate ``duration``."""
        return self.duration() >= duration

    def contains_slot(self, other: TimeSlot) -> bool:
        """
        Check if ``other`` lies entirely within this slot.

        ``other`` must neither start earlier nor end later than this slot.
        """
        return self.start <= other.start and self.end >= other.end

    def start_time(self, day: LocalDayProtocol) -> time:
        """Wall-clock time of the start in the zone of ``day``."""
        return day.time_of_instant(self.start)

    def end_time(self, day: LocalDayProtocol) -> time:
        """Wall-clock time of the end in the zone of ``day``."""
        return day.time_of_instant(self.end)

    def start_date(self, day: LocalDayProtocol) -> date:
        """Calendar date on which the slot starts, in the zone of ``day``."""
        return day.date_of_instant(self.start)

    def end_date(self, day: LocalDayProtocol) -> date:
        """Calendar date on which the slot ends, in the zone of ``day``."""
        return day.date_of_instant(self.end)

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()}) ({_format_duration(self.duration())})"


@dataclass(frozen=True)
class Slot(TimeSlot):
    """
    Immutable time slot between two instants.

    Both instants are stored as UTC pendulum instants.

    Invariant: end must not be before start. A zero-length slot is allowed.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        start = _as_instant(self.start)
        end = _as_instant(self.end)
        if end < start:
            raise InvalidIntervalError(start, end)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        logger.debug("Created slot %s", self)

    @classmethod
    def between(cls, start: datetime, end: datetime) -> Slot:
        """Create a slot covering ``[start, end)``."""
        return cls(start=start, end=end)

    @classmethod
    def of_duration(cls, start: datetime, duration: timedelta) -> Slot:
        """Create a slot of the given length beginning at ``start``."""
        if duration < timedelta(0):
            raise InvalidIntervalError(start, start + duration)
        return cls(start=start, end=start + duration)

    @classmethod
    def sentinel(cls, at: datetime) -> Slot:
        """Create a zero-duration marker slot at ``at``."""
        return cls(start=at, end=at)
