"""
Projection of absolute instants onto a local calendar day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol

import pendulum
from pendulum import DateTime

from .time_slot import Slot


class LocalDayProtocol(Protocol):
    """Protocol describing the day context a time slot needs for local projections."""

    def time_of_instant(self, instant: datetime) -> time:
        """Return the local wall-clock time of ``instant``."""

    def date_of_instant(self, instant: datetime) -> date:
        """Return the local calendar date of ``instant``."""


@dataclass(frozen=True)
class LocalDay:
    """
    A calendar day in a specific time zone.

    Time zone resolution is delegated to pendulum.
    """
    timezone: str
    day: date

    def __post_init__(self):
        try:
            pendulum.timezone(self.timezone)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: '{self.timezone}'") from exc

    def _local(self, instant: datetime) -> DateTime:
        return pendulum.instance(instant, tz="UTC").in_timezone(self.timezone)

    def time_of_instant(self, instant: datetime) -> time:
        """Return the local wall-clock time of ``instant``."""
        return self._local(instant).time()

    def date_of_instant(self, instant: datetime) -> date:
        """Return the local calendar date of ``instant``."""
        return self._local(instant).date()

    def _wall_clock(self, local_time: time) -> DateTime:
        return pendulum.datetime(
            self.day.year,
            self.day.month,
            self.day.day,
            local_time.hour,
            local_time.minute,
            local_time.second,
            local_time.microsecond,
            tz=self.timezone
        )

    def at(self, local_time: time) -> DateTime:
        """
        Return the UTC instant of ``local_time`` on this day.

        Raises:
            ValueError: If ``local_time`` does not exist on this day because
                the clocks skip over it (daylight saving time gap)
        """
        local = self._wall_clock(local_time)
        if local.time().replace(tzinfo=None) != local_time.replace(tzinfo=None):
            raise ValueError(
                f"Local time {local_time.isoformat()} does not exist on {self.day.isoformat()} "
                f"in {self.timezone}"
            )
        return local.in_timezone("UTC")

    def start_of_day(self) -> DateTime:
        """First instant of this day, even where midnight is skipped."""
        return self._wall_clock(time(0, 0)).in_timezone("UTC")

    def end_of_day(self) -> DateTime:
        """First instant of the following day (exclusive end of this one)."""
        return self.start_of_day().in_timezone(self.timezone).add(days=1).in_timezone("UTC")

    def slot(self, start_time: time, end_time: time) -> Slot:
        """Build a slot between two wall-clock times of this day."""
        return Slot(start=self.at(start_time), end=self.at(end_time))

    def __str__(self) -> str:
        return f"{self.day.isoformat()} ({self.timezone})"
