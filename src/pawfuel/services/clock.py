"""Clock abstractions."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


@dataclass
class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(tz=UTC)


def local_today(clock: Clock, timezone_name: str) -> date:
    """Return the calendar day in the owner's timezone."""
    return clock.now().astimezone(ZoneInfo(timezone_name)).date()
