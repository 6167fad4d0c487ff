"""Time source abstractions."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Clock interface used for timestamps and calendar comparisons."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""

    def today(self) -> date:
        """Return the current calendar date."""


@dataclass
class SystemClock(Clock):
    """Wall clock in a configured timezone."""

    timezone: ZoneInfo

    @classmethod
    def for_timezone(cls, timezone_name: str) -> "SystemClock":
        return cls(ZoneInfo(timezone_name))

    def now(self) -> datetime:
        return datetime.now(tz=self.timezone)

    def today(self) -> date:
        return self.now().date()
