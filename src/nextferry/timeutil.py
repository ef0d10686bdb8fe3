"""Service-day time handling and display formatting."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from .models import ScheduleType

logger = logging.getLogger(__name__)

NOON = 12 * 60
# WSDOT rolls the schedule day over at 2:30 am, not midnight
MORNING_CUTOFF = 150
MINUTES_PER_DAY = 24 * 60


def adjust_time(t: int) -> int:
    """Shift early-morning times past 24h so they sort after the previous evening."""
    return t + MINUTES_PER_DAY if t < MORNING_CUTOFF else t


def _minutes(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


class Clock:
    """
    Source of "now" and "today" for schedule lookups.

    The schedule type for today is computed once and memoised. Nothing
    invalidates it automatically: callers must call reset() when the
    service day may have rolled over.
    """

    def __init__(self, now_func: Callable[[], datetime] = datetime.now):
        """
        Initialize the clock.

        Args:
            now_func: Returns the current wall-clock datetime. Override in tests
                      to pin the time.
        """
        self._now_func = now_func
        self._schedule_type: Optional[ScheduleType] = None

    def now(self) -> int:
        """Current time as adjusted minutes past midnight."""
        return adjust_time(_minutes(self._now_func()))

    def todays_schedule_type(self) -> ScheduleType:
        """
        Weekday or weekend, for the service day in progress.

        Before the morning cutoff we are still in the previous calendar day,
        so a Saturday at 1:00 am is treated as Friday.
        """
        if self._schedule_type is None:
            today = self._now_func()
            if _minutes(today) < MORNING_CUTOFF:
                today = today - timedelta(days=1)
            # Monday is 0, Saturday 5, Sunday 6
            if today.weekday() >= 5:
                self._schedule_type = ScheduleType.WEEKEND
            else:
                self._schedule_type = ScheduleType.WEEKDAY
            logger.debug(f"Today's schedule type is {self._schedule_type.value}")
        return self._schedule_type

    def reset(self) -> None:
        """Forget the memoised schedule type."""
        self._schedule_type = None


class TimeFormatter:
    """Renders service times as clock text, in 12 or 24 hour form."""

    def __init__(self, as12: bool = True):
        self.as12 = as12
        # Keyed by raw time; each format needs its own cache
        self._cache12: Dict[int, str] = {}
        self._cache24: Dict[int, str] = {}

    def display12(self, t: int) -> str:
        if t not in self._cache12:
            hours, minutes = divmod(t, 60)
            if hours >= 24:
                hours -= 24
            if hours > 12:
                hours -= 12
            if hours == 0:
                hours = 12
            self._cache12[t] = f"{hours}:{minutes:02d}"
        return self._cache12[t]

    def display24(self, t: int) -> str:
        if t not in self._cache24:
            hours, minutes = divmod(t, 60)
            if hours >= 24:
                hours -= 24
            self._cache24[t] = f"{hours:02d}:{minutes:02d}"
        return self._cache24[t]

    def time_string(self, t: int) -> str:
        """Format t with whichever form is currently selected."""
        return self.display12(t) if self.as12 else self.display24(t)


_default_formatter = TimeFormatter()


def time_string(t: int) -> str:
    """Format a service time using the process-wide format setting."""
    return _default_formatter.time_string(t)


def set_time_format(as12: bool) -> None:
    """Switch the process-wide display format."""
    _default_formatter.as12 = as12
