# backend/carwash/core/weekly_schedule.py
"""
Weekly working-hours representation for workers.

A schedule maps each weekday to an optional open/close window of
wall-clock times in the business timezone. A missing weekday means the
worker is off that day. Stored as JSON on the worker row:

    {"monday": {"open": "08:00", "close": "18:00"}, "sunday": null, ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
import logging
from typing import Any, Dict, Mapping, Optional

from .enums import Weekday
from .timezone_utils import to_business_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeWindow:
    """Open/close wall-clock pair. ``open`` is strictly before ``close``."""

    open: time
    close: time

    def __post_init__(self) -> None:
        if self.open >= self.close:
            raise ValueError(f"Window open {self.open} must be before close {self.close}")

    @classmethod
    def parse(cls, raw: Any) -> Optional["TimeWindow"]:
        """Build a window from its JSON form. Malformed entries count as closed."""
        if not raw:
            return None
        try:
            return cls(time.fromisoformat(raw["open"]), time.fromisoformat(raw["close"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed schedule window {raw!r}: {e}")
            return None

    def contains(self, start: time, end: time) -> bool:
        return start >= self.open and end <= self.close

    def to_dict(self) -> Dict[str, str]:
        return {"open": self.open.strftime("%H:%M"), "close": self.close.strftime("%H:%M")}


class WeeklySchedule:
    """Weekday-keyed optional windows."""

    def __init__(self, windows: Optional[Mapping[Weekday, TimeWindow]] = None) -> None:
        self._windows: Dict[Weekday, TimeWindow] = dict(windows or {})

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "WeeklySchedule":
        windows: Dict[Weekday, TimeWindow] = {}
        for key, value in (raw or {}).items():
            try:
                day = Weekday(str(key).lower())
            except ValueError:
                logger.warning(f"Ignoring unknown weekday key {key!r} in schedule")
                continue
            window = TimeWindow.parse(value)
            if window is not None:
                windows[day] = window
        return cls(windows)

    def window_for(self, weekday: Weekday) -> Optional[TimeWindow]:
        return self._windows.get(weekday)

    def working_days(self) -> list[Weekday]:
        return [day for day in Weekday if day in self._windows]

    def to_dict(self) -> Dict[str, Optional[Dict[str, str]]]:
        """Full seven-day JSON form, with ``None`` for days off."""
        return {
            day.value: (self._windows[day].to_dict() if day in self._windows else None)
            for day in Weekday
        }

    def __eq__(self, other: object) -> bool:
        return isinstance(other, WeeklySchedule) and self._windows == other._windows

    def __repr__(self) -> str:
        return f"<WeeklySchedule days={[d.value for d in self.working_days()]}>"


def fits_window(schedule: WeeklySchedule, start: datetime, end: datetime) -> bool:
    """
    Check that [start, end) sits fully inside the start day's window.

    Both instants are converted to business wall-clock time. The window is
    anchored to the start's calendar date; an interval ending on a later
    date never fits. ``end == close`` fits.
    """
    local_start = to_business_time(start)
    local_end = to_business_time(end)

    if local_end.date() != local_start.date():
        return False

    window = schedule.window_for(Weekday.from_index(local_start.weekday()))
    if window is None:
        return False

    return window.contains(local_start.time(), local_end.time())
