"""
Statistics windows: day / week / month, anchored to "now".

  day   - 00:00 today .. now
  week  - 00:00 of the most recent Sunday .. now
  month - 00:00 of the 1st of the month .. now
"""
from datetime import date, datetime, timedelta
from enum import Enum


class StatsWindow(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# date.weekday(): Monday=0 .. Sunday=6
WEEKDAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def parse_window(value: str | None) -> StatsWindow:
    """Unknown or missing values fall back to DAY."""
    try:
        return StatsWindow((value or "").strip().lower())
    except ValueError:
        return StatsWindow.DAY


def start_of_day(value: datetime | date) -> datetime:
    return datetime(value.year, value.month, value.day)


def window_start(now: datetime, window: StatsWindow) -> datetime:
    today = start_of_day(now)
    if window == StatsWindow.WEEK:
        days_since_sunday = (now.weekday() + 1) % 7
        return today - timedelta(days=days_since_sunday)
    if window == StatsWindow.MONTH:
        return today.replace(day=1)
    return today


def last_n_days(now: datetime, n: int = 7) -> list[datetime]:
    """Начала последних n календарных дней, от старого к сегодняшнему."""
    today = start_of_day(now)
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]


def weekday_abbr(day: datetime | date) -> str:
    return WEEKDAY_ABBR[day.weekday()]
