"""
Local wall-clock helpers.

All timestamps in the store are naive datetimes in the server's local time
(or in Settings.TIMEZONE when it is set).

Usage:
    from app.utils.dates import make_clock, to_local_naive

    now = make_clock("Europe/Moscow")()
    start = to_local_naive(datetime.fromisoformat("2026-03-01T06:00:00Z"), "")
"""
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def make_clock(tz_name: str = "") -> Clock:
    """Return a callable giving the current naive local time."""
    if not tz_name:
        return datetime.now

    tz = ZoneInfo(tz_name)

    def _now() -> datetime:
        return datetime.now(tz).replace(tzinfo=None)

    return _now


def to_local_naive(value: datetime, tz_name: str = "") -> datetime:
    """
    Привести datetime к наивному локальному времени.

    Naive values are assumed to already be local and returned unchanged.
    """
    if value.tzinfo is None:
        return value
    if tz_name:
        return value.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
    return value.astimezone().replace(tzinfo=None)
