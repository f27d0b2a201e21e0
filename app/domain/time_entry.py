"""
TimeEntry domain rules.

Lifecycle:
  active=True   - timer is running, end_time is empty
  active=False  - closed interval [start_time, end_time] (end_time may be
                  missing only for entries that were never started as a timer)

Only closed entries (end_time set) count towards statistics.
"""
from datetime import datetime, timedelta
from typing import Dict, Any

TIME_ENTRY_FIELDS = ("activity_id", "start_time", "end_time", "note", "active")

MINUTE = timedelta(minutes=1)


class TimeEntryValidationError(ValueError):
    pass


def validate_interval(start_time: datetime, end_time: datetime | None, active: bool) -> None:
    """Raises TimeEntryValidationError if the interval is inconsistent."""
    if active and end_time is not None:
        raise TimeEntryValidationError("An active time entry cannot have an end time")
    if end_time is not None and end_time < start_time:
        raise TimeEntryValidationError("End time must not be earlier than start time")


def duration(start_time: datetime, end_time: datetime | None) -> timedelta:
    """Длительность закрытой записи; для открытой - ноль."""
    if end_time is None:
        return timedelta(0)
    return end_time - start_time


def whole_minutes(total: timedelta) -> int:
    """Floor to whole minutes."""
    return total // MINUTE


class TimeEntry:
    @staticmethod
    def create(
        activity_id: int,
        start_time: datetime,
        end_time: datetime | None = None,
        note: str | None = None,
        active: bool = False,
    ) -> Dict[str, Any]:
        validate_interval(start_time, end_time, active)
        return {
            "activity_id": activity_id,
            "start_time": start_time,
            "end_time": end_time,
            "note": note,
            "active": active,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        return {key: changes[key] for key in TIME_ENTRY_FIELDS if key in changes}

    @staticmethod
    def stop(now: datetime) -> Dict[str, Any]:
        """Поля для закрытия активной записи"""
        return {"end_time": now, "active": False}
