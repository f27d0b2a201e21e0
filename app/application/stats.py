"""
Statistics read service: dashboard aggregates over a day / week / month window.

Pure read-layer: no mutations, recomputed on every call, no caching.

Payload blocks:
  1. total_time       - minutes of closed entries in the window
  2. sessions_count   - number of closed entries in the window
  3. categories       - per-category minutes and share of total_time
  4. recent_activities - up to N most recently worked-on activities
  5. daily_progress   - minutes per day for the last 7 calendar days

Open (active) entries are ignored everywhere until they are stopped.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

from sqlalchemy.orm import Session

from app.domain.stats_window import (
    StatsWindow,
    last_n_days,
    start_of_day,
    weekday_abbr,
    window_start,
)
from app.domain.time_entry import duration, whole_minutes
from app.infrastructure.store.repository import (
    ActivityRepository,
    CategoryRepository,
    TimeEntryRepository,
    session_clock,
)

DAILY_PROGRESS_DAYS = 7
RECENT_ACTIVITIES_LIMIT = 5


def compute_percentage(part_minutes: int, total_minutes: int) -> int:
    """Доля в процентах, округление half-up; 0 если total_minutes == 0."""
    if not total_minutes:
        return 0
    share = Decimal(part_minutes) * 100 / Decimal(total_minutes)
    return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _closed(entries: Iterable[Any]) -> list:
    return [e for e in entries if e.end_time is not None]


def _total_minutes(entries: Iterable[Any]) -> int:
    total = sum((duration(e.start_time, e.end_time) for e in entries), timedelta(0))
    return whole_minutes(total)


def compute_daily_progress(
    entries: Iterable[Any],
    now: datetime,
    activity_ids: set[int] | None = None,
    days: int = DAILY_PROGRESS_DAYS,
) -> list[dict]:
    """
    [{date, day_of_week, is_today, total_time}, ...] oldest first, today last.

    An entry counts for the day its start_time falls in.
    """
    closed = [
        e for e in _closed(entries)
        if e.start_time <= now
        and (activity_ids is None or e.activity_id in activity_ids)
    ]
    today = start_of_day(now)

    result = []
    for day in last_n_days(now, days):
        next_day = day + timedelta(days=1)
        day_entries = [e for e in closed if day <= e.start_time < next_day]
        result.append({
            "date": day,
            "day_of_week": weekday_abbr(day),
            "is_today": day == today,
            "total_time": _total_minutes(day_entries),
        })
    return result


def compute_stats(
    categories: Iterable[Any],
    activities: Iterable[Any],
    entries: Iterable[Any],
    now: datetime,
    window: StatsWindow = StatsWindow.DAY,
    recent_limit: int = RECENT_ACTIVITIES_LIMIT,
) -> dict[str, Any]:
    """
    Compute the dashboard payload from a snapshot of the store.

    `entries` may be any superset of the entries needed: the window and the
    7-day progress range are filtered here.
    """
    categories = list(categories)
    activities = list(activities)
    entries = list(entries)

    start = window_start(now, window)
    in_window = [e for e in entries if start <= e.start_time <= now]
    closed = _closed(in_window)

    total_time = _total_minutes(closed)

    # ── Per category ──
    category_stats = []
    for category in categories:
        activity_ids = {a.id for a in activities if a.category_id == category.id}
        minutes = _total_minutes(e for e in closed if e.activity_id in activity_ids)
        category_stats.append({
            "id": category.id,
            "name": category.name,
            "icon": category.icon,
            "color": category.color,
            "total_time": minutes,
            "percentage": compute_percentage(minutes, total_time),
        })

    # ── Recent activities ──
    categories_by_id = {c.id: c for c in categories}
    recent = []
    for activity in activities:
        activity_entries = [e for e in closed if e.activity_id == activity.id]
        if not activity_entries:
            continue
        last_session = max(e.start_time for e in activity_entries)
        category = categories_by_id.get(activity.category_id)
        recent.append({
            "id": activity.id,
            "name": activity.name,
            "description": activity.description,
            "category_id": activity.category_id,
            "category_name": category.name if category else None,
            "category_color": category.color if category else None,
            "category_icon": category.icon if category else None,
            "total_time": _total_minutes(activity_entries),
            "last_session": last_session,
        })
    recent.sort(key=lambda item: item["last_session"], reverse=True)

    return {
        "time_range": window.value,
        "total_time": total_time,
        "sessions_count": len(closed),
        "categories": category_stats,
        "recent_activities": recent[:recent_limit],
        "daily_progress": compute_daily_progress(entries, now),
    }


class StatsService:
    def __init__(self, db: Session, recent_limit: int = RECENT_ACTIVITIES_LIMIT):
        self.db = db
        self.recent_limit = recent_limit
        self.categories = CategoryRepository(db)
        self.activities = ActivityRepository(db)
        self.entries = TimeEntryRepository(db)

    def _now(self, now: datetime | None) -> datetime:
        return now if now is not None else session_clock(self.db)()

    def _entries_for(self, now: datetime, window: StatsWindow) -> list:
        """Записи, покрывающие и окно, и 7-дневный ряд"""
        earliest = min(window_start(now, window), last_n_days(now, DAILY_PROGRESS_DAYS)[0])
        return self.entries.list_by_date_range(earliest, now)

    def get_stats(self, window: StatsWindow = StatsWindow.DAY, now: datetime | None = None) -> dict[str, Any]:
        now = self._now(now)
        return compute_stats(
            self.categories.list_all(),
            self.activities.list_all(),
            self._entries_for(now, window),
            now,
            window,
            recent_limit=self.recent_limit,
        )

    def get_category_stats(
        self,
        category_id: int,
        window: StatsWindow = StatsWindow.DAY,
        now: datetime | None = None,
    ) -> dict[str, Any] | None:
        """
        Drill-down for one category: its row of the breakdown, its activity
        count and a daily-progress series limited to its activities.

        Returns None if the category does not exist.
        """
        category = self.categories.get(category_id)
        if category is None:
            return None

        now = self._now(now)
        stats = self.get_stats(window, now)
        row = next(c for c in stats["categories"] if c["id"] == category_id)
        activities = self.activities.list_by_category(category_id)
        activity_ids = {a.id for a in activities}

        return {
            **row,
            "time_range": window.value,
            "activities_count": len(activities),
            "daily_progress": compute_daily_progress(
                self._entries_for(now, window), now, activity_ids=activity_ids
            ),
        }
