"""
Statistics API endpoint (dashboard payload)
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Query

from app.api.deps import CamelModel, get_app_settings, get_store
from app.application.stats import StatsService
from app.config import Settings
from app.domain.stats_window import parse_window
from app.infrastructure.store.entry_store import EntryStore


router = APIRouter(prefix="/api/v1/stats", tags=["stats"])


class CategoryBreakdownResponse(CamelModel):
    id: int
    name: str
    icon: str
    color: str
    total_time: int  # minutes
    percentage: int


class RecentActivityResponse(CamelModel):
    id: int
    name: str
    description: str | None
    category_id: int
    category_name: str | None
    category_color: str | None
    category_icon: str | None
    total_time: int
    last_session: datetime


class DailyProgressResponse(CamelModel):
    date: datetime
    day_of_week: str
    is_today: bool
    total_time: int


class StatsResponse(CamelModel):
    time_range: str
    total_time: int
    sessions_count: int
    categories: list[CategoryBreakdownResponse]
    recent_activities: list[RecentActivityResponse]
    daily_progress: list[DailyProgressResponse]


@router.get("/", response_model=StatsResponse)
def get_stats(
    time_range: str | None = Query(None, alias="timeRange"),
    store: EntryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Сводка за day / week / month (неизвестное значение = day)"""
    with store.session() as db:
        service = StatsService(db, recent_limit=settings.RECENT_ACTIVITIES_LIMIT)
        stats = service.get_stats(parse_window(time_range))
    return StatsResponse.model_validate(stats)
