"""
Time entry API endpoints (records + running timer)
"""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import CamelModel, get_app_settings, get_store, path_id, query_datetime
from app.application.errors import NotFoundError
from app.application.time_entries import (
    CreateTimeEntryUseCase,
    UpdateTimeEntryUseCase,
    DeleteTimeEntryUseCase,
    StopActiveTimeEntryUseCase,
)
from app.config import Settings
from app.domain.time_entry import TimeEntryValidationError
from app.infrastructure.store.entry_store import EntryStore
from app.infrastructure.store.repository import TimeEntryRepository
from app.utils.dates import to_local_naive


router = APIRouter(prefix="/api/v1/time-entries", tags=["time-entries"])


# === Request/Response models ===

class CreateTimeEntryRequest(CamelModel):
    activity_id: int
    start_time: datetime
    end_time: datetime | None = None
    note: str | None = None
    active: bool = False


class UpdateTimeEntryRequest(CamelModel):
    activity_id: int | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    note: str | None = None
    active: bool | None = None


class TimeEntryResponse(CamelModel):
    id: int
    activity_id: int
    start_time: datetime
    end_time: datetime | None
    note: str | None
    active: bool


def _localize(fields: dict, settings: Settings) -> dict:
    """Aware datetimes -> naive local time of the store"""
    for key in ("start_time", "end_time"):
        if fields.get(key) is not None:
            fields[key] = to_local_naive(fields[key], settings.TIMEZONE)
    return fields


# === Endpoints ===

@router.get("/", response_model=list[TimeEntryResponse])
def list_time_entries(
    activity_id: str | None = Query(None, alias="activityId"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: EntryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Список записей: по активности, по диапазону дат (startDate..endDate
    включительно, по start_time) или все
    """
    aid = path_id(activity_id, "activity") if activity_id is not None else None
    date_range = None
    if aid is None and (start_date is not None or end_date is not None):
        if start_date is None or end_date is None:
            raise HTTPException(status_code=400, detail="Both startDate and endDate are required")
        date_range = (query_datetime(start_date, settings), query_datetime(end_date, settings))

    with store.session() as db:
        repo = TimeEntryRepository(db)
        if aid is not None:
            entries = repo.list_by_activity(aid)
        elif date_range is not None:
            entries = repo.list_by_date_range(*date_range)
        else:
            entries = repo.list_all()
        return [TimeEntryResponse.model_validate(e) for e in entries]


@router.get("/active", response_model=TimeEntryResponse)
def get_active_time_entry(store: EntryStore = Depends(get_store)):
    """Текущий запущенный таймер"""
    with store.session() as db:
        entry = TimeEntryRepository(db).get_active()
        if not entry:
            raise HTTPException(status_code=404, detail="No active time entry found")
        return TimeEntryResponse.model_validate(entry)


@router.post("/stop", response_model=TimeEntryResponse)
def stop_active_time_entry(store: EntryStore = Depends(get_store)):
    """Остановить таймер"""
    with store.session() as db:
        entry = StopActiveTimeEntryUseCase(db).execute()
    if not entry:
        raise HTTPException(status_code=404, detail="No active time entry found")
    return TimeEntryResponse.model_validate(entry)


@router.get("/{entry_id}", response_model=TimeEntryResponse)
def get_time_entry(entry_id: str, store: EntryStore = Depends(get_store)):
    eid = path_id(entry_id, "time entry")
    with store.session() as db:
        entry = TimeEntryRepository(db).get(eid)
        if not entry:
            raise HTTPException(status_code=404, detail="Time entry not found")
        return TimeEntryResponse.model_validate(entry)


@router.post("/", response_model=TimeEntryResponse, status_code=status.HTTP_201_CREATED)
def create_time_entry(
    req: CreateTimeEntryRequest,
    store: EntryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Создать запись (active=true запускает таймер и останавливает предыдущий)"""
    try:
        with store.session() as db:
            entry = CreateTimeEntryUseCase(db).execute(**_localize(req.model_dump(), settings))
    except TimeEntryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TimeEntryResponse.model_validate(entry)


@router.put("/{entry_id}", response_model=TimeEntryResponse)
def update_time_entry(
    entry_id: str,
    req: UpdateTimeEntryRequest,
    store: EntryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    eid = path_id(entry_id, "time entry")
    changes = _localize(req.model_dump(exclude_unset=True), settings)
    try:
        with store.session() as db:
            entry = UpdateTimeEntryUseCase(db).execute(eid, **changes)
    except TimeEntryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TimeEntryResponse.model_validate(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_time_entry(entry_id: str, store: EntryStore = Depends(get_store)):
    eid = path_id(entry_id, "time entry")
    try:
        with store.session() as db:
            DeleteTimeEntryUseCase(db).execute(eid)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
