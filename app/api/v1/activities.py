"""
Activity API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import CamelModel, get_store, path_id
from app.application.activities import (
    CreateActivityUseCase,
    UpdateActivityUseCase,
    DeleteActivityUseCase,
    ActivityValidationError,
)
from app.application.errors import ConflictError, NotFoundError
from app.infrastructure.store.entry_store import EntryStore
from app.infrastructure.store.repository import ActivityRepository


router = APIRouter(prefix="/api/v1/activities", tags=["activities"])


# === Request/Response models ===

class CreateActivityRequest(CamelModel):
    name: str
    category_id: int
    description: str | None = None


class UpdateActivityRequest(CamelModel):
    name: str | None = None
    category_id: int | None = None
    description: str | None = None


class ActivityResponse(CamelModel):
    id: int
    name: str
    description: str | None
    category_id: int


# === Endpoints ===

@router.get("/", response_model=list[ActivityResponse])
def list_activities(
    category_id: str | None = Query(None, alias="categoryId"),
    store: EntryStore = Depends(get_store),
):
    """Список активностей (опционально - только одной категории)"""
    cid = path_id(category_id, "category") if category_id is not None else None
    with store.session() as db:
        repo = ActivityRepository(db)
        activities = repo.list_by_category(cid) if cid is not None else repo.list_all()
        return [ActivityResponse.model_validate(a) for a in activities]


@router.get("/{activity_id}", response_model=ActivityResponse)
def get_activity(activity_id: str, store: EntryStore = Depends(get_store)):
    aid = path_id(activity_id, "activity")
    with store.session() as db:
        activity = ActivityRepository(db).get(aid)
        if not activity:
            raise HTTPException(status_code=404, detail="Activity not found")
        return ActivityResponse.model_validate(activity)


@router.post("/", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
def create_activity(req: CreateActivityRequest, store: EntryStore = Depends(get_store)):
    try:
        with store.session() as db:
            activity = CreateActivityUseCase(db).execute(
                name=req.name,
                category_id=req.category_id,
                description=req.description,
            )
    except ActivityValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ActivityResponse.model_validate(activity)


@router.put("/{activity_id}", response_model=ActivityResponse)
def update_activity(activity_id: str, req: UpdateActivityRequest, store: EntryStore = Depends(get_store)):
    aid = path_id(activity_id, "activity")
    try:
        with store.session() as db:
            activity = UpdateActivityUseCase(db).execute(aid, **req.model_dump(exclude_unset=True))
    except ActivityValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ActivityResponse.model_validate(activity)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_activity(activity_id: str, store: EntryStore = Depends(get_store)):
    """Удалить активность (только без записей времени)"""
    aid = path_id(activity_id, "activity")
    try:
        with store.session() as db:
            DeleteActivityUseCase(db).execute(aid)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
