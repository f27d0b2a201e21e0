"""
Category API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import CamelModel, get_app_settings, get_store, path_id
from app.api.v1.stats import DailyProgressResponse
from app.application.categories import (
    CreateCategoryUseCase,
    UpdateCategoryUseCase,
    DeleteCategoryUseCase,
    CategoryValidationError,
)
from app.application.errors import ConflictError, NotFoundError
from app.application.stats import StatsService
from app.config import Settings
from app.domain.stats_window import parse_window
from app.infrastructure.store.entry_store import EntryStore
from app.infrastructure.store.repository import CategoryRepository


router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


# === Request/Response models ===

class CreateCategoryRequest(CamelModel):
    name: str
    icon: str
    color: str | None = None  # по умолчанию #6D28D9


class UpdateCategoryRequest(CamelModel):
    name: str | None = None
    icon: str | None = None
    color: str | None = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    icon: str
    color: str


class CategoryStatsResponse(CamelModel):
    id: int
    name: str
    icon: str
    color: str
    time_range: str
    total_time: int
    percentage: int
    activities_count: int
    daily_progress: list[DailyProgressResponse]


# === Endpoints ===

@router.get("/", response_model=list[CategoryResponse])
def list_categories(store: EntryStore = Depends(get_store)):
    """Список всех категорий"""
    with store.session() as db:
        return [CategoryResponse.model_validate(c) for c in CategoryRepository(db).list_all()]


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, store: EntryStore = Depends(get_store)):
    cid = path_id(category_id, "category")
    with store.session() as db:
        category = CategoryRepository(db).get(cid)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return CategoryResponse.model_validate(category)


@router.get("/{category_id}/stats", response_model=CategoryStatsResponse)
def get_category_stats(
    category_id: str,
    time_range: str | None = Query(None, alias="timeRange"),
    store: EntryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Статистика по одной категории (drill-down с дашборда)"""
    cid = path_id(category_id, "category")
    with store.session() as db:
        service = StatsService(db, recent_limit=settings.RECENT_ACTIVITIES_LIMIT)
        stats = service.get_category_stats(cid, parse_window(time_range))
    if stats is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryStatsResponse.model_validate(stats)


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(req: CreateCategoryRequest, store: EntryStore = Depends(get_store)):
    """Создать новую категорию"""
    try:
        with store.session() as db:
            category = CreateCategoryUseCase(db).execute(
                name=req.name, icon=req.icon, color=req.color
            )
    except CategoryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(category_id: str, req: UpdateCategoryRequest, store: EntryStore = Depends(get_store)):
    cid = path_id(category_id, "category")
    try:
        with store.session() as db:
            category = UpdateCategoryUseCase(db).execute(cid, **req.model_dump(exclude_unset=True))
    except CategoryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, store: EntryStore = Depends(get_store)):
    """Удалить категорию (только без активностей)"""
    cid = path_id(category_id, "category")
    try:
        with store.session() as db:
            DeleteCategoryUseCase(db).execute(cid)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
