"""
FastAPI dependencies (store, settings, parameter parsing)
"""
from datetime import datetime

from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.config import Settings
from app.infrastructure.store.entry_store import EntryStore
from app.utils.dates import to_local_naive
from app.utils.validation import MalformedIdentifierError, parse_datetime, parse_id


class CamelModel(BaseModel):
    """
    Base for request/response models: camelCase in JSON, snake_case in Python

    Input accepts both spellings.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def get_store(request: Request) -> EntryStore:
    """
    Dependency для FastAPI - хранилище приложения

    Единица работы открывается в самом endpoint, чтобы блокировка
    хранилища бралась и отпускалась в одном потоке.

    Usage:
        @router.get("/categories")
        def list_categories(store: EntryStore = Depends(get_store)):
            with store.session() as db:
                ...
    """
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def path_id(value: str, entity: str) -> int:
    """Разобрать ID из пути/query, 400 если это не положительное целое"""
    try:
        return parse_id(value, entity)
    except MalformedIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def query_datetime(value: str, settings: Settings) -> datetime:
    """Разобрать дату из query, 400 если формат неверный"""
    try:
        return to_local_naive(parse_datetime(value), settings.TIMEZONE)
    except MalformedIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
