"""
Tests for activity use cases, including category foreign-key checks
"""
from datetime import datetime

import pytest

from app.application.activities import (
    ActivityValidationError,
    CreateActivityUseCase,
    DeleteActivityUseCase,
    UpdateActivityUseCase,
)
from app.application.categories import CreateCategoryUseCase
from app.application.errors import ConflictError, NotFoundError
from app.application.time_entries import CreateTimeEntryUseCase
from app.infrastructure.store.repository import ActivityRepository


@pytest.fixture
def category(db_session):
    return CreateCategoryUseCase(db_session).execute(name="Programming", icon="ri-code-line")


def test_create_activity(db_session, category):
    activity = CreateActivityUseCase(db_session).execute(
        name="React Course", category_id=category.id, description="Hooks"
    )
    assert activity.id > 0
    assert activity.category_id == category.id
    assert activity.description == "Hooks"


def test_create_with_unknown_category_creates_nothing(db_session):
    with pytest.raises(NotFoundError, match="Category"):
        CreateActivityUseCase(db_session).execute(name="X", category_id=9999)
    assert ActivityRepository(db_session).list_all() == []


def test_create_with_empty_name(db_session, category):
    with pytest.raises(ActivityValidationError):
        CreateActivityUseCase(db_session).execute(name=" ", category_id=category.id)


def test_update_moves_to_other_category(db_session, category):
    other = CreateCategoryUseCase(db_session).execute(name="Reading", icon="ri-book-open-line")
    activity = CreateActivityUseCase(db_session).execute(name="Book", category_id=category.id)

    updated = UpdateActivityUseCase(db_session).execute(activity.id, category_id=other.id)

    assert updated.category_id == other.id
    assert updated.name == "Book"


def test_update_to_unknown_category(db_session, category):
    activity = CreateActivityUseCase(db_session).execute(name="Book", category_id=category.id)
    with pytest.raises(NotFoundError, match="Category"):
        UpdateActivityUseCase(db_session).execute(activity.id, category_id=9999)
    assert ActivityRepository(db_session).get(activity.id).category_id == category.id


def test_update_missing_activity(db_session):
    with pytest.raises(NotFoundError, match="Activity"):
        UpdateActivityUseCase(db_session).execute(9999, name="x")


def test_update_clears_description(db_session, category):
    activity = CreateActivityUseCase(db_session).execute(
        name="Book", category_id=category.id, description="old"
    )
    updated = UpdateActivityUseCase(db_session).execute(activity.id, description=None)
    assert updated.description is None


def test_delete_with_time_entries_rejected(db_session, category):
    activity = CreateActivityUseCase(db_session).execute(name="Book", category_id=category.id)
    CreateTimeEntryUseCase(db_session).execute(
        activity_id=activity.id, start_time=datetime(2026, 3, 18, 9, 0)
    )
    with pytest.raises(ConflictError, match="time entries"):
        DeleteActivityUseCase(db_session).execute(activity.id)


def test_delete_activity(db_session, category):
    activity = CreateActivityUseCase(db_session).execute(name="Book", category_id=category.id)
    DeleteActivityUseCase(db_session).execute(activity.id)
    assert ActivityRepository(db_session).get(activity.id) is None
    with pytest.raises(NotFoundError):
        DeleteActivityUseCase(db_session).execute(activity.id)
