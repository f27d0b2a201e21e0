"""Activity use cases"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from app.application.errors import ConflictError, NotFoundError
from app.domain.activity import Activity as ActivityDomain
from app.infrastructure.db.models import Activity
from app.infrastructure.store.repository import (
    ActivityRepository,
    CategoryRepository,
    TimeEntryRepository,
)

logger = logging.getLogger(__name__)


class ActivityValidationError(ValueError):
    pass


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ActivityValidationError("Activity name must not be empty")
    return name


class CreateActivityUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityRepository(db)
        self.categories = CategoryRepository(db)

    def execute(self, name: str, category_id: int, description: str | None = None) -> Activity:
        name = _clean_name(name)

        if self.categories.get(category_id) is None:
            raise NotFoundError("Category not found")

        activity = self.repo.create(**ActivityDomain.create(name, category_id, description))
        self.db.commit()

        logger.info("Activity created: id=%d category_id=%d", activity.id, category_id)
        return activity


class UpdateActivityUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityRepository(db)
        self.categories = CategoryRepository(db)

    def execute(self, activity_id: int, **changes: Any) -> Activity:
        changes = ActivityDomain.update(**changes)

        if "name" in changes:
            changes["name"] = _clean_name(changes["name"])

        if "category_id" in changes:
            if changes["category_id"] is None:
                raise ActivityValidationError("categoryId must not be empty")
            if self.categories.get(changes["category_id"]) is None:
                raise NotFoundError("Category not found")

        activity = self.repo.update(activity_id, changes)
        if activity is None:
            raise NotFoundError("Activity not found")
        self.db.commit()
        return activity


class DeleteActivityUseCase:
    """Активность с записями времени удалить нельзя"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityRepository(db)
        self.entries = TimeEntryRepository(db)

    def execute(self, activity_id: int) -> None:
        if self.repo.get(activity_id) is None:
            raise NotFoundError("Activity not found")

        dependents = self.entries.list_by_activity(activity_id)
        if dependents:
            raise ConflictError(
                f"Activity has {len(dependents)} time entries; delete them first"
            )

        self.repo.delete(activity_id)
        self.db.commit()
        logger.info("Activity deleted: id=%d", activity_id)
