"""
Time entry use cases.

The single-active invariant itself lives in TimeEntryRepository.set_active();
use cases only validate input and check foreign keys.
"""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError
from app.domain.time_entry import (
    TimeEntry as TimeEntryDomain,
    TimeEntryValidationError,
    validate_interval,
)
from app.infrastructure.db.models import TimeEntry
from app.infrastructure.store.repository import ActivityRepository, TimeEntryRepository

logger = logging.getLogger(__name__)


class CreateTimeEntryUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TimeEntryRepository(db)
        self.activities = ActivityRepository(db)

    def execute(
        self,
        activity_id: int,
        start_time: datetime,
        end_time: datetime | None = None,
        note: str | None = None,
        active: bool = False,
    ) -> TimeEntry:
        """
        Создать запись времени

        Если active=True, текущая активная запись (если есть) закрывается
        в той же единице работы.

        Raises:
            TimeEntryValidationError: активная запись с end_time, end_time < start_time
            NotFoundError: активность не найдена
        """
        fields = TimeEntryDomain.create(activity_id, start_time, end_time, note, active)

        if self.activities.get(activity_id) is None:
            raise NotFoundError("Activity not found")

        entry = self.repo.create(**fields)
        self.db.commit()

        if entry.active:
            logger.info("Timer started: entry_id=%d activity_id=%d", entry.id, activity_id)
        return entry


class UpdateTimeEntryUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TimeEntryRepository(db)
        self.activities = ActivityRepository(db)

    def execute(self, entry_id: int, **changes: Any) -> TimeEntry:
        """
        Частично обновить запись

        Активация (active: true у неактивной записи) очищает end_time и
        закрывает предыдущую активную запись. active: false у запущенной
        записи останавливает таймер (end_time = now, если не передан).
        """
        changes = TimeEntryDomain.update(**changes)

        if "activity_id" in changes:
            if changes["activity_id"] is None:
                raise TimeEntryValidationError("activityId must not be empty")
            if self.activities.get(changes["activity_id"]) is None:
                raise NotFoundError("Activity not found")
        if "start_time" in changes and changes["start_time"] is None:
            raise TimeEntryValidationError("startTime must not be empty")
        if "active" in changes and changes["active"] is None:
            raise TimeEntryValidationError("active must be true or false")

        entry = self.repo.get(entry_id)
        if entry is None:
            raise NotFoundError("Time entry not found")

        activating = bool(changes.get("active")) and not entry.active
        will_be_active = changes.get("active", entry.active)
        validate_interval(
            changes.get("start_time", entry.start_time),
            None if activating else changes.get("end_time", entry.end_time),
            will_be_active,
        )

        entry = self.repo.update(entry_id, changes)
        self.db.commit()

        if activating:
            logger.info("Timer resumed: entry_id=%d", entry_id)
        return entry


class DeleteTimeEntryUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TimeEntryRepository(db)

    def execute(self, entry_id: int) -> None:
        if not self.repo.delete(entry_id):
            raise NotFoundError("Time entry not found")
        self.db.commit()
        logger.info("Time entry deleted: id=%d", entry_id)


class StopActiveTimeEntryUseCase:
    """
    Use case: Остановить таймер

    Returns закрытую запись или None, если активной записи нет.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = TimeEntryRepository(db)

    def execute(self) -> TimeEntry | None:
        entry = self.repo.stop_active()
        if entry is None:
            return None
        self.db.commit()

        logger.info("Timer stopped: entry_id=%d end_time=%s", entry.id, entry.end_time.isoformat())
        return entry
