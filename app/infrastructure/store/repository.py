"""
Generic repositories over the in-memory store.

Each entity kind gets its own Repository[Model] with the same capability set:
create / get / list_all / update / delete. Repositories never raise for a
missing id: get/update return None, delete returns False.
"""
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.time_entry import TimeEntry as TimeEntryDomain
from app.infrastructure.db.models import Activity, Category, TimeEntry, User
from app.infrastructure.db.session import Base
from app.utils.dates import Clock

ModelT = TypeVar("ModelT", bound=Base)


def session_clock(db: Session) -> Clock:
    """Часы, привязанные к сессии хранилищем (EntryStore.session)"""
    return db.info.get("clock", datetime.now)


class Repository(Generic[ModelT]):
    """
    CRUD over one ORM model

    Usage:
        >>> repo = CategoryRepository(db)
        >>> category = repo.create(name="Programming", icon="ri-code-line", color="#6D28D9")
        >>> repo.update(category.id, {"name": "Coding"})
    """

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def create(self, **fields: Any) -> ModelT:
        record = self.model(**fields)
        self.db.add(record)
        self.db.flush()  # Получить ID без commit
        return record

    def get(self, record_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def list_all(self) -> List[ModelT]:
        return list(self.db.execute(select(self.model).order_by(self.model.id)).scalars())

    def update(self, record_id: int, changes: Dict[str, Any]) -> Optional[ModelT]:
        record = self.get(record_id)
        if record is None:
            return None
        for key, value in changes.items():
            setattr(record, key, value)
        self.db.flush()
        return record

    def delete(self, record_id: int) -> bool:
        record = self.get(record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


class UserRepository(Repository[User]):
    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.execute(
            select(User).where(User.username == username)
        ).scalars().first()


class CategoryRepository(Repository[Category]):
    model = Category

    def exists_any(self) -> bool:
        return self.db.execute(select(Category.id).limit(1)).first() is not None


class ActivityRepository(Repository[Activity]):
    model = Activity

    def list_by_category(self, category_id: int) -> List[Activity]:
        return list(
            self.db.execute(
                select(Activity)
                .where(Activity.category_id == category_id)
                .order_by(Activity.id)
            ).scalars()
        )


class TimeEntryRepository(Repository[TimeEntry]):
    """
    Time entries with the single-active invariant.

    Activation always goes through set_active(), which closes the previously
    active entry before marking the new one, inside the caller's unit of work.
    """

    model = TimeEntry

    def __init__(self, db: Session):
        super().__init__(db)
        self.clock = session_clock(db)

    def list_by_activity(self, activity_id: int) -> List[TimeEntry]:
        return list(
            self.db.execute(
                select(TimeEntry)
                .where(TimeEntry.activity_id == activity_id)
                .order_by(TimeEntry.id)
            ).scalars()
        )

    def list_by_date_range(self, start: datetime, end: datetime) -> List[TimeEntry]:
        """Записи, у которых start_time попадает в [start, end] включительно"""
        return list(
            self.db.execute(
                select(TimeEntry)
                .where(TimeEntry.start_time >= start, TimeEntry.start_time <= end)
                .order_by(TimeEntry.start_time, TimeEntry.id)
            ).scalars()
        )

    def get_active(self) -> Optional[TimeEntry]:
        return self.db.execute(
            select(TimeEntry).where(TimeEntry.active.is_(True))
        ).scalars().first()

    def stop_active(self, now: datetime | None = None) -> Optional[TimeEntry]:
        """
        Закрыть активную запись: end_time = now, active = False

        Returns:
            Закрытая запись или None, если активной не было (ничего не меняется)
        """
        entry = self.get_active()
        if entry is None:
            return None
        for key, value in TimeEntryDomain.stop(now or self.clock()).items():
            setattr(entry, key, value)
        self.db.flush()
        return entry

    def set_active(self, entry: TimeEntry, now: datetime | None = None) -> TimeEntry:
        """
        Сделать запись единственной активной

        The previous active entry (if it is a different one) is stopped and
        flushed first, so at no point are two rows active.
        """
        current = self.get_active()
        if current is not None and current.id != entry.id:
            self.stop_active(now)
        entry.active = True
        entry.end_time = None
        self.db.flush()
        return entry

    def create(self, **fields: Any) -> TimeEntry:
        activate = bool(fields.pop("active", False))
        if activate:
            self.stop_active()
        entry = super().create(active=False, **fields)
        if activate:
            self.set_active(entry)
        return entry

    def update(self, record_id: int, changes: Dict[str, Any]) -> Optional[TimeEntry]:
        entry = self.get(record_id)
        if entry is None:
            return None

        changes = dict(changes)
        activate = changes.pop("active", None)
        for key, value in changes.items():
            setattr(entry, key, value)

        if activate and not entry.active:
            self.set_active(entry)
        elif activate is False and entry.active:
            # Снятие флага = остановка таймера; end_time из запроса сохраняется
            closed = TimeEntryDomain.stop(self.clock())
            if entry.end_time is not None:
                closed.pop("end_time")
            for key, value in closed.items():
                setattr(entry, key, value)
        self.db.flush()
        return entry
