"""
EntryStore - the explicitly owned, injectable store object.

Owns the engine, the session factory, the clock and the mutex that
serialises every unit of work. One EntryStore is created per application
(app.state.store) or per test.
"""
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings
from app.infrastructure.db.session import Base, build_engine
from app.utils.dates import Clock, make_clock

# Import models so that Base.metadata knows every table
from app.infrastructure.db import models  # noqa: F401

logger = logging.getLogger(__name__)


class EntryStore:
    def __init__(self, url: str = "sqlite://", in_memory: bool = True, clock: Clock | None = None):
        self.engine = build_engine(url, in_memory=in_memory)
        Base.metadata.create_all(self.engine)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )
        # Units of work never nest; each is entered and left on one thread
        self._lock = threading.Lock()
        self.clock: Clock = clock or datetime.now

    @classmethod
    def from_settings(cls, settings: Settings) -> "EntryStore":
        logger.info("Creating entry store (%s)", settings.DATABASE_URL)
        return cls(
            url=settings.DATABASE_URL,
            in_memory=settings.is_in_memory_db(),
            clock=make_clock(settings.TIMEZONE),
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Unit of work: exclusive access to the store

        Commits on success, rolls back on any exception and re-raises it.

        Usage:
            with store.session() as db:
                CategoryRepository(db).list_all()
        """
        with self._lock:
            db = self._session_factory(info={"clock": self.clock})
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def dispose(self) -> None:
        self.engine.dispose()
