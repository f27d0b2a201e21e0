"""
SQLAlchemy ORM models
"""
from datetime import datetime
from sqlalchemy import String, DateTime, Integer, Text, Boolean, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.category import DEFAULT_CATEGORY_COLOR
from app.infrastructure.db.session import Base


# sqlite_autoincrement: ids are never reused, even after the last row is deleted
_AUTOINCREMENT = {"sqlite_autoincrement": True}


class User(Base):
    __tablename__ = "users"
    __table_args__ = _AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)


class Category(Base):
    """
    Категория (группа активностей), например "Programming"
    """
    __tablename__ = "categories"
    __table_args__ = _AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[str] = mapped_column(String(64), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False, default=DEFAULT_CATEGORY_COLOR)


class Activity(Base):
    """
    Активность внутри категории, например "React Course"
    """
    __tablename__ = "activities"
    __table_args__ = _AUTOINCREMENT

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False, index=True
    )


class TimeEntry(Base):
    """
    Отрезок времени по активности.

    active=True означает "таймер идёт": end_time пустой.
    Во всём хранилище активной может быть только одна запись.
    """
    __tablename__ = "time_entries"
    __table_args__ = (
        Index(
            "uq_time_entries_single_active",
            "active",
            unique=True,
            sqlite_where=text("active = 1"),
            postgresql_where=text("active"),
        ),
        _AUTOINCREMENT,
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    activity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("activities.id"), nullable=False, index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
