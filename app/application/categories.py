"""
Category use cases - business logic for category operations
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from app.application.errors import ConflictError, NotFoundError
from app.domain.category import Category as CategoryDomain, DEFAULT_CATEGORIES
from app.infrastructure.db.models import Category
from app.infrastructure.store.repository import ActivityRepository, CategoryRepository
from app.utils.validation import require_text, validate_hex_color

logger = logging.getLogger(__name__)


class CategoryValidationError(ValueError):
    """Ошибка валидации категории"""
    pass


def _clean(field: str, value: Any) -> str:
    if value is None:
        raise CategoryValidationError(f"{field} must not be empty")
    try:
        if field == "color":
            return validate_hex_color(value)
        return require_text(value, field)
    except ValueError as e:
        raise CategoryValidationError(str(e))


class CreateCategoryUseCase:
    """Use case: Создать новую категорию"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)

    def execute(self, name: str, icon: str, color: str | None = None) -> Category:
        """
        Создать категорию

        Args:
            name: Название категории
            icon: CSS-класс иконки
            color: Цвет #RRGGBB (по умолчанию #6D28D9)

        Returns:
            Созданная категория
        """
        fields = CategoryDomain.create(
            name=_clean("name", name),
            icon=_clean("icon", icon),
            color=_clean("color", color) if color is not None else None,
        )
        category = self.repo.create(**fields)
        self.db.commit()

        logger.info("Category created: id=%d name=%s", category.id, category.name)
        return category


class UpdateCategoryUseCase:
    """Use case: Частично обновить категорию (name, icon, color)"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)

    def execute(self, category_id: int, **changes: Any) -> Category:
        changes = {
            key: _clean(key, value)
            for key, value in CategoryDomain.update(**changes).items()
        }

        category = self.repo.update(category_id, changes)
        if category is None:
            raise NotFoundError("Category not found")
        self.db.commit()
        return category


class DeleteCategoryUseCase:
    """
    Use case: Удалить категорию

    Категорию, у которой ещё есть активности, удалить нельзя.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)
        self.activities = ActivityRepository(db)

    def execute(self, category_id: int) -> None:
        if self.repo.get(category_id) is None:
            raise NotFoundError("Category not found")

        dependents = self.activities.list_by_category(category_id)
        if dependents:
            raise ConflictError(
                f"Category has {len(dependents)} activities; delete or move them first"
            )

        self.repo.delete(category_id)
        self.db.commit()
        logger.info("Category deleted: id=%d", category_id)


class EnsureDefaultCategoriesUseCase:
    """
    Use case: Создать стартовые категории при пустом хранилище

    Returns количество созданных категорий (0 если категории уже есть).
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)
        self.create_use_case = CreateCategoryUseCase(db)

    def execute(self) -> int:
        if self.repo.exists_any():
            return 0

        for seed in DEFAULT_CATEGORIES:
            self.create_use_case.execute(**seed)

        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
