"""
Category domain entity

Категории группируют активности (Programming, Reading, Languages)
"""
from typing import Dict, Any

DEFAULT_CATEGORY_COLOR = "#6D28D9"

# Seed categories, created on startup when the store is empty
DEFAULT_CATEGORIES = [
    {"name": "Programming", "icon": "ri-code-line", "color": "#6D28D9"},
    {"name": "Reading", "icon": "ri-book-open-line", "color": "#10B981"},
    {"name": "Languages", "icon": "ri-translate-2", "color": "#F59E0B"},
]

CATEGORY_FIELDS = ("name", "icon", "color")


class Category:
    """
    Category domain entity - builds field sets for category records
    """

    @staticmethod
    def create(name: str, icon: str, color: str | None = None) -> Dict[str, Any]:
        """
        Поля новой категории

        Args:
            name: Название категории
            icon: CSS-класс иконки (например "ri-code-line")
            color: Цвет #RRGGBB (по умолчанию DEFAULT_CATEGORY_COLOR)
        """
        return {
            "name": name,
            "icon": icon,
            "color": color or DEFAULT_CATEGORY_COLOR,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        """Изменяемые поля (name, icon, color); остальное отбрасывается"""
        return {key: changes[key] for key in CATEGORY_FIELDS if key in changes}
