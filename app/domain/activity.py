"""Activity domain entity - a trackable task inside one category"""
from typing import Dict, Any

ACTIVITY_FIELDS = ("name", "description", "category_id")


class Activity:
    @staticmethod
    def create(name: str, category_id: int, description: str | None = None) -> Dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "category_id": category_id,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        return {key: changes[key] for key in ACTIVITY_FIELDS if key in changes}
