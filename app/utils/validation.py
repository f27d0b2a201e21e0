"""
Validation utilities for path/query parameters and entity fields
"""
import re
from datetime import datetime

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class MalformedIdentifierError(ValueError):
    """Параметр пути/запроса не является целым числом или датой"""
    pass


def parse_id(value: str | int, entity: str) -> int:
    """
    Разобрать идентификатор сущности из параметра пути/запроса

    Args:
        value: Сырое значение ("12")
        entity: Имя сущности для сообщения об ошибке ("category")

    Returns:
        Положительное целое

    Raises:
        MalformedIdentifierError: если значение не положительное целое

    Example:
        >>> parse_id("12", "category")
        12
        >>> parse_id("abc", "category")
        MalformedIdentifierError: Invalid category ID
    """
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise MalformedIdentifierError(f"Invalid {entity} ID")
    if parsed <= 0:
        raise MalformedIdentifierError(f"Invalid {entity} ID")
    return parsed


def parse_datetime(value: str) -> datetime:
    """
    Разобрать дату/время из query-параметра (ISO 8601, допускается суффикс Z)

    Raises:
        MalformedIdentifierError: если строку нельзя разобрать
    """
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise MalformedIdentifierError("Invalid date format")


def validate_hex_color(value: str) -> str:
    """
    Валидация цвета в формате #RRGGBB

    Raises:
        ValueError: если формат неверный
    """
    if not HEX_COLOR_RE.match(value):
        raise ValueError(f"color must be a hex value like #6D28D9, got: {value}")
    return value


def require_text(value: str, field: str) -> str:
    """
    Обрезать пробелы и проверить что строка не пустая

    Raises:
        ValueError: если после strip строка пустая
    """
    value = value.strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value
