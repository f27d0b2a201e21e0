"""
Errors shared by all use cases.

Validation errors are per module (CategoryValidationError, ...), all of
them subclass ValueError.
"""


class NotFoundError(LookupError):
    """Запись (или связанная запись по внешнему ключу) не найдена"""
    pass


class ConflictError(ValueError):
    """Операция нарушает ограничение хранилища (зависимые записи, дубликат)"""
    pass
