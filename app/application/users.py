"""User use cases"""
import logging

from sqlalchemy.orm import Session

from app.application.errors import ConflictError
from app.auth import hash_password
from app.domain.user import User as UserDomain
from app.infrastructure.db.models import User
from app.infrastructure.store.repository import UserRepository

logger = logging.getLogger(__name__)


class UserValidationError(ValueError):
    pass


class CreateUserUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def execute(self, username: str, password: str) -> User:
        """
        Зарегистрировать пользователя

        Raises:
            UserValidationError: пустой username или пароль
            ConflictError: username уже занят
        """
        username = username.strip()
        if not username:
            raise UserValidationError("Username must not be empty")
        if not password:
            raise UserValidationError("Password must not be empty")

        if self.repo.get_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' is already taken")

        user = self.repo.create(**UserDomain.create(username, hash_password(password)))
        self.db.commit()

        logger.info("User created: id=%d", user.id)
        return user
