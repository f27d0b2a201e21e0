"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database (in-memory SQLite by default, state is lost on restart)
    DATABASE_URL: str = "sqlite://"

    # Application
    TIMEZONE: str = ""  # пусто = локальное время сервера
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Store
    SEED_DEFAULT_CATEGORIES: bool = True

    # Statistics
    RECENT_ACTIVITIES_LIMIT: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Игнорировать дополнительные поля из переменных окружения
    )

    def is_in_memory_db(self) -> bool:
        """True если DATABASE_URL указывает на SQLite в памяти"""
        url = self.DATABASE_URL
        return url in ("sqlite://", "sqlite:///:memory:") or url.endswith(":memory:")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
