"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import Settings, get_settings
from app.infrastructure.store.entry_store import EntryStore
from app.application.categories import EnsureDefaultCategoriesUseCase
from app.api.v1 import categories, activities, time_entries, stats, users

logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Catches everything the routes did not handle: log with traceback, answer a generic 500"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return JSONResponse({"detail": "Internal server error"}, status_code=500)


def create_app(settings: Settings | None = None, store: EntryStore | None = None) -> FastAPI:
    """
    Application factory - создаёт и настраивает FastAPI приложение

    Args:
        settings: Настройки (по умолчанию из окружения)
        store: Готовое хранилище (тесты); иначе создаётся по настройкам

    Returns:
        Настроенный FastAPI app
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    if store is None:
        store = EntryStore.from_settings(settings)
        if settings.SEED_DEFAULT_CATEGORIES:
            with store.session() as db:
                EnsureDefaultCategoriesUseCase(db).execute()

    app = FastAPI(
        title="Learning Tracker",
        debug=settings.DEBUG,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(ErrorLoggingMiddleware)

    # Routers
    app.include_router(categories.router)
    app.include_router(activities.router)
    app.include_router(time_entries.router)
    app.include_router(stats.router)
    app.include_router(users.router)

    # Health check
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    return app


if __name__ == "__main__":
    import uvicorn
    # In-memory store: все данные теряются при перезапуске
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=8000,
    )
