"""Task API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskApiError → JSON responses
    - CORS allows only the configured frontend origin
    - Database manager opened on startup and disposed on shutdown via lifespan,
      held on app.state (no module-level client)

Design Decisions:
    - create_app factory: tests build an app around an injected manager,
      production builds one from settings
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from task_api.api.error_handlers import register_error_handlers
from task_api.api.routes import health, tasks
from task_api.config import Settings, get_settings
from task_api.infrastructure.database import DatabaseSessionManager
from task_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    db_manager: DatabaseSessionManager | None = None,
) -> FastAPI:
    """Build the application. A supplied db_manager is used instead of one from settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = db_manager or DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_tables:
            await manager.create_tables()
        app.state.db_manager = manager
        logger.info(f"Server running on {settings.port}")
        try:
            yield
        finally:
            logger.info("Task API shutting down")
            app.state.db_manager = None
            await manager.close()

    app = FastAPI(title="Task API", version="1.0.0", lifespan=lifespan)
    app.state.db_manager = db_manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.include_router(health.router)
    app.include_router(tasks.router)

    register_error_handlers(app)
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()
