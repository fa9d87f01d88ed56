"""API test fixtures — in-memory SQLite + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app is built around the test DatabaseSessionManager (no lifespan run)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - ASGITransport drives the app in-process; lifespan is skipped, so the
      manager is injected through create_app
"""

import pytest
from httpx import ASGITransport, AsyncClient

from task_api.config import Settings
from task_api.infrastructure.database import DatabaseSessionManager
from task_api.main import create_app
from task_api.models.task import Task

FRONTEND = "http://frontend.test"


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        frontend_url=FRONTEND,
        log_format="text",
    )


@pytest.fixture
def test_app(settings, db_manager):
    return create_app(settings, db_manager=db_manager)


@pytest.fixture
async def client(test_app):
    """FastAPI test client bound to the in-memory database."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seed_task(db_manager):
    """Insert one task directly into the test DB."""
    async with db_manager.session() as db:
        task = Task(title="Buy milk", color="#00FF00", completed=False)
        db.add(task)
        await db.commit()
        await db.refresh(task)
        return task
