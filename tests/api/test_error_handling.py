"""Error Handling — store failures, unhandled errors, CORS policy and health probes.

Invariants:
    - Any SQLAlchemy failure becomes 503 {"error": "Database unavailable"} on every route
    - Unhandled exceptions become 500 {"error": "Internal server error"}
    - Only the configured frontend origin gets CORS headers
"""

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from task_api.api.routes.tasks import get_task_repository
from task_api.core.errors import DatabaseError
from task_api.infrastructure.database import get_db
from task_api.infrastructure.task_repository import SqlTaskRepository

FRONTEND = "http://frontend.test"


def _lost_connection():
    return OperationalError("SELECT 1", {}, Exception("connection lost"))


class FailingRepository(SqlTaskRepository):
    """Every store call fails the way a dropped connection does."""

    async def find_many(self):
        raise _lost_connection()

    async def find_unique(self, task_id):
        raise _lost_connection()

    async def create(self, title, color):
        raise _lost_connection()

    async def update(self, task_id, fields):
        raise _lost_connection()

    async def delete(self, task_id):
        raise _lost_connection()


class ExplodingRepository(SqlTaskRepository):
    async def find_many(self):
        raise RuntimeError("bug")


@pytest.fixture
def failing_store(test_app):
    def override(db: AsyncSession = Depends(get_db)):
        return FailingRepository(db)

    test_app.dependency_overrides[get_task_repository] = override
    yield
    test_app.dependency_overrides.clear()


@pytest.mark.parametrize("method, path, body", [
    ("GET", "/tasks", None),
    ("GET", "/tasks/1", None),
    ("POST", "/tasks", {"title": "T", "color": "#fff"}),
    ("PUT", "/tasks/1", {"completed": True}),
    ("DELETE", "/tasks/1", None),
])
async def test_store_failure_returns_503_on_every_route(
    client, failing_store, method, path, body,
):
    res = await client.request(method, path, json=body)
    assert res.status_code == 503
    assert res.json() == {"error": "Database unavailable"}


async def test_validation_runs_before_store_is_touched(client, failing_store):
    res = await client.post("/tasks", json={})
    assert res.status_code == 400


async def test_session_manager_maps_sqlalchemy_errors(db_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with db_manager.session():
            raise _lost_connection()
    assert exc_info.value.http_status == 503
    assert exc_info.value.operation == "execute"


async def test_unhandled_error_returns_opaque_500(test_app):
    def override(db: AsyncSession = Depends(get_db)):
        return ExplodingRepository(db)

    test_app.dependency_overrides[get_task_repository] = override
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        res = await c.get("/tasks")
    test_app.dependency_overrides.clear()
    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}


# ─── CORS ────────────────────────────────────────────────────────

async def test_cors_allows_frontend_origin(client):
    res = await client.get("/tasks", headers={"Origin": FRONTEND})
    assert res.headers["access-control-allow-origin"] == FRONTEND


async def test_cors_rejects_other_origins(client):
    res = await client.get("/tasks", headers={"Origin": "http://evil.test"})
    assert "access-control-allow-origin" not in res.headers


async def test_cors_preflight_limits_methods_and_headers(client):
    res = await client.options(
        "/tasks",
        headers={
            "Origin": FRONTEND,
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert res.status_code == 200
    allowed = res.headers["access-control-allow-methods"]
    assert {m.strip() for m in allowed.split(",")} == {"GET", "POST", "PUT", "DELETE"}


async def test_cors_preflight_rejects_patch(client):
    res = await client.options(
        "/tasks",
        headers={"Origin": FRONTEND, "Access-Control-Request-Method": "PATCH"},
    )
    assert res.status_code == 400


# ─── health ──────────────────────────────────────────────────────

async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json() == {"status": "ready", "checks": {"database": "healthy"}}


async def test_readiness_without_database(test_app):
    test_app.state.db_manager = None
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        res = await c.get("/health/ready")
    assert res.status_code == 503


async def test_error_logs_carry_request_context(client, caplog):
    with caplog.at_level("WARNING", logger="task_api.api.error_handlers"):
        await client.get("/tasks/999")
        await client.post("/tasks", json={})
    records = [r for r in caplog.records if r.name == "task_api.api.error_handlers"]
    assert [(r.error_code, r.method, r.path) for r in records] == [
        ("RESOURCE_NOT_FOUND", "GET", "/tasks/999"),
        ("VALIDATION_ERROR", "POST", "/tasks"),
    ]


async def test_unhandled_error_logged_as_internal(test_app, caplog):
    def override(db: AsyncSession = Depends(get_db)):
        return ExplodingRepository(db)

    test_app.dependency_overrides[get_task_repository] = override
    with caplog.at_level("ERROR", logger="task_api.api.error_handlers"):
        async with AsyncClient(
            transport=ASGITransport(app=test_app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            await c.get("/tasks")
    test_app.dependency_overrides.clear()
    record = next(
        r for r in caplog.records if r.name == "task_api.api.error_handlers"
    )
    assert record.error_code == "INTERNAL_ERROR"
    assert (record.method, record.path) == ("GET", "/tasks")
    assert record.exc_info is not None
