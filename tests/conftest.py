"""Test fixtures — a fresh in-memory store and app per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test builds its own app from explicit Settings pointing at
   sqlite+aiosqlite in memory (StaticPool keeps the single connection,
   so the database lives as long as the engine).
2. Tables are created directly on app.state.engine; httpx's ASGITransport
   does not run the lifespan.
3. After the test the engine is disposed and the data is gone.

The auth pipeline is never mocked: tests sign up through the API and
send real bearer tokens.
"""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from kazi.config import Settings
from kazi.db.engine import create_tables
from kazi.main import create_app

TEST_SECRET = "test-secret-do-not-use-in-production"


def unique_phone() -> str:
    return f"07{uuid.uuid4().int % 10**8:08d}"


@pytest.fixture()
def settings():
    return Settings(
        jwt_secret=TEST_SECRET,
        database_url="sqlite+aiosqlite://",
        create_tables=False,
        environment="test",
    )


@pytest_asyncio.fixture()
async def app(settings):
    app = create_app(settings)
    await create_tables(app.state.engine)
    try:
        yield app
    finally:
        await app.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def register(client):
    """Sign a user up through the API.

    Returns the response body plus `headers` carrying the bearer token
    and the `password` used.
    """

    async def _register(role: str = "employee", **overrides) -> dict:
        body = {
            "name": f"{role.title()} {uuid.uuid4().hex[:6]}",
            "phone": unique_phone(),
            "location": "Nairobi",
            "password": "secret-pass-123",
            "role": role,
        }
        if role == "employee":
            body["specialization"] = "Plumbing"
        else:
            body["jobType"] = "Construction"
        body.update(overrides)

        r = await client.post("/api/auth/signup", json=body)
        assert r.status_code == 201, r.text
        data = r.json()
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        data["password"] = body["password"]
        return data

    return _register


@pytest_asyncio.fixture()
async def employer(register):
    return await register("employer")


@pytest_asyncio.fixture()
async def employee(register):
    return await register("employee")


@pytest.fixture()
def post_job(client):
    """Post a job as the given employer; returns the job dict."""

    async def _post_job(owner: dict, **overrides) -> dict:
        body = {
            "title": "Mason needed",
            "description": "Two weeks of block work",
            "location": "Kisumu",
            "phone": "0712 345 678",
        }
        body.update(overrides)
        r = await client.post("/api/jobs", json=body, headers=owner["headers"])
        assert r.status_code == 201, r.text
        return r.json()["job"]

    return _post_job
