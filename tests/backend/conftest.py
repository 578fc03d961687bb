import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")

from taskflow.core import db as db_module  # noqa: E402
from taskflow.core.guard import Principal  # noqa: E402
from taskflow.main import app  # noqa: E402
from taskflow.services.credentials import credential_store  # noqa: E402

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh schema for tests that talk to the services directly.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Lifespan events are not run, so the app never connects to the real database.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create users directly through the credential store.
    """

    async def _create_user(password: str = "UserPass!23", name: str = "Test User"):
        email = f"user_{uuid.uuid4().hex[:8]}@example.com"
        user = await credential_store.create(name, email, password)
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def principal_factory(create_user):
    """
    Factory fixture returning (user, Principal) pairs for service-level tests.
    """

    async def _make():
        user, _ = await create_user()
        return user, Principal(id=user.id, name=user.name, email=user.email)

    return _make


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Register a fresh account over HTTP and return its Authorization header.
    The cookie set by registration is cleared so each request is authenticated
    only by the header it carries.
    """

    async def _get_headers(name: str = "Test User", password: str = "StrongPass!23"):
        email = f"user_{uuid.uuid4().hex[:8]}@example.com"
        resp = await client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        client.cookies.clear()
        token = resp.json()["data"]["accessToken"]
        user_id = resp.json()["data"]["user"]["id"]
        return {"Authorization": f"Bearer {token}"}, user_id

    return _get_headers
