import os
import uuid

TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["DB_GENERATE_SCHEMAS"] = "true"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient
from tortoise import Tortoise

from expohub.core import db as db_module
from expohub.core.security import create_access_token, hash_password
from expohub.main import app
from expohub.models.user import User

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
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Lifespan is not run; the fixture owns the database.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest.fixture
def live_client():
    """
    Starlette TestClient with the app lifespan running (tables are generated on
    startup). Used for WebSocket flows, where HTTP calls and sockets must share
    one event loop.
    """
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def create_admin():
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        user = await User.create(
            email=f"admin_{uuid.uuid4().hex[:6]}@expohub.io",
            name="Admin",
            password_hash=hash_password(password),
            role="admin",
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create regular users directly.
    """

    async def _create_user(password: str = "UserPass!23", name: str = "User") -> tuple[User, str]:
        user = await User.create(
            email=f"user_{uuid.uuid4().hex[:6]}@expohub.io",
            name=name,
            password_hash=hash_password(password),
            role="user",
        )
        return user, password

    return _create_user


@pytest.fixture
def auth_headers():
    """
    Build Authorization headers for a user without going through /auth/login.
    """

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(str(user.id), user.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/auth/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["auth_token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
