import os
import uuid

# Settings are cached on first import; point them at test values before that happens
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-feedback-wall-tests")
os.environ.setdefault("PUBLIC_BASE_URL", "http://example.test")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import feedback_wall.models  # noqa: F401
from feedback_wall.core.security import create_access_token
from feedback_wall.database import Base, create_engine, get_db
from feedback_wall.main import app


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_auth_headers(email: str, user_id: uuid.UUID | None = None, **metadata) -> dict:
    token = create_access_token(user_id or uuid.uuid4(), email, metadata)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers():
    return make_auth_headers("alice@example.com", display_name="Alice")


@pytest.fixture
def bob_headers():
    return make_auth_headers("bob@example.com")


@pytest.fixture
def create_page(client):
    async def _create(headers: dict, title: str, **extra) -> dict:
        response = await client.post("/api/v1/pages/", json={"title": title, **extra}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def make_headers():
    return make_auth_headers
