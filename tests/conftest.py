"""Shared test fixtures."""

import asyncio
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import Settings
from app.core.database import Base, build_session_factory
from app.core.security import get_current_user
from app.main import create_app
from app.models.freelancer_profile import FreelancerProfile
from app.models.user import User, UserRoleEnum

# Models must be imported so Base.metadata.create_all() sees all tables.
_ALL_MODELS = [User, FreelancerProfile]


def make_user(name="Ada Lovelace", email="ada@example.com", role=UserRoleEnum.freelancer):
    return User(
        user_id=str(uuid.uuid4()),
        name=name,
        email=email,
        password_hash="$2b$12$fakehash",
        role=role,
        is_active=True,
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY="test-secret",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        _env_file=None,
    )


@pytest.fixture
def upload_dir(settings):
    return Path(settings.UPLOAD_DIR)


@pytest.fixture
def current_user():
    """The authenticated caller; tests may swap `current_user["user"]`."""
    return {"user": make_user()}


@pytest.fixture
def client(settings, current_user):
    """TestClient with authentication replaced by a fixed freelancer."""
    app = create_app(settings)
    app.dependency_overrides[get_current_user] = lambda: current_user["user"]
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def anonymous_client(settings):
    """TestClient with the real bearer-token authentication."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_with_session(tmp_path):
    """Run `fn(session)` against a fresh SQLite database and return its result."""
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}"
    engine = create_async_engine(db_url, poolclass=NullPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    factory = build_session_factory(engine)

    def _run(fn):
        async def _inner():
            async with factory() as session:
                return await fn(session)
        return asyncio.run(_inner())

    yield _run
    asyncio.run(engine.dispose())
