import os

# Settings are read at import time; give them test values before `app` is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./stillwater-test-unused.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.database import Base, get_db, init_models
from app.main import app
from app.models import favorite, progress, session, teacher, user  # noqa: F401
from app.services.storage import DatabaseStorage


# ---------------------------------------------------------------------
# Storage-level fixtures (async tests)
# ---------------------------------------------------------------------

@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "stillwater.db"


@pytest.fixture
async def session_factory(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    await init_models(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def storage(session_factory):
    async with session_factory() as db:
        yield DatabaseStorage(db)


# ---------------------------------------------------------------------
# API fixtures (sync tests through TestClient)
# ---------------------------------------------------------------------

@pytest.fixture
def client(db_path):
    """
    TestClient bound to a fresh SQLite file:
    - tables created with a plain sync engine,
    - get_db overridden to hand out aiosqlite sessions on that file.
    """
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _get_db():
        async with factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, email="river@stillwater.io", password="calm-breath", name="River"):
    resp = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def listener(client):
    """A registered user: {"user": ..., "token": ..., "headers": ...}"""
    body = register(client)
    body["headers"] = auth_header(body["token"])
    return body


@pytest.fixture
def teacher_payload():
    return {
        "name": "Sarah Chen",
        "bio": "Continuous ambient soundscapes for deep rest.",
        "avatarUrl": None,
        "specialty": "Ambient Soundscapes",
    }


def make_session_payload(**overrides):
    payload = {
        "title": "Ocean Waves",
        "description": "Gentle ocean sounds to help you relax.",
        "category": "music",
        "duration": 20,
        "audioUrl": None,
        "imageUrl": None,
        "teacherId": None,
        "isPremium": False,
        "isFeatured": False,
    }
    payload.update(overrides)
    return payload
