"""Service test fixtures — async DB, fakes and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - get_blob_store overridden to write into the test's tmp_path
    - auth_headers mints tokens the real identity layer accepts

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the seeding
      session and the request sessions see the same tables
    - Unit-level fixtures (repo, hasher, blob_store, service) use in-memory fakes
"""

import pytest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from person_api.api.dependencies import get_blob_store
from person_api.config import get_settings
from person_api.core.access_policy import PicturePolicy
from person_api.db.base import Base
from person_api.infrastructure.blob_store import FilesystemBlobStore
from person_api.infrastructure.database import get_db
from person_api.infrastructure.identity import create_access_token
from person_api.infrastructure.password_hasher import BcryptPasswordHasher
from person_api.main import app
from person_api.models.person import Person
from person_api.services.person_service import PersonService
from tests.services.fakes import FakeBlobStore, FakeHasher, FakePersonRepository


# ─── Unit fixtures (fakes) ──────────────────────────────────────

@pytest.fixture
def repo():
    return FakePersonRepository()


@pytest.fixture
def hasher():
    return FakeHasher()


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def service(repo, hasher, blob_store):
    return PersonService(
        repository=repo, hasher=hasher, blob_store=blob_store,
        picture_policy=PicturePolicy(min_bytes=1000),
    )


# ─── Integration fixtures (SQLite + HTTP) ───────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def picture_dir(tmp_path):
    return tmp_path / "pictures"


@pytest.fixture
async def client(test_session_factory, picture_dir):
    """FastAPI test client with DB and blob store overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: FilesystemBlobStore(picture_dir)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_person(test_db):
    """Insert a person directly into the test DB."""
    digest = await BcryptPasswordHasher(rounds=4).hash("original-pass")
    person = Person(name="Caio", email="caio@x.com", password_hash=digest)
    test_db.add(person)
    await test_db.commit()
    await test_db.refresh(person)
    return person


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a given person id."""
    def _headers(person_id: int) -> dict:
        token = create_access_token(person_id, get_settings())
        return {"Authorization": f"Bearer {token}"}
    return _headers
