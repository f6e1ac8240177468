"""Evidence Manager - Pytest Configuration and Fixtures

Provides shared fixtures for all tests including database sessions,
test clients, and authenticated officers.
"""

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


# Set test environment before importing app modules
os.environ["EVIDENCE_MANAGER_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["API_JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["API_API_KEY"] = "test-api-key"

API_KEY = "test-api-key"
OFFICER_PASSWORD = "officerpassword123"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test.

    Uses SQLite in-memory with foreign keys enforced.
    """
    from core.database import Base
    from core.database.session import enable_sqlite_foreign_keys

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def file_store(tmp_path):
    """Evidence file store rooted in a temporary directory."""
    from core.storage import EvidenceFileStore

    return EvidenceFileStore(root=str(tmp_path / "evidences"))


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession, file_store) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session and file store overrides."""
    from api.dependencies import get_evidence_file_store
    from api.main import app
    from core.database.session import get_db

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_evidence_file_store] = lambda: file_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Api-Key": API_KEY},
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _persist(db_session: AsyncSession, entity):
    db_session.add(entity)
    await db_session.commit()
    await db_session.refresh(entity)
    return entity


@pytest_asyncio.fixture
async def officer(db_session: AsyncSession):
    """Create an investigator in the database."""
    from core.security import get_password_hash
    from tests.factories import OfficerFactory

    return await _persist(
        db_session,
        OfficerFactory.create(
            username="investigator",
            password_hash=get_password_hash(OFFICER_PASSWORD),
        ),
    )


@pytest_asyncio.fixture
async def other_officer(db_session: AsyncSession):
    """Create a second investigator who owns nothing of the first."""
    from tests.factories import OfficerFactory

    return await _persist(db_session, OfficerFactory.create(username="other-investigator"))


@pytest_asyncio.fixture
async def admin_officer(db_session: AsyncSession):
    """Create an administrator in the database."""
    from tests.factories import OfficerFactory

    return await _persist(db_session, OfficerFactory.create_administrator(username="admin"))


def _bearer(officer) -> dict[str, str]:
    from core.security import create_access_token

    token, _ = create_access_token(
        data={"sub": str(officer.id), "officer_type": officer.officer_type.value}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(officer) -> dict[str, str]:
    """Authorization headers of the investigator."""
    return _bearer(officer)


@pytest_asyncio.fixture
async def other_auth_headers(other_officer) -> dict[str, str]:
    return _bearer(other_officer)


@pytest_asyncio.fixture
async def admin_auth_headers(admin_officer) -> dict[str, str]:
    """Authorization headers of the administrator."""
    return _bearer(admin_officer)


@pytest_asyncio.fixture
async def test_case(db_session: AsyncSession, officer):
    """Create a case owned by the investigator, stamped a day ago."""
    from tests.factories import CaseFactory

    stamp = datetime.utcnow() - timedelta(days=1)
    return await _persist(
        db_session,
        CaseFactory.create(officer_id=officer.id, created_at=stamp, updated_at=stamp),
    )


@pytest_asyncio.fixture
async def test_evidence(db_session: AsyncSession, test_case):
    """Create an evidence attached to the test case."""
    from tests.factories import EvidenceFactory

    return await _persist(db_session, EvidenceFactory.create(case_id=test_case.id))


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
