"""
Pytest fixtures for test database, client, and seed records.

Each test gets a fresh in-memory SQLite database (aiosqlite) with the schema
created up front and dropped afterwards. Foreign keys are enforced as they
are on PostgreSQL.
"""

import os
from typing import AsyncGenerator

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from eventdesk.main import app
from eventdesk.db.base import Base
from eventdesk.db.gateway import Repository
from eventdesk.db.session import build_engine, ensure_schema, get_db
from eventdesk.models import Employee, Event, Ticket
from eventdesk.services import employee_service, event_service, ticket_service
from factories import employee_data, event_data, ticket_data

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await ensure_schema(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_employee(db_session: AsyncSession) -> Employee:
    """Employee 1, Ann Lee."""
    return await employee_service.create_employee(db_session, employee_data())


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    """Event 10 happening today."""
    return await event_service.create_event(db_session, event_data())


@pytest_asyncio.fixture
async def test_ticket(db_session: AsyncSession, test_employee: Employee, test_event: Event) -> Ticket:
    """Ticket 5 sold today by employee 1 for event 10."""
    return await ticket_service.create_ticket(db_session, ticket_data())


@pytest.fixture
def stub_exists(monkeypatch):
    """
    Force Repository.exists to give a fixed answer for one model, so a
    service validates against a picture of the table another writer has
    already invalidated.
    """

    def stub(model, answer: bool) -> None:
        original = Repository.exists

        async def exists(self, key):
            if self.model is model:
                return answer
            return await original(self, key)

        monkeypatch.setattr(Repository, "exists", exists)

    return stub
