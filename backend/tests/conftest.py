"""
DelipuCash Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Behavioural tests run against an in-memory SQLite database (aiosqlite)
       built from the ORM metadata; HTTP tests drive the ASGI app through
       httpx without a server.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── engine:          in-memory SQLite engine with all tables created
    ├── session_factory: async_sessionmaker bound to that engine
    ├── db_session:      one AsyncSession for service/repository tests
    ├── seed:            users alice/bob/carol and one response by alice
    ├── mock_db_session: AsyncMock session for failure-path tests
    ├── app_factory:     create_app(settings) bound to the test database
    └── test_client:     httpx AsyncClient talking to create_app()
"""

import os

# Override settings for testing BEFORE any application imports: the engine
# and settings singletons are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from delipucash.config import Settings
from delipucash.database import Base, get_db_session
from delipucash.main import create_app
from delipucash.models import AppUser, Response


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite shared by every session of one test.

    StaticPool keeps the single connection alive (":memory:" databases
    vanish with their connection). The two event hooks make aiosqlite emit
    real BEGIN/SAVEPOINT statements so begin_nested() behaves as it does
    on PostgreSQL.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(test_engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed(session_factory):
    """
    Three users and one response (authored by alice), committed.

    Returned as a namespace of ids: seed.alice, seed.bob, seed.carol,
    seed.response.
    """
    async with session_factory() as session:
        alice = AppUser(email="alice@example.com", first_name="Alice", last_name="Auma")
        bob = AppUser(email="bob@example.com", first_name="Bob", last_name="Okello")
        carol = AppUser(email="carol@example.com", first_name="Carol", last_name="Nakato")
        session.add_all([alice, bob, carol])
        await session.flush()

        response = Response(
            user_id=alice.id,
            question_id="q-1",
            response_text="Mobile money is the cheapest way to pay fees.",
        )
        session.add(response)
        await session.commit()

        return SimpleNamespace(
            alice=alice.id, bob=bob.id, carol=carol.id, response=response.id
        )


@pytest.fixture
def mock_db_session():
    """
    AsyncMock standing in for AsyncSession.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture
def app_factory(session_factory):
    """
    Builds create_app(settings) wired to the test database.

    get_db_session is overridden with the same commit/rollback contract as
    the real dependency, but on the in-memory engine.

    Usage:
        app = app_factory(Settings(environment="production", ...))
    """
    def _build(app_settings: Settings):
        application = create_app(app_settings)

        async def _override_session():
            async with session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        application.dependency_overrides[get_db_session] = _override_session
        return application

    return _build


@pytest.fixture
def app(app_factory, test_settings):
    return app_factory(test_settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_ping(test_client):
            response = await test_client.get("/ping")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
