"""
Shared test fixtures and configuration for entire test suite.

Provides: File-backed SQLite engine and session factory, seeded users and
projects, orchestrator/dispatcher mocks
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest


@pytest.fixture
async def db_engine(tmp_path):
    """
    Create a file-backed SQLite async engine with all tables.

    A file database (rather than :memory:) lets dispatcher tests open
    independent sessions that see each other's commits.

    Yields:
        AsyncEngine: Test engine (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import NullPool
    from auditscan.boundary.db.create_tables import create_all_tables, drop_all_tables

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'auditscan-test.db'}",
        poolclass=NullPool,
    )
    await create_all_tables(engine)

    yield engine

    await drop_all_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a test database session.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(session_factory):
    """Factory fixture that inserts and commits a user."""
    from auditscan.boundary.db.CRUD.user_crud import user_crud

    async def _make_user(email: str | None = None, name: str | None = "Test User"):
        async with session_factory() as session:
            user = await user_crud.create(
                session,
                email=email or f"{uuid.uuid4().hex[:8]}@example.com",
                name=name,
            )
            await session.commit()
            return user

    return _make_user


@pytest.fixture
def make_project(session_factory):
    """Factory fixture that inserts and commits a project owned by a user."""
    from auditscan.boundary.db.CRUD.project_crud import project_crud
    from auditscan.boundary.db.models.project_model import ProjectStatus

    async def _make_project(owner_id: uuid.UUID, name: str = "demo-repo", status=ProjectStatus.PENDING):
        async with session_factory() as session:
            project = await project_crud.create(
                session,
                user_id=owner_id,
                name=name,
                repository_url=f"https://example.com/{name}.git",
                status=status,
            )
            await session.commit()
            return project

    return _make_project


@pytest.fixture
def mock_scan_orchestrator():
    """
    Create mock ScanOrchestrator for testing.

    Returns:
        AsyncMock: Mocked orchestrator with async methods
    """
    orchestrator = AsyncMock()
    orchestrator.create_scan = AsyncMock()
    orchestrator.list_scans = AsyncMock(return_value=[])
    orchestrator.get_scan_detail = AsyncMock()
    orchestrator.cancel_or_delete_scan = AsyncMock(return_value="cancelled")
    return orchestrator


@pytest.fixture
def mock_dispatcher():
    """
    Create mock ScanDispatcher that records dispatches without running them.

    Returns:
        MagicMock: Dispatcher whose dispatch() returns a dummy handle
    """
    dispatcher = MagicMock()
    dispatcher.dispatch = MagicMock(return_value=MagicMock())
    dispatcher.drain = AsyncMock()
    dispatcher.in_flight = 0
    return dispatcher
