"""Test configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import date, datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from main import create_application
from pippin.core.board_settings import BoardSettings
from pippin.core.tenant import TenantContext
from pippin.db.session import build_engine, build_sessionmaker, get_db
from pippin.models import Base
from pippin.schemas.project import ProjectCreate
from pippin.schemas.ticket import TicketCreate
from pippin.services.project_service import ProjectService
from pippin.services.ticket_service import TicketService


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def tenant() -> TenantContext:
    return TenantContext("demo")


@pytest.fixture
def other_tenant() -> TenantContext:
    return TenantContext("acme")


@pytest.fixture
def board() -> BoardSettings:
    return BoardSettings(sprint_length_days=7, sprint_epoch=date(2025, 1, 1))


@pytest.fixture
def make_project(db: AsyncSession, tenant: TenantContext):
    async def _make(key: str = "APP", name: str = "App", owner: TenantContext = None):
        return await ProjectService.create_project(
            db, owner or tenant, ProjectCreate(key=key, name=name)
        )

    return _make


@pytest.fixture
def make_ticket(db: AsyncSession, tenant: TenantContext):
    async def _make(
        project_key: str = "APP",
        title: str = "Ticket",
        state: str = "backlog",
        created_at: datetime = None,
        owner: TenantContext = None,
    ):
        return await TicketService.create_ticket(
            db,
            owner or tenant,
            TicketCreate(project_key=project_key, title=title, state=state),
            now=created_at,
        )

    return _make


@pytest_asyncio.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against a fresh app wired to the test database."""
    app = create_application()
    session_factory = build_sessionmaker(engine)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
