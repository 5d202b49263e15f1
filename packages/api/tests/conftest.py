# This project was developed with assistance from AI tools.
"""Shared fixtures.

Service tests run against a real async engine on in-memory SQLite with the
schema created from ``Base.metadata``. Route tests drive the real app over
``httpx.ASGITransport`` with the DB session, resident directory and current
user overridden.
"""

import os

os.environ["AUTH_DISABLED"] = "true"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from db import Base  # noqa: E402
from db.database import get_db  # noqa: E402
from db.enums import UserRole  # noqa: E402
from fastapi import Request  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from barangay_docs.main import app  # noqa: E402
from barangay_docs.middleware.auth import get_current_user  # noqa: E402
from barangay_docs.schemas.auth import UserContext  # noqa: E402
from barangay_docs.services.errors import NotFoundError  # noqa: E402
from barangay_docs.services.residents import ResidentSummary, get_resident_directory  # noqa: E402

JUAN = ResidentSummary(
    name="Juan Dela Cruz",
    address="Purok 3, Barangay San Isidro",
    contact_number="09171234567",
)
MARIA = ResidentSummary(name="Maria Santos", address="Purok 1, Barangay San Isidro")


class FakeResidentDirectory:
    """In-memory resident registry keyed by resident id."""

    def __init__(self, residents: dict[int, ResidentSummary] | None = None):
        self.residents = residents if residents is not None else {1: JUAN, 2: MARIA}
        self.calls: list[int] = []

    async def get_resident_summary(self, resident_id: int) -> ResidentSummary:
        self.calls.append(resident_id)
        try:
            return self.residents[resident_id]
        except KeyError:
            raise NotFoundError("Resident", resident_id) from None


def make_user(role: UserRole) -> UserContext:
    return UserContext(
        user_id=f"{role.value}-1",
        role=role,
        email=f"{role.value}@barangay.local",
        name=f"Test {role.value.title()}",
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def residents():
    return FakeResidentDirectory()


@pytest_asyncio.fixture
async def client_factory(session_factory, residents):
    """Factory fixture: return an AsyncClient acting as the given staff role."""
    clients: list[httpx.AsyncClient] = []

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _current_user(request: Request) -> UserContext:
        return make_user(UserRole(request.headers["x-test-role"]))

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_resident_directory] = lambda: residents
    app.dependency_overrides[get_current_user] = _current_user

    def _make(role: UserRole = UserRole.ADMIN) -> httpx.AsyncClient:
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://test",
            headers={"x-test-role": role.value},
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_factory):
    return client_factory(UserRole.ADMIN)
