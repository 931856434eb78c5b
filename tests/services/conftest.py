"""Service test fixtures — async DB, data gateway, repositories + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Rate limiter disabled and its counters reset between tests

Design Decisions:
    - SQLite in-memory + StaticPool: every session shares the one connection that
      holds the schema (ADR: no external dependency for repository tests)
    - Repositories built against one gateway per test, audit recorder included,
      so audit side effects are observable in the same database
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from aquatour.db.base import Base
from aquatour.infrastructure.database import (
    DataGateway, DatabaseSessionManager, build_engine, get_db,
)
from aquatour.infrastructure.password_hasher import BcryptPasswordHasher
from aquatour.infrastructure.rate_limiter import limiter
from aquatour.services.audit_service import AuditService
from aquatour.services.client_repository import ClientRepository
from aquatour.services.contact_repository import ContactRepository
from aquatour.services.package_repository import PackageRepository
from aquatour.services.payment_repository import PaymentRepository
from aquatour.services.provider_repository import ProviderRepository
from aquatour.services.quote_repository import QuoteRepository
from aquatour.services.reservation_repository import ReservationRepository
from aquatour.services.user_repository import UserRepository
import aquatour.infrastructure.database as db_module
import aquatour.models  # noqa: F401
from aquatour.main import app


@pytest.fixture
async def test_engine():
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
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
def gateway(test_db):
    return DataGateway(test_db)


@pytest.fixture
def audit(gateway):
    return AuditService(gateway)


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def users(gateway, audit, hasher):
    return UserRepository(gateway, audit, hasher=hasher)


@pytest.fixture
def clients(gateway, audit):
    return ClientRepository(gateway, audit)


@pytest.fixture
def contacts(gateway, audit):
    return ContactRepository(gateway, audit)


@pytest.fixture
def providers(gateway, audit):
    return ProviderRepository(gateway, audit)


@pytest.fixture
def packages(gateway, audit):
    return PackageRepository(gateway, audit)


@pytest.fixture
def reservations(gateway, audit):
    return ReservationRepository(gateway, audit)


@pytest.fixture
def quotes(gateway, audit):
    return QuoteRepository(gateway, audit)


@pytest.fixture
def payments(gateway, audit):
    return PaymentRepository(gateway, audit)


# ─── Seed helpers ────────────────────────────────────────────────

@pytest.fixture
async def advisor(users):
    return await users.create({
        "first_name": "Ana",
        "last_name": "Ruiz",
        "email": "ana@aquatour.test",
        "password": "secret123",
        "role": "empleado",
        "phone": "300 111 2222",
        "document_number": "1010",
    })


@pytest.fixture
def client_payload(advisor):
    def build(**overrides) -> dict:
        payload = {
            "first_name": "Carlos",
            "last_name": "Gómez",
            "email": "carlos@x.com",
            "phone": "+57 300-123-4567",
            "document_number": "CC-55.001",
            "nationality": "Colombia",
            "passport": "PA123",
            "marital_status": "soltero",
            "user_id": advisor["id"],
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
async def seeded_client(clients, client_payload):
    return await clients.create(client_payload())


@pytest.fixture
async def seeded_package(packages):
    return await packages.create({"name": "Caribe 5 días", "base_price": "1200.50"})


@pytest.fixture
def quote_payload(seeded_client, advisor):
    def build(**overrides) -> dict:
        payload = {
            "start_date": "2026-12-01",
            "end_date": "2026-12-06",
            "estimated_price": "900",
            "client_id": seeded_client["id"],
            "employee_id": advisor["id"],
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def reservation_payload(seeded_client, advisor):
    def build(**overrides) -> dict:
        payload = {
            "party_size": 2,
            "total_price": "2400",
            "start_date": "2026-12-01",
            "end_date": "2026-12-06",
            "client_id": seeded_client["id"],
            "employee_id": advisor["id"],
        }
        payload.update(overrides)
        return payload
    return build


# ─── HTTP client ─────────────────────────────────────────────────

@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness probe, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    limiter.reset()
