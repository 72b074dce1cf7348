"""
Hersteller Service — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database file (aiosqlite) under
       tmp_path, with the tables created from the ORM metadata. The mail
       collaborator is an AsyncMock so notifications can be asserted.

Fixture Hierarchy:
    engine → session_factory → db_session
    mail_service
    validation_service → read_service → write_service
    test_client (FastAPI app over httpx ASGITransport, sessions from session_factory)
"""

import os
import tempfile
from unittest.mock import AsyncMock

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Before any hersteller_api import: settings are read at import time
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='hersteller_test_')}/unused.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MAIL_ACTIVATED"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from hersteller_api.database import Base, get_db_session
from hersteller_api.models.hersteller import Hersteller, Schlagwort  # noqa: F401
from hersteller_api.schemas.hersteller import HerstellerCreate
from hersteller_api.services.mail_service import MailService
from hersteller_api.services.read_service import HerstellerReadService
from hersteller_api.services.validation_service import HerstellerValidationService
from hersteller_api.services.write_service import HerstellerWriteService


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine(tmp_path):
    """A throw-away SQLite database with the schema in place."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'hersteller.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# Service Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mail_service():
    """MailService double; `send` is an AsyncMock."""
    return AsyncMock(spec=MailService)


@pytest.fixture
def validation_service():
    return HerstellerValidationService()


@pytest.fixture
def read_service(validation_service):
    return HerstellerReadService(validation_service)


@pytest.fixture
def write_service(read_service, validation_service, mail_service):
    return HerstellerWriteService(
        read_service=read_service,
        validation_service=validation_service,
        mail_service=mail_service,
    )


@pytest.fixture
def alpha_payload():
    return HerstellerCreate(
        name="Alpha",
        telephone="12345678901",
        homepage="https://acme.test/",
        schlagwoerter=["javascript"],
    )


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory, mail_service):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from hersteller_api.main import create_app

    app = create_app(mail_service=mail_service)

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
