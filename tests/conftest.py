# tests/conftest.py
import os

# Settings are read once at import time; set test-safe values first.
os.environ["SECRET_KEY"] = "unit-test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_ALL"] = "true"
os.environ["DEBUG"] = "false"

import uuid
from datetime import date

import pytest
from fastapi.testclient import TestClient

from backoffice.core.security import create_access_token
from backoffice.db.session import make_engine, make_sessionmaker
from backoffice.models import Base, Tenant
from backoffice.registry import build_default_registry


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
async def engine():
    engine = make_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    async with make_sessionmaker(engine)() as session:
        yield session


async def _add_tenant(session, domain):
    tenant = Tenant(
        name=domain.split(".")[0].title(),
        domain=domain,
        financial_year_start=date(2024, 4, 1),
    )
    session.add(tenant)
    await session.commit()
    return tenant.id


@pytest.fixture
async def tenant_a(db_session) -> uuid.UUID:
    return await _add_tenant(db_session, "alpha.example.in")


@pytest.fixture
async def tenant_b(db_session) -> uuid.UUID:
    return await _add_tenant(db_session, "beta.example.in")


# ── HTTP ──────────────────────────────────────────────────────────────────


@pytest.fixture
def client():
    from main import create_application

    with TestClient(create_application()) as test_client:
        yield test_client


def auth_headers(tenant_id) -> dict:
    return {"Authorization": f"Bearer {create_access_token('test-suite', tenant_id)}"}


def onboard(client, domain: str) -> dict:
    response = client.post(
        "/api/v1/tenants",
        json={"name": domain.split(".")[0].title(), "domain": domain, "financialYearStart": "2024-04-01"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def tenant_headers(client):
    """(headers_for_A1, headers_for_A2) against the running test client."""
    a1 = onboard(client, "a1.example.in")
    a2 = onboard(client, "a2.example.in")
    return auth_headers(a1["id"]), auth_headers(a2["id"])
