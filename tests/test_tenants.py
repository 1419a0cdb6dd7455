from datetime import date

import pytest

from backoffice.core.exceptions import ConflictError
from backoffice.models.tenant import financial_year_window
from backoffice.schemas.tenant import TenantCreate
from backoffice.services.tenant_service import TenantService
from conftest import auth_headers, onboard

TENANTS = "/api/v1/tenants"


def test_onboard_tenant_normalises_fields(client):
    response = client.post(
        TENANTS,
        json={
            "name": "  Acme Traders ",
            "domain": " ACME.Example.IN ",
            "financialYearStart": "2024-04-01",
            "currency": "inr",
        },
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["name"] == "Acme Traders"
    assert body["domain"] == "acme.example.in"
    assert body["currency"] == "INR"
    assert body["decimalPrecision"] == 2


def test_duplicate_domain_conflicts(client):
    onboard(client, "acme.example.in")

    response = client.post(
        TENANTS, json={"name": "Acme Two", "domain": "acme.example.in", "financialYearStart": "2024-04-01"}
    )

    assert response.status_code == 409
    assert response.json()["errors"][0]["field"] == "domain"


def test_onboard_validation_error(client):
    response = client.post(TENANTS, json={"name": "A", "domain": "acme.example.in"})

    assert response.status_code == 422
    fields = {e["field"] for e in response.json()["errors"]}
    assert "name" in fields
    assert "financialYearStart" in fields


def test_current_tenant(client):
    tenant = onboard(client, "acme.example.in")

    response = client.get(f"{TENANTS}/me", headers=auth_headers(tenant["id"]))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == tenant["id"]
    assert set(body["currentFinancialYear"]) == {"start", "end"}


def test_current_tenant_requires_token(client):
    assert client.get(f"{TENANTS}/me").status_code == 401


@pytest.mark.parametrize(
    "start, today, expected",
    [
        (date(2024, 4, 1), date(2024, 7, 15), (date(2024, 4, 1), date(2025, 3, 31))),
        (date(2024, 4, 1), date(2025, 2, 10), (date(2024, 4, 1), date(2025, 3, 31))),
        (date(2020, 1, 1), date(2024, 1, 1), (date(2024, 1, 1), date(2024, 12, 31))),
        (date(2020, 2, 29), date(2023, 3, 1), (date(2023, 2, 28), date(2024, 2, 28))),
        (date(2024, 4, 15), date(2024, 4, 10), (date(2023, 4, 15), date(2024, 4, 14))),
    ],
)
def test_financial_year_window(start, today, expected):
    assert financial_year_window(start, today) == expected


async def test_get_tenant_by_domain_normalises_lookup(db_session):
    created = await TenantService.create_tenant(
        db_session,
        TenantCreate(name="Acme Traders", domain="acme.example.in", financial_year_start=date(2024, 4, 1)),
    )
    await db_session.commit()

    found = await TenantService.get_tenant_by_domain(db_session, "  ACME.example.IN ")

    assert found is not None and found.id == created.id
    assert await TenantService.get_tenant_by_domain(db_session, "other.example.in") is None


async def test_create_tenant_rejects_taken_domain_before_insert(db_session):
    data = TenantCreate(name="Acme Traders", domain="acme.example.in", financial_year_start=date(2024, 4, 1))
    first = await TenantService.create_tenant(db_session, data)
    await db_session.commit()
    first_id = first.id

    with pytest.raises(ConflictError) as exc_info:
        await TenantService.create_tenant(db_session, data)

    assert exc_info.value.errors[0]["field"] == "domain"
    # No rollback was needed, so the first tenant is still usable in this session
    assert (await TenantService.get_tenant_by_id(db_session, first_id)).domain == "acme.example.in"
