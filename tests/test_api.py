import uuid
from decimal import Decimal

from fastapi.testclient import TestClient

from conftest import auth_headers

TAX_RATES = "/api/v1/gst/tax-rates"
CHALLANS = "/api/v1/gst/challans"
ATTACHMENTS = "/api/v1/accounting/attachments"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_tax_rate_visible_only_to_owning_tenant(client, tenant_headers):
    a1, a2 = tenant_headers

    created = client.post(TAX_RATES, json={"type": "Standard", "ratePercent": 18}, headers=a1)
    assert created.status_code == 201, created.text

    listed_a2 = client.get(TAX_RATES, headers=a2)
    assert listed_a2.status_code == 200
    assert listed_a2.json() == []
    assert listed_a2.headers["X-Total-Count"] == "0"

    listed_a1 = client.get(TAX_RATES, headers=a1)
    assert listed_a1.headers["X-Total-Count"] == "1"
    [row] = listed_a1.json()
    assert row["type"] == "Standard"
    assert Decimal(row["ratePercent"]) == 18
    assert row["id"] == created.json()["id"]


def test_created_record_carries_system_fields(client, tenant_headers):
    a1, _ = tenant_headers

    body = client.post(TAX_RATES, json={"type": "Reduced", "ratePercent": 5}, headers=a1).json()

    assert set(body) >= {"id", "tenantId", "createdAt", "updatedAt"}
    fetched = client.get(f"{TAX_RATES}/{body['id']}", headers=a1)
    assert fetched.status_code == 200
    assert fetched.json() == body


def test_other_tenant_gets_404_everywhere(client, tenant_headers):
    a1, a2 = tenant_headers
    record_id = client.post(
        TAX_RATES, json={"type": "Standard", "ratePercent": 18}, headers=a1
    ).json()["id"]

    assert client.get(f"{TAX_RATES}/{record_id}", headers=a2).status_code == 404
    assert client.patch(f"{TAX_RATES}/{record_id}", json={"ratePercent": 0}, headers=a2).status_code == 404
    assert client.delete(f"{TAX_RATES}/{record_id}", headers=a2).status_code == 404
    assert Decimal(client.get(f"{TAX_RATES}/{record_id}", headers=a1).json()["ratePercent"]) == 18


def test_malformed_id_is_404(client, tenant_headers):
    a1, _ = tenant_headers

    response = client.get(f"{TAX_RATES}/not-a-uuid", headers=a1)

    assert response.status_code == 404
    assert response.json() == {"message": "Tax rate not found"}


def test_validation_error_shape(client, tenant_headers):
    a1, _ = tenant_headers

    response = client.post(TAX_RATES, json={"type": "Luxury", "ratePercent": 18}, headers=a1)

    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Tax rate failed validation"
    assert body["errors"][0]["field"] == "type"


def test_non_object_body_is_422(client, tenant_headers):
    a1, _ = tenant_headers

    response = client.post(TAX_RATES, json=["Standard", 18], headers=a1)

    assert response.status_code == 422
    assert "errors" in response.json()


def test_duplicate_challan_conflicts_within_tenant_only(client, tenant_headers):
    a1, a2 = tenant_headers
    payload = {"challanNo": "CPIN-001", "period": "2024-07", "amount": 100, "status": "Created"}

    assert client.post(CHALLANS, json=payload, headers=a1).status_code == 201
    duplicate = client.post(CHALLANS, json=payload, headers=a1)
    assert client.post(CHALLANS, json=payload, headers=a2).status_code == 201

    assert duplicate.status_code == 409
    assert duplicate.json()["errors"][0]["field"] == "challanNo"


def test_patch_and_put_are_partial(client, tenant_headers):
    a1, _ = tenant_headers
    created = client.post(
        CHALLANS,
        json={"challanNo": "CPIN-9", "period": "2024-07", "amount": 100, "status": "Created"},
        headers=a1,
    ).json()

    patched = client.patch(f"{CHALLANS}/{created['id']}", json={"status": "Paid"}, headers=a1)
    put = client.put(f"{CHALLANS}/{created['id']}", json={"amount": 250}, headers=a1)

    assert patched.status_code == 200
    assert put.status_code == 200
    assert put.json()["status"] == "Paid"
    assert Decimal(put.json()["amount"]) == 250
    assert put.json()["challanNo"] == "CPIN-9"
    assert put.json()["createdAt"] == created["createdAt"]


def test_list_filters_and_paging(client, tenant_headers):
    a1, _ = tenant_headers
    for number, status in (("C-1", "Created"), ("C-2", "Paid"), ("C-3", "Paid")):
        client.post(
            CHALLANS,
            json={"challanNo": number, "period": "2024-07", "amount": 1, "status": status},
            headers=a1,
        )

    paid = client.get(CHALLANS, params={"status": "Paid"}, headers=a1)
    page = client.get(CHALLANS, params={"skip": 1, "limit": 1}, headers=a1)
    bad_filter = client.get(CHALLANS, params={"colour": "red"}, headers=a1)
    bad_limit = client.get(CHALLANS, params={"limit": 0}, headers=a1)

    assert [r["challanNo"] for r in paid.json()] == ["C-2", "C-3"]
    assert paid.headers["X-Total-Count"] == "2"
    assert [r["challanNo"] for r in page.json()] == ["C-2"]
    assert page.headers["X-Total-Count"] == "3"
    assert bad_filter.status_code == 422
    assert bad_limit.status_code == 422


def test_delete_then_get_is_404(client, tenant_headers):
    a1, _ = tenant_headers
    record_id = client.post(
        TAX_RATES, json={"type": "Exempt", "ratePercent": 0}, headers=a1
    ).json()["id"]

    deleted = client.delete(f"{TAX_RATES}/{record_id}", headers=a1)

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Deleted", "id": record_id}
    assert client.get(f"{TAX_RATES}/{record_id}", headers=a1).status_code == 404


def test_attachment_ignores_unknown_fields(client, tenant_headers):
    a1, _ = tenant_headers
    payload = {
        "entity": "JournalEntry",
        "entityId": str(uuid.uuid4()),
        "fileName": "receipt.png",
        "fileUrl": "https://files.example.in/receipt.png",
        "fileSize": 512,
        "mimeType": "image/png",
        "uploadedBy": str(uuid.uuid4()),
        "formToken": "xyz",
    }

    response = client.post(ATTACHMENTS, json=payload, headers=a1)

    assert response.status_code == 201, response.text
    assert "formToken" not in response.json()
    assert response.json()["uploadedAt"]


# ── tenant context ───────────────────────────────────────────────────────────


def test_missing_token_is_401(client):
    assert client.get(TAX_RATES).status_code == 401


def test_garbage_token_is_401(client):
    response = client.get(TAX_RATES, headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401


def test_token_for_unknown_tenant_is_401(client):
    response = client.get(TAX_RATES, headers=auth_headers(uuid.uuid4()))

    assert response.status_code == 401


def test_malformed_tenant_claim_is_400(client):
    response = client.get(TAX_RATES, headers=auth_headers("tenant-one"))

    assert response.status_code == 400
    assert response.json()["message"].startswith("Malformed tenant ID")


def test_custom_registry_mounts_only_its_entities(registry):
    from backoffice.registry import EntityRegistry
    from main import create_application

    only_challans = EntityRegistry()
    only_challans.register(registry.get("challan"))

    with TestClient(create_application(only_challans)) as test_client:
        paths = set(test_client.get("/openapi.json").json()["paths"])

    assert "/api/v1/gst/challans" in paths
    assert "/api/v1/gst/tax-rates" not in paths


def test_money_is_serialised_as_exact_decimal(client, tenant_headers):
    a1, _ = tenant_headers

    response = client.post(
        CHALLANS,
        json={"challanNo": "CPIN-77", "period": "2024-07", "amount": "1999.99", "status": "Paid"},
        headers=a1,
    )

    assert response.status_code == 201, response.text
    assert response.json()["amount"] == "1999.99"
