# This project was developed with assistance from AI tools.
"""Tests for the unauthenticated public routes and health check."""


async def test_document_types_lists_configured_rules(client):
    resp = await client.get("/api/public/document-types")

    assert resp.status_code == 200
    by_type = {item["document_type"]: item for item in resp.json()}
    assert set(by_type) == {
        "BARANGAY_CLEARANCE",
        "CERTIFICATE_OF_RESIDENCY",
        "CERTIFICATE_OF_INDIGENCY",
        "BUSINESS_PERMIT",
    }
    assert by_type["CERTIFICATE_OF_INDIGENCY"]["fee_override"] is True


async def test_fee_quote(client):
    resp = await client.post(
        "/api/public/fee-quote",
        json={"document_type": "CERTIFICATE_OF_RESIDENCY", "is_urgent": True},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert float(body["fee"]) == 55.0
    assert body["priority"] == "HIGH"


async def test_fee_quote_unknown_type(client):
    resp = await client.post("/api/public/fee-quote", json={"document_type": "PASSPORT"})
    assert resp.status_code == 422


async def test_track_by_reference(client):
    created = await client.post(
        "/api/document-requests/",
        json={"document_type": "BARANGAY_CLEARANCE", "resident_id": 2, "purpose": "Travel"},
    )
    reference = created.json()["reference_number"]

    resp = await client.get(f"/api/public/track/{reference}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["reference_number"] == reference
    assert body["status"] == "PENDING"
    assert [e["status"] for e in body["timeline"]] == ["PENDING"]
    assert "applicant_name" not in body
    assert "notes" not in body


async def test_track_unknown_reference_has_fixed_message(client):
    for reference in ("00009999", "not-a-number"):
        resp = await client.get(f"/api/public/track/{reference}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "No document request matches this reference number"


async def test_health(client):
    resp = await client.get("/health/")

    assert resp.status_code == 200
    assert resp.json()["database"] == "ok"
