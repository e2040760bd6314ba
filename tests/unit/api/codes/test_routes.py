# tests/unit/api/codes/test_routes.py
from solhub_admin.extensions import db
from solhub_admin.models import LaboratoryCode


def test_list_codes_includes_laboratory_and_status(client, auth_headers, access_code):
    response = client.get("/api/codes", headers=auth_headers)

    assert response.status_code == 200
    code = response.json["data"][0]
    assert code["code"] == "CONSPAT-ABC123"
    assert code["status"] == "active"
    assert code["laboratory"]["slug"] == "conspat"


def test_list_codes_filtered_by_derived_status(client, auth_headers, access_code):
    access_code.current_uses = 5
    db.session.commit()

    exhausted = client.get("/api/codes?status=exhausted", headers=auth_headers).json["data"]
    active = client.get("/api/codes?status=active", headers=auth_headers).json["data"]

    assert [code["code"] for code in exhausted] == ["CONSPAT-ABC123"]
    assert active == []


def test_create_code_normalizes_value(client, auth_headers, admin_user, laboratory):
    response = client.post(
        "/api/codes",
        json={"laboratory_id": laboratory.id, "code": " conspat-new01 ", "max_uses": 10, "expires_at": "2030-01-01"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    code = response.json["data"]
    assert code["code"] == "CONSPAT-NEW01"
    assert code["current_uses"] == 0
    assert code["created_by"] == admin_user.id
    assert code["expires_at"].startswith("2030-01-01")


def test_create_duplicate_code(client, auth_headers, access_code):
    response = client.post(
        "/api/codes",
        json={"laboratory_id": access_code.laboratory_id, "code": "conspat-abc123"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json["message"] == "Code already exists: CONSPAT-ABC123"


def test_create_code_for_missing_laboratory(client, auth_headers):
    response = client.post("/api/codes", json={"laboratory_id": "missing", "code": "X-1"}, headers=auth_headers)

    assert response.status_code == 404


def test_generate_code_suggestion(client, auth_headers, laboratory):
    response = client.post("/api/codes/generate", json={"laboratory_id": laboratory.id}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json["data"]["code"].startswith("CONSPAT-")
    assert LaboratoryCode.query.count() == 0


def test_deactivate_code(client, auth_headers, access_code):
    response = client.patch(f"/api/codes/{access_code.id}", json={"is_active": False}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json["data"]["status"] == "inactive"


def test_update_missing_code(client, auth_headers):
    response = client.patch("/api/codes/missing", json={"is_active": False}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json["message"] == "Access code not found"
