# tests/unit/api/features/test_routes.py
from solhub_admin.extensions import db
from solhub_admin.models import FeatureCatalog, Laboratory


def test_list_features_hides_inactive_by_default(client, auth_headers, feature_catalog):
    active = client.get("/api/features", headers=auth_headers).json["data"]
    everything = client.get("/api/features?active=false", headers=auth_headers).json["data"]

    assert {feature["key"] for feature in active} == {"hasChatAI", "hasInventory"}
    assert len(everything) == 3


def test_create_feature_adds_key_to_every_laboratory(client, auth_headers, laboratory, second_laboratory):
    response = client.post(
        "/api/features",
        json={"key": "hasTelemedicine", "name": "Telemedicine", "category": "premium", "required_plan": "enterprise"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json["data"]["is_active"] is True
    for lab in Laboratory.query.all():
        assert lab.features["hasTelemedicine"] is False


def test_create_feature_rejects_duplicate_key(client, auth_headers, feature_catalog):
    response = client.post("/api/features", json={"key": "hasChatAI", "name": "Again"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json["message"] == "Feature key already exists: hasChatAI"


def test_create_feature_validates_key(client, auth_headers):
    response = client.post("/api/features", json={"key": "9lives", "name": "Nine"}, headers=auth_headers)

    assert response.status_code == 400
    assert "key" in response.json["details"]


def test_update_feature(client, auth_headers, feature_catalog):
    feature = feature_catalog[0]

    response = client.patch(
        f"/api/features/{feature.id}", json={"name": "Assistant", "is_active": False}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json["data"]["name"] == "Assistant"
    assert response.json["data"]["is_active"] is False


def test_update_feature_key_is_immutable(client, auth_headers, feature_catalog):
    response = client.patch(
        f"/api/features/{feature_catalog[0].id}", json={"key": "hasOtherThing"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json["message"] == "Feature key cannot be changed"


def test_delete_feature_removes_key_from_laboratories(client, auth_headers, laboratory, second_laboratory):
    feature = FeatureCatalog.query.filter_by(key="hasChatAI").one()

    response = client.delete(f"/api/features/{feature.id}", headers=auth_headers)

    assert response.status_code == 200
    assert db.session.get(FeatureCatalog, feature.id) is None
    for lab in Laboratory.query.all():
        assert "hasChatAI" not in lab.features
        assert "hasInventory" in lab.features


def test_delete_missing_feature(client, auth_headers):
    response = client.delete("/api/features/missing", headers=auth_headers)

    assert response.status_code == 404
    assert response.json["message"] == "Feature not found"


def test_typescript_types(client, auth_headers, feature_catalog):
    response = client.get("/api/features/types", headers=auth_headers)

    assert response.status_code == 200
    data = response.json["data"]
    assert data["filename"] == "laboratory.ts"
    assert "export interface LaboratoryFeatures {" in data["content"]
    assert "  hasChatAI: boolean" in data["content"]
    assert "hasLegacyReports" not in data["content"]


def test_typescript_types_without_features(client, auth_headers):
    response = client.get("/api/features/types", headers=auth_headers)

    assert response.status_code == 400
    assert response.json["message"] == "No features found in the catalog"
