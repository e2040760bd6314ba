# tests/unit/api/auth/test_routes.py
import pytest

from solhub_admin.extensions import cache, db
from solhub_admin.models import AdminUser
from solhub_admin.services.admin_service import AdminService


@pytest.fixture
def token_store(monkeypatch):
    """Back the token blocklist with a dict; the testing cache stores nothing"""
    store = {}
    monkeypatch.setattr(cache, "set", lambda key, value, timeout=None: store.__setitem__(key, value))
    monkeypatch.setattr(cache, "get", lambda key: store.get(key))
    return store


def make_admin(email, is_dashboard_admin=True, is_active=True):
    admin = AdminUser(email=email, role="support", is_dashboard_admin=is_dashboard_admin, is_active=is_active)
    admin.password = "password123"
    db.session.add(admin)
    db.session.commit()
    return admin


def login(client, email="admin@solhub.test", password="password123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


class TestLogin:
    def test_login_success(self, client, admin_user):
        response = login(client)

        assert response.status_code == 200
        data = response.json["data"]
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["is_dashboard_admin"] is True
        assert data["role"] == "superadmin"
        assert data["user"]["email"] == "admin@solhub.test"
        assert db.session.get(AdminUser, admin_user.id).last_login is not None

    def test_login_email_is_case_insensitive(self, client, admin_user):
        assert login(client, email="ADMIN@solhub.test").status_code == 200

    def test_login_wrong_password(self, client, admin_user):
        response = login(client, password="wrong")

        assert response.status_code == 401
        assert response.json["message"] == "Invalid email or password"

    def test_login_unknown_email(self, client):
        assert login(client, email="nobody@solhub.test").status_code == 401

    def test_login_refused_without_dashboard_flag(self, client):
        make_admin("support@solhub.test", is_dashboard_admin=False)

        response = login(client, email="support@solhub.test")

        assert response.status_code == 403
        assert response.json["message"] == "Access restricted to dashboard administrators"

    def test_login_refused_for_inactive_account(self, client):
        make_admin("gone@solhub.test", is_active=False)

        response = login(client, email="gone@solhub.test")

        assert response.status_code == 403
        assert response.json["message"] == "Account is inactive"

    def test_login_validates_payload(self, client):
        response = client.post("/api/auth/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        assert response.json["error"] == "Validation Error"

    def test_login_password_is_checked_as_typed(self, client):
        AdminService(db.session).create_admin("ops@solhub.test", "pa<b>ss&amp;1")

        response = login(client, email="ops@solhub.test", password="pa<b>ss&amp;1")

        assert response.status_code == 200
        assert response.json["data"]["user"]["email"] == "ops@solhub.test"

    def test_login_password_markup_is_not_stripped(self, client):
        AdminService(db.session).create_admin("ops@solhub.test", "pa<b>ss&amp;1")

        assert login(client, email="ops@solhub.test", password="pass&1").status_code == 401

    def test_login_token_opens_protected_routes(self, client, admin_user):
        token = login(client).json["data"]["access_token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json["data"]["id"] == admin_user.id


class TestTokens:
    def test_refresh(self, client, admin_user):
        refresh_token = login(client).json["data"]["refresh_token"]

        response = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {refresh_token}"})

        assert response.status_code == 200
        assert response.json["data"]["access_token"]

    def test_refresh_rejects_access_token(self, client, auth_headers):
        response = client.post("/api/auth/refresh", headers=auth_headers)

        assert response.status_code == 401

    def test_refresh_rechecks_the_account(self, client, admin_user):
        refresh_token = login(client).json["data"]["refresh_token"]
        admin_user.is_dashboard_admin = False
        db.session.commit()

        response = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {refresh_token}"})

        assert response.status_code == 403

    def test_logout_revokes_token(self, client, admin_user, token_store):
        headers = {"Authorization": f"Bearer {login(client).json['data']['access_token']}"}

        assert client.post("/api/auth/logout", headers=headers).status_code == 200

        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 401
        assert response.json["message"] == "Token has been revoked"

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json["error"] == "Unauthorized"


class TestVerifyCode:
    def test_valid_code(self, client):
        response = client.post("/api/auth/verify-code", json={"code": " solhub-test "})

        assert response.status_code == 200
        assert response.json["data"] == {"valid": True}

    def test_invalid_code(self, client):
        response = client.post("/api/auth/verify-code", json={"code": "guess"})

        assert response.status_code == 401
        assert response.json["message"] == "Invalid access code"

    def test_unconfigured_code(self, app, client):
        app.config["ADMIN_ACCESS_CODE"] = None

        response = client.post("/api/auth/verify-code", json={"code": "anything"})

        assert response.status_code == 500
        assert response.json["message"] == "Access code is not configured"


def test_create_admin_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-admin", "New@Solhub.test", "secret123", "--role", "analyst"])

    assert result.exit_code == 0
    admin = AdminUser.query.filter_by(email="new@solhub.test").one()
    assert admin.role == "analyst"
    assert admin.is_dashboard_admin is True
    assert admin.verify_password("secret123")


def test_create_admin_command_rejects_duplicate(app, admin_user):
    result = app.test_cli_runner().invoke(args=["create-admin", "admin@solhub.test", "secret123"])

    assert result.exit_code != 0
    assert "Admin already exists" in result.output
