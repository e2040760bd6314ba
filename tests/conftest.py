# conftest.py
import pytest
from flask_jwt_extended import create_access_token

from solhub_admin import create_app
from solhub_admin.extensions import db
from solhub_admin.models import AdminUser, FeatureCatalog, Laboratory, LaboratoryCode, ModuleCatalog, Profile


@pytest.fixture
def app():
    """Fresh app and in-memory database per test"""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    admin = AdminUser(
        email="admin@solhub.test",
        role="superadmin",
        is_dashboard_admin=True,
        is_active=True,
    )
    admin.password = "password123"
    db.session.add(admin)
    db.session.commit()
    return admin


@pytest.fixture
def auth_headers(admin_user):
    """Create authentication headers with a dashboard-admin JWT"""
    token = create_access_token(
        identity=admin_user.id,
        additional_claims={"is_dashboard_admin": True, "role": admin_user.role},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def non_admin_headers(app):
    token = create_access_token(
        identity="not-an-admin",
        additional_claims={"is_dashboard_admin": False, "role": "support"},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def feature_catalog(app):
    features = [
        FeatureCatalog(key="hasChatAI", name="Chat AI", category="premium", required_plan="pro"),
        FeatureCatalog(key="hasInventory", name="Inventory", category="core"),
        FeatureCatalog(key="hasLegacyReports", name="Legacy reports", category="addon", is_active=False),
    ]
    db.session.add_all(features)
    db.session.commit()
    return features


@pytest.fixture
def module_catalog(app, feature_catalog):
    modules = [
        ModuleCatalog(
            feature_key="hasInventory",
            module_name="inventoryForm",
            structure={
                "fields": {
                    "email": {"label": "Email", "defaultEnabled": True, "defaultRequired": False},
                    "phone": {"label": "Phone", "defaultEnabled": True, "defaultRequired": True},
                    "notes": {"label": "Notes", "defaultEnabled": False, "defaultRequired": False},
                },
                "actions": {"generatePdf": {"label": "Generate PDF", "defaultEnabled": True}},
                "settings": {"maxItems": 50},
            },
        ),
        ModuleCatalog(
            feature_key="hasChatAI",
            module_name="chatPanel",
            structure={"fields": {"prompt": {"label": "Prompt", "defaultEnabled": True}}},
        ),
    ]
    db.session.add_all(modules)
    db.session.commit()
    return modules


@pytest.fixture
def laboratory(app, feature_catalog):
    lab = Laboratory(
        slug="conspat",
        name="Laboratorio Conspat",
        status="active",
        features={"hasChatAI": False, "hasInventory": True, "hasLegacyReports": False},
    )
    db.session.add(lab)
    db.session.commit()
    return lab


@pytest.fixture
def second_laboratory(app, feature_catalog):
    lab = Laboratory(
        slug="spt",
        name="SPT Diagnostico",
        status="trial",
        features={"hasChatAI": True, "hasInventory": False, "hasLegacyReports": False},
    )
    db.session.add(lab)
    db.session.commit()
    return lab


@pytest.fixture
def access_code(app, laboratory):
    code = LaboratoryCode(laboratory_id=laboratory.id, code="CONSPAT-ABC123", max_uses=5, current_uses=1)
    db.session.add(code)
    db.session.commit()
    return code


@pytest.fixture
def profiles(app, laboratory, second_laboratory):
    rows = [
        Profile(email="ana@conspat.com", display_name="Ana Perez", role="owner",
                estado="aprobado", laboratory_id=laboratory.id),
        Profile(email="luis@conspat.com", display_name="Luis Gomez", role="employee",
                estado="pendiente", laboratory_id=laboratory.id),
        Profile(email="maria@spt.com", display_name="Maria Rojas", role="employee",
                estado="aprobado", laboratory_id=second_laboratory.id),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows
