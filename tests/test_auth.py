from datetime import timedelta

from backend.auth.tokens import create_access_token, get_password_hash
from backend.modules.user.models.user_model import UserModel
from backend.modules.user.services.auth_service import AuthService
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from shared.modules.user.enums.user_role_enum import UserRole
from shared.modules.user.models.user import User


def test_login_returns_a_bearer_token(client):
    response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    body = response.get_json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]


def test_wrong_password_is_rejected(client):
    response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert response.status_code == 401


def test_login_payload_is_validated(client):
    response = client.post("/api/admin/login", json={"email": "not-an-email"})
    assert response.status_code == 400


def test_non_admin_cannot_sign_in_or_use_admin_routes(app, client):
    with app.app_context():
        UserModel.create(User(
            name="Student",
            email="student@coursehub.io",
            hashed_password=get_password_hash("student-password"),
            role=UserRole.USER,
        ))
        token = create_access_token({"sub": "student@coursehub.io", "role": "user", "user_id": "u-1"})

    login = client.post("/api/admin/login", json={"email": "student@coursehub.io", "password": "student-password"})
    assert login.status_code == 401

    response = client.get("/api/admin/schools", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_expired_token_is_rejected(app, client):
    with app.app_context():
        token = create_access_token(
            {"sub": ADMIN_EMAIL, "role": "admin", "user_id": "u-1"},
            expires_delta=timedelta(minutes=-1),
        )

    response = client.get("/api/admin/schools", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_signed_with_another_key_is_rejected(app, client, admin_headers):
    app.config["SECRET_KEY"] = "rotated"
    response = client.get("/api/admin/schools", headers=admin_headers)
    assert response.status_code == 401


def test_bootstrap_admin_is_idempotent(app, mongo_db):
    with app.app_context():
        service = AuthService()
        assert service.bootstrap_admin(ADMIN_EMAIL, ADMIN_PASSWORD) is False
        assert service.bootstrap_admin("second@coursehub.io", "pw-123456", "Second") is True
        assert service.bootstrap_admin(None, None) is False

    assert mongo_db.users.count_documents({"role": "admin"}) == 2
