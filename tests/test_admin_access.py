"""Tests for the passphrase-gated admin grant."""

from conftest import auth_header
from laundry_service.models.user import UserRole
from laundry_service.repositories.user_repository import RoleRepository

GRANT_URL = "/functions/v1/grant-admin-access"


def _grant(client, token, user_id, password="test-admin-pass"):
    return client.post(
        GRANT_URL,
        json={"userId": user_id, "adminPassword": password},
        headers=auth_header(token),
    )


class TestGrantAdminAccess:
    def test_grant_is_idempotent(self, client, customer, db_session):
        user_id, token = customer

        first = _grant(client, token, user_id)
        second = _grant(client, token, user_id)

        assert first.status_code == 200
        assert first.json()["message"] == "Admin access granted successfully"
        assert second.status_code == 200
        assert second.json()["message"] == "User already has admin role"
        roles = RoleRepository(db_session)
        assert roles.count_roles(user_id) == 1
        assert roles.is_admin(user_id)

    def test_wrong_passphrase(self, client, customer, db_session):
        user_id, token = customer

        response = _grant(client, token, user_id, password="guess")

        assert response.status_code == 403
        assert response.json() == {"error": "Invalid admin password"}
        assert db_session.query(UserRole).filter(UserRole.user_id == user_id).count() == 0

    def test_unknown_user(self, client, customer):
        response = _grant(client, customer[1], "00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

    def test_replaces_customer_role(self, client, customer, db_session):
        user_id, token = customer
        RoleRepository(db_session).replace_role(user_id, "customer")

        response = _grant(client, token, user_id)

        assert response.status_code == 200
        db_session.expire_all()
        rows = db_session.query(UserRole).filter(UserRole.user_id == user_id).all()
        assert [r.role for r in rows] == ["admin"]

    def test_granted_user_reaches_admin_routes(self, client, customer):
        user_id, token = customer
        assert client.get("/admin/stats", headers=auth_header(token)).status_code == 403

        _grant(client, token, user_id)

        assert client.get("/admin/stats", headers=auth_header(token)).status_code == 200

    def test_missing_fields_rejected(self, client, customer):
        response = client.post(GRANT_URL, json={"userId": customer[0]}, headers=auth_header(customer[1]))
        assert response.status_code == 422
