"""Integration tests for registration, login, profile and invitations."""

import pytest

from assetflow.core.auth.service import AuthService
from assetflow.modules.users.models import UserRole
from factories.records import TEST_PASSWORD, auth_headers, make_organization, make_user
from factories.requests import InviteRequestFactory, RegisterRequestFactory


pytestmark = pytest.mark.integration


class TestRegister:
    async def test_register_founds_organization(self, client, mailer):
        payload = {"name": "Ada", "email": "ada@example.com", "password": "secret1"}

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["user"]["role"] == "ADMIN"
        assert data["user"]["email"] == "ada@example.com"
        assert "password_hash" not in data["user"]
        assert data["token"]

        me = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
        )
        assert me.json()["organization"]["name"] == "Ada's Organization"
        assert mailer.sent[0]["subject"] == "Welcome to AssetFlow - Ada's Organization"

    async def test_register_duplicate_email(self, client):
        payload = RegisterRequestFactory.build().model_dump()
        await client.post("/api/v1/auth/register", json=payload)

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "User with this email already exists."

    async def test_concurrent_registration_hits_unique_email(
        self, client, admin, monkeypatch
    ):
        async def email_available(self, email):
            return None

        monkeypatch.setattr(AuthService, "_ensure_email_available", email_available)
        payload = {"name": "Twin", "email": admin.email, "password": "secret1"}

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "User with this email already exists."
        assert body["type"].endswith("/errors/email_exists")

    async def test_register_short_password(self, client):
        payload = {"name": "Ada", "email": "ada@example.com", "password": "12345"}

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["errors"][0]["field"] == "password"
        assert "at least 6 characters" in body["detail"]

    async def test_register_invalid_email(self, client):
        payload = {"name": "Ada", "email": "not-an-email", "password": "secret1"}

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 400

    async def test_register_missing_fields(self, client):
        response = await client.post("/api/v1/auth/register", json={})

        assert response.status_code == 400
        assert {e["field"] for e in response.json()["errors"]} == {
            "name",
            "email",
            "password",
        }

    async def test_registrations_get_separate_organizations(self, client):
        first = await client.post(
            "/api/v1/auth/register", json=RegisterRequestFactory.build().model_dump()
        )
        second = await client.post(
            "/api/v1/auth/register", json=RegisterRequestFactory.build().model_dump()
        )

        me1 = await client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {first.json()['token']}"},
        )
        me2 = await client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {second.json()['token']}"},
        )
        assert me1.json()["organization_id"] != me2.json()["organization_id"]


class TestLogin:
    async def test_login_success(self, client, admin):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": admin.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["id"] == admin.id
        assert data["user"]["organization"]["slug"] == "acme"

    async def test_login_wrong_password(self, client, admin):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": admin.email, "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password."

    async def test_login_unknown_email(self, client):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password."

    async def test_login_missing_password(self, client):
        response = await client.post("/api/v1/auth/login", json={"email": "a@b.io"})

        assert response.status_code == 400


class TestMe:
    async def test_me(self, client, employee, employee_headers):
        response = await client.get("/api/v1/auth/me", headers=employee_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == employee.email
        assert data["role"] == "EMPLOYEE"
        assert data["organization"]["name"] == "Acme"

    async def test_me_without_token(self, client):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Access denied. No token provided."

    async def test_me_with_invalid_token(self, client):
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid or expired token."


class TestInvite:
    async def test_invite_employee(self, client, admin_headers, mailer):
        payload = InviteRequestFactory.build().model_dump()

        response = await client.post(
            "/api/v1/auth/invite", json=payload, headers=admin_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User invited successfully"
        assert data["user"]["role"] == "EMPLOYEE"
        assert mailer.recipients() == [payload["email"]]

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        assert login.status_code == 200
        assert login.json()["user"]["organization"]["slug"] == "acme"

    async def test_invite_requires_admin(self, client, employee_headers):
        response = await client.post(
            "/api/v1/auth/invite",
            json=InviteRequestFactory.build().model_dump(),
            headers=employee_headers,
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied. Admin privileges required."

    async def test_invite_existing_email(self, client, admin, admin_headers):
        payload = {"name": "Dup", "email": admin.email, "password": "secret1"}

        response = await client.post(
            "/api/v1/auth/invite", json=payload, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "User with this email already exists."

    async def test_user_quota_allows_exactly_the_limit(self, client, admin_headers):
        response = await client.post(
            "/api/v1/auth/invite",
            json=InviteRequestFactory.build().model_dump(),
            headers=admin_headers,
        )

        assert response.status_code == 201
        members = await client.get("/api/v1/users", headers=admin_headers)
        assert len(members.json()) == 2

    async def test_invite_blocked_by_free_user_limit(
        self, client, admin_headers, employee
    ):
        response = await client.post(
            "/api/v1/auth/invite",
            json=InviteRequestFactory.build().model_dump(),
            headers=admin_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == (
            "Your Free plan allows up to 2 users. Please upgrade to add more."
        )
        assert body["current_count"] == 2
        assert body["limit"] == 2
        assert body["tier"] == "FREE"

    async def test_invite_allowed_on_pro(self, client, db):
        organization = await make_organization(
            db, "Initech", "initech", subscription_tier="PRO"
        )
        boss = await make_user(db, organization, "boss@initech.io", UserRole.ADMIN)
        await make_user(db, organization, "peon@initech.io")

        response = await client.post(
            "/api/v1/auth/invite",
            json=InviteRequestFactory.build().model_dump(),
            headers=auth_headers(boss),
        )

        assert response.status_code == 201
