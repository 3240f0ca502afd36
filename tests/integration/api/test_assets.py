"""Integration tests for asset listing and registration."""

import pytest

from assetflow.modules.assets.repos import AssetRepository
from assetflow.modules.users.models import UserRole
from factories.records import auth_headers, make_asset, make_organization, make_user
from factories.requests import AssetCreateFactory


pytestmark = pytest.mark.integration


class TestListAssets:
    async def test_list_ordered_by_name(self, client, db, organization, employee_headers):
        await make_asset(db, organization, name="Zebra Printer", serial_number="SN-Z")
        await make_asset(db, organization, name="Apple Monitor", serial_number="SN-A")

        response = await client.get("/api/v1/assets", headers=employee_headers)

        assert response.status_code == 200
        assert [a["name"] for a in response.json()] == ["Apple Monitor", "Zebra Printer"]

    async def test_list_empty(self, client, employee_headers):
        response = await client.get("/api/v1/assets", headers=employee_headers)

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_requires_token(self, client):
        response = await client.get("/api/v1/assets")

        assert response.status_code == 401


class TestCreateAsset:
    async def test_admin_creates_asset(self, client, organization, admin_headers):
        payload = {
            "name": "ThinkPad X1",
            "serial_number": "TP-0001",
            "type": "Laptop",
            "location": "Room 101",
        }

        response = await client.post("/api/v1/assets", json=payload, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["serial_number"] == "TP-0001"
        assert data["status"] == "OPERATIONAL"
        assert data["organization_id"] == organization.id

    async def test_employee_cannot_create(self, client, employee_headers):
        response = await client.post(
            "/api/v1/assets",
            json=AssetCreateFactory.build().model_dump(mode="json"),
            headers=employee_headers,
        )

        assert response.status_code == 403

    async def test_duplicate_serial_number(self, client, asset, admin_headers):
        payload = {"name": "Other", "serial_number": asset.serial_number, "type": "Laptop"}

        response = await client.post("/api/v1/assets", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "An asset with this serial number already exists."

    async def test_serial_number_is_globally_unique(self, client, db, asset):
        other = await make_organization(db, "Globex", "globex")
        other_admin = await make_user(db, other, "admin@globex.io", UserRole.ADMIN)
        payload = {"name": "Laptop", "serial_number": asset.serial_number, "type": "Laptop"}

        response = await client.post(
            "/api/v1/assets", json=payload, headers=auth_headers(other_admin)
        )

        assert response.status_code == 400

    async def test_concurrent_serial_number_hits_unique_index(
        self, client, asset, admin_headers, monkeypatch
    ):
        async def serial_unused(self, serial_number):
            return None

        monkeypatch.setattr(AssetRepository, "get_by_serial_number", serial_unused)
        payload = {"name": "Other", "serial_number": asset.serial_number, "type": "Laptop"}

        response = await client.post("/api/v1/assets", json=payload, headers=admin_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "An asset with this serial number already exists."
        assert body["type"].endswith("/errors/serial_number_exists")

    async def test_blank_name_rejected(self, client, admin_headers):
        payload = {"name": "  ", "serial_number": "SN-X", "type": "Laptop"}

        response = await client.post("/api/v1/assets", json=payload, headers=admin_headers)

        assert response.status_code == 400

    async def test_asset_quota_allows_exactly_the_limit(
        self, client, db, organization, admin_headers
    ):
        for i in range(4):
            await make_asset(db, organization, name=f"Asset {i}", serial_number=f"SN-{i}")

        response = await client.post(
            "/api/v1/assets",
            json=AssetCreateFactory.build().model_dump(mode="json"),
            headers=admin_headers,
        )

        assert response.status_code == 201

    async def test_free_plan_asset_limit(self, client, db, organization, admin_headers):
        for i in range(5):
            await make_asset(db, organization, name=f"Asset {i}", serial_number=f"SN-{i}")

        response = await client.post(
            "/api/v1/assets",
            json=AssetCreateFactory.build().model_dump(mode="json"),
            headers=admin_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == (
            "Your Free plan allows up to 5 assets. Please upgrade to add more."
        )
        assert body["current_count"] == 5

    async def test_inactive_paid_subscription_blocks_creation(self, client, db):
        organization = await make_organization(
            db,
            "Initech",
            "initech",
            subscription_tier="PRO",
            subscription_status="past_due",
        )
        admin = await make_user(db, organization, "boss@initech.io", UserRole.ADMIN)

        response = await client.post(
            "/api/v1/assets",
            json=AssetCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(admin),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "Your subscription is not active. Please update your payment method."
        )

    async def test_canceled_free_organization_keeps_free_quota(self, client, db):
        organization = await make_organization(
            db, "Initech", "initech", subscription_status="canceled"
        )
        admin = await make_user(db, organization, "boss@initech.io", UserRole.ADMIN)

        response = await client.post(
            "/api/v1/assets",
            json=AssetCreateFactory.build().model_dump(mode="json"),
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
