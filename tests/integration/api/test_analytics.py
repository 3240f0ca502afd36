"""Integration tests for the admin dashboard."""

from datetime import UTC, datetime

import pytest

from assetflow.modules.tickets.models import TicketStatus
from factories.records import make_asset, make_organization, make_ticket, make_user


pytestmark = pytest.mark.integration


async def test_dashboard(client, db, organization, employee, asset, admin_headers):
    printer = await make_asset(db, organization, name="Printer", serial_number="SN-P")
    await make_ticket(db, employee, asset, status=TicketStatus.CLOSED)
    await make_ticket(db, employee, asset, status=TicketStatus.CLOSED)
    await make_ticket(db, employee, asset)
    await make_ticket(db, employee, printer)

    response = await client.get("/api/v1/analytics/dashboard", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["summary"] == {
        "total_tickets": 4,
        "open_tickets": 2,
        "closed_tickets": 2,
        "total_assets": 2,
    }
    assert data["tickets_by_asset"] == [
        {"asset_id": asset.id, "asset_name": "MacBook Pro 14", "count": 3},
        {"asset_id": printer.id, "asset_name": "Printer", "count": 1},
    ]
    today = datetime.now(UTC).date().isoformat()
    assert data["timeline"] == [{"date": today, "open": 2, "closed": 2}]


async def test_dashboard_empty(client, admin_headers):
    response = await client.get("/api/v1/analytics/dashboard", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_tickets"] == 0
    assert data["tickets_by_asset"] == []
    assert data["timeline"] == []


async def test_dashboard_excludes_other_organizations(
    client, db, admin_headers, asset
):
    other = await make_organization(db, "Globex", "globex")
    other_user = await make_user(db, other, "x@globex.io")
    other_asset = await make_asset(db, other, serial_number="GX-1")
    await make_ticket(db, other_user, other_asset)

    response = await client.get("/api/v1/analytics/dashboard", headers=admin_headers)

    assert response.json()["summary"]["total_tickets"] == 0
    assert response.json()["summary"]["total_assets"] == 1


async def test_dashboard_requires_admin(client, employee_headers):
    response = await client.get(
        "/api/v1/analytics/dashboard", headers=employee_headers
    )

    assert response.status_code == 403
