"""Integration tests for the organization member listing."""

import pytest

from factories.records import make_organization, make_user


pytestmark = pytest.mark.integration


async def test_admin_lists_members(client, db, admin, employee, admin_headers):
    other = await make_organization(db, "Globex", "globex")
    await make_user(db, other, "someone@globex.io")

    response = await client.get("/api/v1/users", headers=admin_headers)

    assert response.status_code == 200
    emails = {u["email"] for u in response.json()}
    assert emails == {admin.email, employee.email}
    assert all("password_hash" not in u for u in response.json())


async def test_employee_cannot_list_members(client, employee_headers):
    response = await client.get("/api/v1/users", headers=employee_headers)

    assert response.status_code == 403
