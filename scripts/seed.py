#!/usr/bin/env python
"""
Generate demo/seed data for development.
"""

import argparse
import asyncio
import sys

from sqlalchemy import select


# Add src to path for imports
sys.path.insert(0, "src")

from assetflow.config import settings
from assetflow.core.auth.backend import hash_password
from assetflow.core.database import Database
from assetflow.modules.assets.models import Asset
from assetflow.modules.organizations.models import Organization
from assetflow.modules.users.models import User, UserRole


DEMO_ASSETS = [
    {"name": "MacBook Pro 14", "serial_number": "SN-001", "type": "Laptop"},
    {"name": "Dell XPS 15", "serial_number": "SN-002", "type": "Laptop"},
    {"name": "iPhone 15 Pro", "serial_number": "SN-003", "type": "Phone"},
    {"name": "iPad Air", "serial_number": "SN-004", "type": "Tablet"},
    {"name": 'Monitor LG 27"', "serial_number": "SN-005", "type": "Monitor"},
]


async def seed_default(database: Database) -> None:
    """Create the demo organization, its admin and its equipment."""
    async with database.session() as session:
        result = await session.execute(
            select(Organization).where(Organization.slug == "demo")
        )
        organization = result.scalar_one_or_none()

        if organization:
            print(f"Demo organization already exists: {organization.name}")
        else:
            organization = Organization(name="Demo Organization", slug="demo")
            session.add(organization)
            await session.flush()
            print(f"Created organization: {organization.name} ({organization.id})")

        result = await session.execute(
            select(User).where(User.email == "admin@assetflow.com")
        )
        if result.scalar_one_or_none() is None:
            session.add(
                User(
                    name="Admin User",
                    email="admin@assetflow.com",
                    password_hash=hash_password("admin123"),
                    role=UserRole.ADMIN.value,
                    organization_id=organization.id,
                )
            )
            print("Created admin: admin@assetflow.com / admin123")

        for data in DEMO_ASSETS:
            result = await session.execute(
                select(Asset).where(Asset.serial_number == data["serial_number"])
            )
            if result.scalar_one_or_none():
                print(f"Asset already exists: {data['serial_number']}")
                continue

            session.add(Asset(organization_id=organization.id, **data))
            print(f"Created asset: {data['name']}")


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    database = Database(settings.async_database_url)
    try:
        if scenario == "default":
            await seed_default(database)
        else:
            print(f"Unknown scenario: {scenario}")
            print("Available scenarios: default")
            sys.exit(1)
    finally:
        await database.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with demo data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
