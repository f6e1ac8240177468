#!/usr/bin/env python3
"""Evidence Manager - Seed Data Script
Populate database with an administrator, investigators and sample cases
for development/testing.

Usage:
    python -m scripts.seed_data [--clear]
"""

import asyncio
import os

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import (
    Case,
    CaseRepository,
    Evidence,
    Officer,
    OfficerRepository,
    OfficerType,
    UnitOfWork,
)
from core.usecases import CreateCase, CreateOfficer
from core.viewmodels import CreateCaseViewModel, CreateOfficerViewModel


# Sample data
SAMPLE_OFFICERS = [
    {
        "username": "admin",
        "email": "admin@evidencemanager.local",
        "password": os.getenv("SEED_ADMIN_PASSWORD", "admin12345"),
        "officer_type": OfficerType.ADMINISTRATOR,
    },
    {
        "username": "jdoe",
        "email": "jane.doe@evidencemanager.local",
        "password": "investigator123",
        "officer_type": OfficerType.INVESTIGATOR,
    },
    {
        "username": "rsmith",
        "email": "robert.smith@evidencemanager.local",
        "password": "investigator123",
        "officer_type": OfficerType.INVESTIGATOR,
    },
]

# Owner username -> cases
SAMPLE_CASES = {
    "jdoe": [
        {"name": "Burglary 2024-01", "description": "Break-in on Main St"},
        {"name": "Vehicle theft 2024-07", "description": "Sedan taken from the 5th Ave garage"},
    ],
    "rsmith": [
        {"name": "Vandalism 2024-03", "description": "Graffiti on the city library"},
    ],
}


async def seed_database(db: AsyncSession, clear_existing: bool = False) -> dict[str, int]:
    """Seed the database through the regular use cases.

    Existing officers are skipped, so running twice is harmless.

    Returns:
        Number of officers and cases created
    """
    if clear_existing:
        print("Clearing existing data...")
        # Delete in order of dependencies
        await db.execute(delete(Evidence))
        await db.execute(delete(Case))
        await db.execute(delete(Officer))
        await db.commit()

    officers = OfficerRepository(db)
    cases = CaseRepository(db)
    unit_of_work = UnitOfWork(db)
    created = {"officers": 0, "cases": 0}

    print("\nCreating officers...")
    for officer_data in SAMPLE_OFFICERS:
        if await officers.get_by_username(officer_data["username"]) is not None:
            print(f"  Officer {officer_data['username']} already exists, skipping...")
            continue

        response = await CreateOfficer(officers, unit_of_work).run(
            CreateOfficerViewModel(**officer_data)
        )
        if not response.success:
            raise RuntimeError(f"Could not create {officer_data['username']}: {response.errors}")

        created["officers"] += 1
        print(f"  Created officer: {officer_data['username']} ({officer_data['officer_type'].value})")

        for case_data in SAMPLE_CASES.get(officer_data["username"], []):
            case_response = await CreateCase(cases, unit_of_work).run(
                CreateCaseViewModel(officer_id=response.value, **case_data)
            )
            if not case_response.success:
                raise RuntimeError(f"Could not create case {case_data['name']}: {case_response.errors}")

            created["cases"] += 1
            print(f"    Created case: {case_data['name']} ({case_response.value})")

    return created


async def main():
    """Main entry point."""
    import argparse

    from core.database.session import _get_async_session_local, close_db, init_db_async

    parser = argparse.ArgumentParser(description="Seed Evidence Manager database")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear existing data before seeding",
    )
    args = parser.parse_args()

    print("Initializing database...")
    await init_db_async()

    async with _get_async_session_local()() as db:
        created = await seed_database(db, clear_existing=args.clear)

    await close_db()

    print("\n" + "=" * 50)
    print(f"SEED DATA COMPLETE: {created['officers']} officers, {created['cases']} cases")
    print("=" * 50)
    print("\nSample Login Credentials:")
    print("-" * 50)
    for officer_data in SAMPLE_OFFICERS:
        print(f"  {officer_data['officer_type'].value:13} - {officer_data['username']}")
        print(f"                  Password: {officer_data['password']}")
    print("-" * 50)


if __name__ == "__main__":
    asyncio.run(main())
