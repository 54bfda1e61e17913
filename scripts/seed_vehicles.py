#!/usr/bin/env python3
"""
Seed the vehicles table with common pickup truck ranges.

Features:
- Idempotent: safe to run multiple times (clears before seeding)
- Registers a local development store when BC_LOCAL_STORE_HASH and
  BC_LOCAL_ACCESS_TOKEN are set, so the storefront endpoints can be tried
  without going through the app install flow

Usage:
    python scripts/seed_vehicles.py
    # or via Docker:
    docker compose run --rm api uv run python scripts/seed_vehicles.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ymm_fitment.adapters.postgres_store_repository import PostgresStoreRepository
from ymm_fitment.domain.store import Store, clean_store_hash
from ymm_fitment.infra.db.models import ProductVehicleRow, VehicleRow
from ymm_fitment.infra.db.session import get_session


# ==============================================================================
# Truck Data
# ==============================================================================

# (year_start, year_end, make, model)
VEHICLES = [
    (2015, 2020, "Ford", "F-150"),
    (2021, 2023, "Ford", "F-150"),
    (2014, 2018, "Chevrolet", "Silverado 1500"),
    (2019, 2023, "Chevrolet", "Silverado 1500"),
    (2013, 2018, "Ram", "1500"),
    (2019, 2023, "Ram", "1500"),
    (2016, 2023, "Toyota", "Tacoma"),
    (2014, 2018, "GMC", "Sierra 1500"),
    (2019, 2023, "GMC", "Sierra 1500"),
    (2017, 2023, "Honda", "Ridgeline"),
    (2016, 2023, "Nissan", "Titan"),
    (2019, 2023, "Ford", "Ranger"),
    (2015, 2023, "Chevrolet", "Colorado"),
    (2015, 2023, "GMC", "Canyon"),
    (2020, 2023, "Jeep", "Gladiator"),
]


# ==============================================================================
# Seed Generation
# ==============================================================================


def seed_vehicles(store_hash: str | None = None) -> None:
    """
    Replace every vehicle range with the truck list above.

    Args:
        store_hash: Owning store for the new ranges (None = shared catalog)
    """
    print(f"🌱 Seeding database with {len(VEHICLES)} vehicle ranges...")

    with get_session() as session:
        # Step 1: Clear existing data (links first, they reference vehicles)
        print("🗑️  Clearing existing vehicles...")
        deleted_links = session.query(ProductVehicleRow).delete()
        deleted_count = session.query(VehicleRow).delete()
        print(f"   Deleted {deleted_count} existing vehicles and {deleted_links} links")

        # Step 2: Insert the ranges
        rows = [
            VehicleRow(
                year_start=year_start,
                year_end=year_end,
                make=make,
                model=model,
                is_active=True,
                store_hash=store_hash,
            )
            for year_start, year_end, make, model in VEHICLES
        ]
        session.add_all(rows)
        session.flush()

        print(f"✅ Successfully seeded {len(rows)} vehicle ranges!")

        print("\n📊 Sample vehicles:")
        for i, row in enumerate(rows[:5], 1):
            print(f"   {i}. {row.year_start}-{row.year_end} {row.make} {row.model}")

        if len(rows) > 5:
            print(f"   ... and {len(rows) - 5} more")


def seed_local_store() -> str | None:
    """Upsert the development store from the environment, if configured."""
    store_hash = os.getenv("BC_LOCAL_STORE_HASH")
    access_token = os.getenv("BC_LOCAL_ACCESS_TOKEN")
    if not store_hash or not access_token:
        print("ℹ️  BC_LOCAL_STORE_HASH / BC_LOCAL_ACCESS_TOKEN not set, skipping store")
        return None

    store_hash = clean_store_hash(store_hash)
    with get_session() as session:
        PostgresStoreRepository(session=session).save(
            Store(
                store_hash=store_hash,
                access_token=access_token,
                store_name="Local Development Store",
            )
        )

    print(f"🏪 Registered local store {store_hash}")
    return store_hash


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_vehicles(store_hash=seed_local_store())
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
