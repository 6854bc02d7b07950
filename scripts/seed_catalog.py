#!/usr/bin/env python3
"""
Seed the catalog with a fixed set of motorcycles.

Features:
- Deterministic: same dataset every run
- Idempotent: clears the catalog before seeding
- Goes through the import pipeline, so normalization and de-duplication
  behave exactly as for admin imports

Usage:
    python scripts/seed_catalog.py
"""

from __future__ import annotations

import sys

from sqlalchemy import delete

from motoin.adapters.postgres_catalog_repository import PostgresCatalogRepository
from motoin.domain.catalog import ImportCandidate
from motoin.infra.db.models.catalog_entry import CatalogEntryRow
from motoin.infra.db.session import get_session
from motoin.use_cases.import_catalog import ImportCatalog, ImportRequest


# ==============================================================================
# Sample catalog
# ==============================================================================

JAPAN = "Japan"
ITALY = "Italy"
GERMANY = "Germany"
AUSTRIA = "Austria"

# (make, model, displacement, first year, last year, category, country)
MOTORCYCLES = [
    ("Honda", "CBR 600 RR", 600, 2019, 2022, "Sport", JAPAN),
    ("Honda", "CBR 1000 RR", 1000, 2018, 2022, "Sport", JAPAN),
    ("Honda", "Africa Twin", 1084, 2020, 2024, "Adventure", JAPAN),
    ("Honda", "SH 125", 125, 2017, 2024, "Scooter", JAPAN),
    ("Yamaha", "MT-07", 700, 2017, 2023, "Naked", JAPAN),
    ("Yamaha", "MT-09", 890, 2021, 2024, "Naked", JAPAN),
    ("Yamaha", "YZF-R1", 998, 2015, 2024, "Sport", JAPAN),
    ("Yamaha", "TMAX 560", 562, 2020, 2024, "Scooter", JAPAN),
    ("Kawasaki", "Z 900", 948, 2017, 2024, "Naked", JAPAN),
    ("Kawasaki", "Ninja 650", 649, 2017, 2024, "Sport", JAPAN),
    ("Suzuki", "GSX-S 750", 749, 2017, 2021, "Naked", JAPAN),
    ("Suzuki", "V-Strom 650", 645, 2017, 2024, "Adventure", JAPAN),
    ("Ducati", "Panigale V4", 1103, 2018, 2023, "Sport", ITALY),
    ("Ducati", "Monster 937", 937, 2021, 2024, "Naked", ITALY),
    ("Ducati", "Multistrada V4", 1158, 2021, 2024, "Adventure", ITALY),
    ("Aprilia", "RS 660", 659, 2021, 2024, "Sport", ITALY),
    ("Aprilia", "Tuono V4", 1077, 2021, 2024, "Naked", ITALY),
    ("MV Agusta", "Brutale 800", 798, 2016, 2023, "Naked", ITALY),
    ("BMW", "R 1250 GS", 1254, 2019, 2023, "Adventure", GERMANY),
    ("BMW", "S 1000 RR", 999, 2019, 2024, "Sport", GERMANY),
    ("KTM", "390 Duke", 373, 2017, 2023, "Naked", AUSTRIA),
    ("KTM", "890 Adventure", 889, 2021, 2024, "Adventure", AUSTRIA),
]


def build_candidates() -> list[ImportCandidate]:
    return [
        ImportCandidate(
            make=make,
            model=model,
            displacement=displacement,
            years=list(range(first_year, last_year + 1)),
            category=category,
            country=country,
        )
        for make, model, displacement, first_year, last_year, category, country in MOTORCYCLES
    ]


def seed_catalog() -> None:
    print(f"🌱 Seeding catalog with {len(MOTORCYCLES)} motorcycles...")

    with get_session() as session:
        print("🗑️  Clearing existing catalog entries...")
        deleted_count = session.execute(delete(CatalogEntryRow)).rowcount
        print(f"   Deleted {deleted_count} existing entries")

        use_case = ImportCatalog(catalog_repository=PostgresCatalogRepository(session=session))
        result = use_case.execute(ImportRequest(items=build_candidates()))

        print(f"✅ Created {result.created} entries, skipped {result.skipped}")


if __name__ == "__main__":
    try:
        seed_catalog()
    except Exception as e:
        print(f"❌ Error seeding catalog: {e}", file=sys.stderr)
        sys.exit(1)
