#!/usr/bin/env python3
"""
Import motorcycles from an external brand/model JSON export.

Expects two files shaped like:
    brands.json: {"data": [{"id": 1, "name": "Honda"}, ...]}
    models.json: {"data": [{"brand_id": 1, "name": "CBR 600 RR"}, ...]}

The displacement is taken from the first 2-4 digit number in the model name
("CBR 600 RR" → 600), 0 when there is none. The export carries no years,
category or country, so every row gets DEFAULT_YEARS and "Unknown".

Usage:
    python scripts/import_catalog_json.py brands.json models.json [--replace]
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Any

from sqlalchemy import delete

from motoin.adapters.postgres_catalog_repository import PostgresCatalogRepository
from motoin.domain.catalog import UNKNOWN, ImportCandidate
from motoin.infra.db.models.catalog_entry import CatalogEntryRow
from motoin.infra.db.session import get_session
from motoin.use_cases.import_catalog import ImportCatalog, ImportRequest

DISPLACEMENT_PATTERN = re.compile(r"\b(\d{2,4})\b")
DEFAULT_YEARS = [2020, 2021, 2022]


def extract_displacement(model_name: str) -> int:
    match = DISPLACEMENT_PATTERN.search(model_name)
    return int(match.group(1)) if match else 0


def load_data(path: Path) -> list[dict[str, Any]]:
    with path.open(encoding="utf-8") as fh:
        payload = json.load(fh)
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected an object with a 'data' list")
    return data


def build_candidates(
    brands: list[dict[str, Any]], models: list[dict[str, Any]]
) -> list[ImportCandidate]:
    brand_names = {brand.get("id"): brand.get("name") for brand in brands}

    candidates = []
    for model in models:
        name = model.get("name")
        if not isinstance(name, str):
            continue
        candidates.append(
            ImportCandidate(
                make=brand_names.get(model.get("brand_id")) or UNKNOWN,
                model=name,
                displacement=extract_displacement(name),
                years=list(DEFAULT_YEARS),
            )
        )
    return candidates


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("brands", type=Path, help="Brands JSON file")
    parser.add_argument("models", type=Path, help="Models JSON file")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete every catalog entry before importing",
    )
    return parser.parse_args(argv)


def import_catalog_json(brands_path: Path, models_path: Path, replace: bool = False) -> None:
    candidates = build_candidates(load_data(brands_path), load_data(models_path))
    print(f"📥 Importing {len(candidates)} models...")

    with get_session() as session:
        if replace:
            deleted_count = session.execute(delete(CatalogEntryRow)).rowcount
            print(f"🗑️  Deleted {deleted_count} existing entries")

        use_case = ImportCatalog(catalog_repository=PostgresCatalogRepository(session=session))
        result = use_case.execute(ImportRequest(items=candidates))

    print(f"✅ Created {result.created} entries, skipped {result.skipped}")


if __name__ == "__main__":
    args = parse_args()
    try:
        import_catalog_json(args.brands, args.models, replace=args.replace)
    except Exception as e:
        print(f"❌ Error importing catalog: {e}", file=sys.stderr)
        sys.exit(1)
