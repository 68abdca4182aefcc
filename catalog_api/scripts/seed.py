"""Seed data export and import utilities.

Usage:
    # Export current database to seed file
    python -m catalog_api.scripts.seed export [path]

    # Load seed data into database
    python -m catalog_api.scripts.seed load [path]

    # Load seed data (clear existing first)
    python -m catalog_api.scripts.seed load [path] --clear

    # Load the built-in sample catalog
    python -m catalog_api.scripts.seed sample [--clear]
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from catalog_api.config import settings
from catalog_api.data.loader import export_catalog, load_catalog
from catalog_api.data.sample_catalog import SAMPLE_CATALOG
from catalog_api.models.database import Database

SEED_FILE = Path.cwd() / "seed_data.json"


def export_seed_data(database: Database, output_path: Path = SEED_FILE) -> dict:
    """Export all catalog tables to JSON."""
    db = database.session()

    try:
        seed_data = {
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "version": "1.0",
            **export_catalog(db),
        }

        # Write to file
        with open(output_path, "w") as f:
            json.dump(seed_data, f, indent=2)

        print(f"Exported seed data to {output_path}")
        print(f"  Categories: {len(seed_data['categories'])}")
        print(f"  Attributes: {len(seed_data['attributes'])}")
        print(f"  Category links: {len(seed_data['category_attributes'])}")
        print(f"  Products: {len(seed_data['products'])}")
        print(f"  Attribute values: {len(seed_data['product_attribute_values'])}")

        return seed_data

    finally:
        db.close()


def load_seed_data(
    database: Database, seed_data: dict, source: str, clear_existing: bool = False
) -> dict:
    """Load a seed document into the database and report what was added.

    Args:
        database: Target database
        seed_data: Seed document
        source: Where the document came from, for the report
        clear_existing: If True, delete all existing data first

    Returns:
        Dict with counts of loaded items
    """
    database.create_tables()
    db = database.session()

    try:
        if clear_existing:
            print("Clearing existing data...")
        stats = load_catalog(db, seed_data, clear_existing=clear_existing)

        print(f"Loaded seed data from {source}")
        print(f"  Categories: {stats['categories']} new")
        print(f"  Attributes: {stats['attributes']} new")
        print(f"  Category links: {stats['category_attributes']} new")
        print(f"  Products: {stats['products']} new")
        print(f"  Attribute values: {stats['product_attribute_values']} new")
        print(f"  Skipped (already exist): {stats['skipped']}")

        return stats

    finally:
        db.close()


def read_seed_file(input_path: Path) -> dict:
    """Read a seed document from disk."""
    if not input_path.exists():
        print(f"Error: Seed file not found: {input_path}")
        sys.exit(1)

    with open(input_path) as f:
        return json.load(f)


def main(argv: list[str] | None = None):
    """CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(__doc__)
        sys.exit(1)

    command = args[0]
    clear = "--clear" in args
    paths = [a for a in args[1:] if not a.startswith("--")]
    path = Path(paths[0]) if paths else SEED_FILE

    database = Database.from_settings(settings)
    try:
        if command == "export":
            export_seed_data(database, path)
        elif command == "load":
            load_seed_data(database, read_seed_file(path), str(path), clear_existing=clear)
        elif command == "sample":
            load_seed_data(database, SAMPLE_CATALOG, "sample catalog", clear_existing=clear)
        else:
            print(f"Unknown command: {command}")
            print(__doc__)
            sys.exit(1)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
