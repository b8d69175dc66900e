#!/usr/bin/env python3
"""Seed product catalog script.

Loads the sample catalog into the database configured by
DATABASE_URL. Skips seeding when products already exist unless
--force is given.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --force
"""

import argparse
import asyncio

from catalog_api.catalog.repository import ProductRepository
from catalog_api.catalog.seed import seed_store
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import create_tables, dispose_engine, session_scope
from catalog_api.infrastructure.logging_config import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog database with sample products",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert the sample products even if the catalog is not empty",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)

    print("=" * 60)
    print("Product Catalog Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    try:
        async with session_scope() as session:
            inserted = await seed_store(ProductRepository(session), force=args.force)
    finally:
        await dispose_engine()

    if inserted:
        print(f"  ✓ Created: {inserted} products")
    else:
        print("  - Catalog not empty, nothing inserted (use --force)")

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
