"""Seed the default admin, default categories and subscription templates.

Usage:
    python scripts/seed_data.py [--create-tables]

Every seeder skips data that is already present, so the script can be re-run.
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from subsentinel.config import settings  # noqa: E402
from subsentinel.db.session import AsyncSessionLocal, async_engine, create_tables  # noqa: E402
from subsentinel.services.seed import (  # noqa: E402
    seed_default_admin,
    seed_default_categories,
    seed_default_subscriptions,
)


async def seed(create: bool) -> None:
    print("Starting seed data script...")
    if create:
        await create_tables()
        print("  Tables created")

    async with AsyncSessionLocal() as db:
        admin_created = await seed_default_admin(db, settings.admin_username, settings.admin_password)
        categories = await seed_default_categories(db)
        templates = await seed_default_subscriptions(db)

    await async_engine.dispose()

    print(f"\nAdmin '{settings.admin_username}': {'created' if admin_created else 'already present'}")
    print(f"Default categories seeded: {categories}")
    print(f"Subscription templates seeded: {templates}")
    print("\nSeed data loaded successfully!")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed SubSentinel reference data")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from the models before seeding (development databases)",
    )
    args = parser.parse_args()
    asyncio.run(seed(args.create_tables))


if __name__ == "__main__":
    main()
