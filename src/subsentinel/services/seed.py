"""Startup seeders for the default admin and the shared catalog.

Each seeder is a no-op when its data is already present, so running them on
every startup is safe.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.config import Settings
from subsentinel.core.security import hash_password
from subsentinel.models.admin import Admin
from subsentinel.models.category import Category
from subsentinel.models.subscription import Subscription
from subsentinel.repositories.admin import AdminRepository
from subsentinel.repositories.category import CategoryRepository
from subsentinel.repositories.subscription import SubscriptionRepository
from subsentinel.services.admin import normalize_username

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Entertainment", "icon": "movie", "color": "#E50914"},
    {"name": "Music", "icon": "music_note", "color": "#1DB954"},
    {"name": "Productivity", "icon": "work", "color": "#4285F4"},
    {"name": "Cloud Storage", "icon": "cloud", "color": "#5F6368"},
    {"name": "Gaming", "icon": "sports_esports", "color": "#9147FF"},
    {"name": "News", "icon": "newspaper", "color": "#1A73E8"},
    {"name": "Education", "icon": "school", "color": "#FF6D00"},
    {"name": "Health & Fitness", "icon": "fitness_center", "color": "#0F9D58"},
    {"name": "Finance", "icon": "account_balance", "color": "#34A853"},
    {"name": "Communication", "icon": "chat", "color": "#00BCD4"},
    {"name": "Shopping", "icon": "shopping_bag", "color": "#FF9800"},
    {"name": "Food & Delivery", "icon": "restaurant", "color": "#F44336"},
    {"name": "Transportation", "icon": "directions_car", "color": "#607D8B"},
    {"name": "Utilities", "icon": "build", "color": "#795548"},
]

DEFAULT_SUBSCRIPTIONS = [
    {"provider": "Netflix", "amount": 15.49, "category": "Entertainment"},
    {"provider": "Spotify", "amount": 10.99, "category": "Music"},
    {"provider": "YouTube Premium", "amount": 13.99, "category": "Entertainment"},
    {"provider": "Disney+", "amount": 13.99, "category": "Entertainment"},
    {"provider": "Apple Music", "amount": 10.99, "category": "Music"},
    {"provider": "HBO Max", "amount": 15.99, "category": "Entertainment"},
    {"provider": "Amazon Prime", "amount": 14.99, "category": "Shopping"},
    {"provider": "iCloud+", "amount": 2.99, "category": "Cloud Storage"},
    {"provider": "Google One", "amount": 2.99, "category": "Cloud Storage"},
    {"provider": "Dropbox", "amount": 11.99, "category": "Cloud Storage"},
    {"provider": "ChatGPT Plus", "amount": 20.00, "category": "Productivity"},
    {"provider": "Xbox Game Pass", "amount": 16.99, "category": "Gaming"},
]


async def seed_default_admin(db: AsyncSession, username: str, password: str) -> bool:
    repo = AdminRepository(db)
    username = normalize_username(username)
    if await repo.get_by_username(username) is not None:
        return False

    await repo.create(
        Admin(username=username, password_hash=hash_password(password), display_name="Admin")
    )
    logger.info("Seeded default admin")
    return True


async def seed_default_categories(db: AsyncSession) -> int:
    repo = CategoryRepository(db)
    if await repo.count_defaults() > 0:
        return 0

    db.add_all(Category(**category, is_default=True, user_id=None) for category in DEFAULT_CATEGORIES)
    await repo.commit()
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
    return len(DEFAULT_CATEGORIES)


async def seed_default_subscriptions(db: AsyncSession) -> int:
    repo = SubscriptionRepository(db)
    if await repo.count_templates() > 0:
        return 0

    categories = {c.name: c.id for c in await CategoryRepository(db).get_defaults()}
    now = datetime.now(timezone.utc)
    db.add_all(
        Subscription(
            provider=template["provider"],
            amount=template["amount"],
            currency="USD",
            is_default=True,
            user_id=None,
            category_id=categories.get(template["category"]),
            next_billing=now,
        )
        for template in DEFAULT_SUBSCRIPTIONS
    )
    await repo.commit()
    logger.info(f"Seeded {len(DEFAULT_SUBSCRIPTIONS)} default subscription templates")
    return len(DEFAULT_SUBSCRIPTIONS)


async def run_all_seeders(db: AsyncSession, settings: Settings) -> None:
    """Seed admin, then categories, then templates (templates link to categories)."""
    await seed_default_admin(db, settings.admin_username, settings.admin_password)
    await seed_default_categories(db)
    await seed_default_subscriptions(db)
