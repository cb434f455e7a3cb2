"""Integration tests for the startup seeders."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.config import Settings
from subsentinel.core.security import verify_password
from subsentinel.repositories.admin import AdminRepository
from subsentinel.repositories.subscription import SubscriptionRepository
from subsentinel.services.seed import (
    DEFAULT_CATEGORIES,
    DEFAULT_SUBSCRIPTIONS,
    run_all_seeders,
    seed_default_admin,
    seed_default_categories,
    seed_default_subscriptions,
)


@pytest.mark.asyncio
async def test_run_all_seeders(db_session: AsyncSession):
    settings = Settings(jwt_secret="x", admin_username="Root", admin_password="s3cret")

    await run_all_seeders(db_session, settings)

    admin = await AdminRepository(db_session).get_by_username("root")
    assert admin is not None
    assert verify_password("s3cret", admin.password_hash)

    templates = await SubscriptionRepository(db_session).get_templates()
    assert len(templates) == len(DEFAULT_SUBSCRIPTIONS)
    assert all(t.category_id is not None for t in templates)
    assert all(t.next_billing is not None for t in templates)


@pytest.mark.asyncio
async def test_seeders_are_idempotent(db_session: AsyncSession):
    assert await seed_default_admin(db_session, "admin", "pw") is True
    assert await seed_default_categories(db_session) == len(DEFAULT_CATEGORIES)
    assert await seed_default_subscriptions(db_session) == len(DEFAULT_SUBSCRIPTIONS)

    assert await seed_default_admin(db_session, "admin", "other") is False
    assert await seed_default_categories(db_session) == 0
    assert await seed_default_subscriptions(db_session) == 0
