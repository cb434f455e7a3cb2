"""Onboarding preferences service."""
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.preferences import AlertTiming, SpendingAwareness, UserPreferences
from subsentinel.repositories.preferences import PreferencesRepository
from subsentinel.schemas.preferences import PreferencesSave


class PreferencesService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.preferences_repo = PreferencesRepository(db)

    async def get(self, user_id: UUID) -> UserPreferences | None:
        return await self.preferences_repo.get_by_user(user_id)

    async def save(self, data: PreferencesSave, user_id: UUID) -> UserPreferences:
        """Create or update the user's single preferences record.

        Omitted optional fields reset to their defaults; ``categories`` is
        left untouched unless provided.
        """
        update_data: dict = {
            "budget": data.budget,
            "spending_awareness": data.spending_awareness or SpendingAwareness.UNSURE,
            "pain_points": data.pain_points or [],
            "goals": data.goals or [],
            "alert_timing": data.alert_timing or AlertTiming.DAY,
        }
        if data.categories is not None:
            update_data["categories"] = [str(category_id) for category_id in data.categories]

        return await self.preferences_repo.upsert(user_id, update_data)

    async def complete_onboarding(self, user_id: UUID) -> bool:
        """Mark onboarding complete. Returns False when no record exists."""
        preferences = await self.preferences_repo.get_by_user(user_id)
        if preferences is None:
            return False
        await self.preferences_repo.apply(preferences, {"onboarding_complete": True})
        return True

    async def has_completed_onboarding(self, user_id: UUID) -> bool:
        preferences = await self.preferences_repo.get_by_user(user_id)
        return preferences.onboarding_complete if preferences else False
