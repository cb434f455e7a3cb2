"""Onboarding preferences endpoints."""

from fastapi import APIRouter, Depends

from subsentinel.api.deps import get_current_user, get_preferences_service
from subsentinel.core.exceptions import NotFoundError
from subsentinel.models.user import User
from subsentinel.schemas.common import SuccessResponse
from subsentinel.schemas.preferences import OnboardingStatus, PreferencesResponse, PreferencesSave
from subsentinel.services.preferences import PreferencesService

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesResponse | None, summary="Get preferences")
async def get_preferences(
    current_user: User = Depends(get_current_user),
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesResponse | None:
    """Return the caller's preferences, or null before onboarding starts."""
    preferences = await service.get(current_user.id)
    return PreferencesResponse.model_validate(preferences) if preferences else None


@router.post("", response_model=PreferencesResponse, summary="Save preferences")
async def save_preferences(
    data: PreferencesSave,
    current_user: User = Depends(get_current_user),
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesResponse:
    preferences = await service.save(data, current_user.id)
    return PreferencesResponse.model_validate(preferences)


@router.get("/status", response_model=OnboardingStatus, summary="Onboarding status")
async def get_onboarding_status(
    current_user: User = Depends(get_current_user),
    service: PreferencesService = Depends(get_preferences_service),
) -> OnboardingStatus:
    return OnboardingStatus(onboarding_complete=await service.has_completed_onboarding(current_user.id))


@router.patch(
    "/complete",
    response_model=SuccessResponse,
    summary="Complete onboarding",
    responses={404: {"description": "Preferences have not been saved yet"}},
)
async def complete_onboarding(
    current_user: User = Depends(get_current_user),
    service: PreferencesService = Depends(get_preferences_service),
) -> SuccessResponse:
    if not await service.complete_onboarding(current_user.id):
        raise NotFoundError("RES_003")
    return SuccessResponse(success=True)
