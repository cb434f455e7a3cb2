"""Push-notification device registration."""

from fastapi import APIRouter, Depends

from subsentinel.api.deps import get_current_user, get_device_service
from subsentinel.core.exceptions import NotFoundError
from subsentinel.models.user import User
from subsentinel.schemas.common import SuccessResponse
from subsentinel.schemas.device import DeviceRegister, DeviceResponse
from subsentinel.services.device import DeviceService

router = APIRouter(prefix="/register-device", tags=["devices"])


@router.post(
    "",
    response_model=DeviceResponse,
    summary="Register device token",
    description="Register an FCM token for the caller. Re-registering a token moves it to the caller.",
)
async def register_device(
    data: DeviceRegister,
    current_user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
) -> DeviceResponse:
    device = await service.register(data.token, data.platform, current_user.id)
    return DeviceResponse.model_validate(device)


@router.get("", response_model=list[DeviceResponse], summary="List caller's devices")
async def list_devices(
    current_user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
) -> list[DeviceResponse]:
    return [DeviceResponse.model_validate(d) for d in await service.list_for_user(current_user.id)]


@router.delete("/{token}", response_model=SuccessResponse, summary="Unregister device token")
async def unregister_device(
    token: str,
    current_user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
) -> SuccessResponse:
    if not await service.unregister(token, current_user.id):
        raise NotFoundError("RES_006")
    return SuccessResponse(success=True)
