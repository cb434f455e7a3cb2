"""Category endpoints: defaults plus the caller's custom categories."""

from uuid import UUID

from fastapi import APIRouter, Depends

from subsentinel.api.deps import get_category_service, get_current_user
from subsentinel.core.exceptions import NotFoundError
from subsentinel.models.user import User
from subsentinel.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from subsentinel.schemas.common import SuccessResponse
from subsentinel.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
    description="Default categories first, then the caller's own, each alphabetically.",
)
async def list_categories(
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    categories = await service.list_for_user(current_user.id)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post(
    "",
    response_model=CategoryResponse,
    summary="Create custom category",
    responses={409: {"description": "Category name already used by this user"}},
)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """
    Create a custom category owned by the caller.

    A custom category may share its name with a default category, but not
    with another category of the same user.
    """
    category = await service.create(data, current_user.id)
    return CategoryResponse.model_validate(category)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update custom category",
    responses={404: {"description": "Category not found or cannot be modified"}},
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await service.update(category_id, data, current_user.id)
    if category is None:
        raise NotFoundError("RES_002")
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}",
    response_model=SuccessResponse,
    summary="Delete custom category",
    responses={404: {"description": "Category not found or cannot be deleted"}},
)
async def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> SuccessResponse:
    if not await service.delete(category_id, current_user.id):
        raise NotFoundError("RES_002", message="Category not found or cannot be deleted")
    return SuccessResponse(success=True)
