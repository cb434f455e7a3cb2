"""
Admin panel endpoints.

Every route except login requires an admin token; user tokens are rejected
because admin tokens carry their own audience and role claim.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile

from subsentinel.api.deps import (
    get_admin_service,
    get_blob_store,
    get_current_admin,
    get_user_service,
)
from subsentinel.config import settings
from subsentinel.core.exceptions import NotFoundError, ValidationError
from subsentinel.integrations.storage import BlobStore
from subsentinel.models.admin import Admin
from subsentinel.schemas.admin import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminResponse,
    UploadResponse,
)
from subsentinel.schemas.auth import UserResponse
from subsentinel.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from subsentinel.schemas.common import SuccessResponse
from subsentinel.schemas.subscription import SubscriptionResponse, TemplateCreate, TemplateUpdate
from subsentinel.services.admin import AdminService
from subsentinel.services.upload import store_upload, validate_upload
from subsentinel.services.user import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/auth/login",
    response_model=AdminLoginResponse,
    summary="Admin login",
    responses={401: {"description": "Invalid credentials"}},
)
async def admin_login(
    data: AdminLoginRequest,
    service: AdminService = Depends(get_admin_service),
) -> AdminLoginResponse:
    """
    Authenticate an administrator.

    Unknown usernames and wrong passwords produce the same response.
    """
    admin, token = await service.login(data.username, data.password)
    return AdminLoginResponse(admin=AdminResponse.model_validate(admin), token=token)


@router.get("/auth/me", response_model=AdminResponse, summary="Get current admin")
async def admin_me(admin: Admin = Depends(get_current_admin)) -> AdminResponse:
    return AdminResponse.model_validate(admin)


# Default categories


@router.get("/categories", response_model=list[CategoryResponse], summary="List all categories")
async def list_categories(
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in await service.list_categories()]


@router.post("/categories", response_model=CategoryResponse, summary="Create default category")
async def create_category(
    data: CategoryCreate,
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> CategoryResponse:
    category = await service.create_category(data)
    logger.info("Default category created", extra={"category_id": str(category.id), "admin_id": str(admin.id)})
    return CategoryResponse.model_validate(category)


@router.patch("/categories/{category_id}", response_model=CategoryResponse, summary="Update category")
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> CategoryResponse:
    category = await service.update_category(category_id, data)
    if category is None:
        raise NotFoundError("RES_002", message="Category not found")
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}", response_model=SuccessResponse, summary="Delete category")
async def delete_category(
    category_id: UUID,
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    if not await service.delete_category(category_id):
        raise NotFoundError("RES_002", message="Category not found")
    return SuccessResponse(success=True)


# Subscription templates


@router.get("/subscriptions", response_model=list[SubscriptionResponse], summary="List templates")
async def list_templates(
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> list[SubscriptionResponse]:
    return [SubscriptionResponse.model_validate(t) for t in await service.list_templates()]


@router.post("/subscriptions", response_model=SubscriptionResponse, summary="Create template")
async def create_template(
    data: TemplateCreate,
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> SubscriptionResponse:
    template = await service.create_template(data)
    return SubscriptionResponse.model_validate(template)


@router.patch("/subscriptions/{template_id}", response_model=SubscriptionResponse, summary="Update template")
async def update_template(
    template_id: UUID,
    data: TemplateUpdate,
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> SubscriptionResponse:
    template = await service.update_template(template_id, data)
    if template is None:
        raise NotFoundError("RES_005")
    return SubscriptionResponse.model_validate(template)


@router.delete("/subscriptions/{template_id}", response_model=SuccessResponse, summary="Delete template")
async def delete_template(
    template_id: UUID,
    admin: Admin = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    if not await service.delete_template(template_id):
        raise NotFoundError("RES_005")
    return SuccessResponse(success=True)


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload logo",
    description="Store an image (JPEG, PNG, GIF, WebP or SVG) and return its public URL.",
)
async def upload_file(
    file: UploadFile | None = File(None),
    admin: Admin = Depends(get_current_admin),
    blobs: BlobStore = Depends(get_blob_store),
) -> UploadResponse:
    """
    Upload a file to blob storage.

    Raises:
        400: No file, unsupported type or too large
        500: Storage failure
    """
    if file is None:
        raise ValidationError("UPL_001")
    max_size_mb = settings.upload_max_size_mb
    validate_upload(file.content_type, file.size or 0, max_size_mb)
    # One byte past the limit is enough for store_upload to reject the file.
    data = await file.read(max_size_mb * 1024 * 1024 + 1)
    url = await store_upload(
        blobs,
        data,
        content_type=file.content_type,
        filename=file.filename,
        max_size_mb=max_size_mb,
    )
    return UploadResponse(success=True, url=url)


# Users


@router.get("/users", response_model=list[UserResponse], summary="List users")
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    admin: Admin = Depends(get_current_admin),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in await service.list_users(skip=skip, limit=limit)]


@router.delete(
    "/users/{user_id}",
    response_model=SuccessResponse,
    summary="Delete user",
    description="""
    Delete a user and everything they own: preferences, device tokens,
    subscriptions and custom categories. The linked identity-provider
    account is removed on a best-effort basis.
    """,
    responses={404: {"description": "User not found"}},
)
async def delete_user(
    user_id: UUID,
    admin: Admin = Depends(get_current_admin),
    service: UserService = Depends(get_user_service),
) -> SuccessResponse:
    if not await service.delete_user(user_id):
        raise NotFoundError("RES_004")
    logger.info("User deleted by admin", extra={"user_id": str(user_id), "admin_id": str(admin.id)})
    return SuccessResponse(success=True)
