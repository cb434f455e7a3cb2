"""HTTP routers."""

from fastapi import APIRouter

from subsentinel.api.routes import (
    admin,
    auth,
    categories,
    devices,
    health,
    payments,
    preferences,
    subscriptions,
)

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(subscriptions.router)
api_router.include_router(categories.router)
api_router.include_router(preferences.router)
api_router.include_router(devices.router)
api_router.include_router(payments.router)
api_router.include_router(admin.router)
