import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from subsentinel import __version__
from subsentinel.api.middleware.error_handler import (
    handle_app_error,
    handle_generic_error,
    handle_http_exception,
    handle_integrity_error,
    handle_validation_error,
)
from subsentinel.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from subsentinel.api.routes import api_router
from subsentinel.config import settings
from subsentinel.core.exceptions import AppError
from subsentinel.db.session import AsyncSessionLocal, create_tables
from subsentinel.integrations import build_providers
from subsentinel.services.seed import run_all_seeders

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.database_url.startswith("sqlite"):
        await create_tables()
    if settings.seed_on_startup:
        async with AsyncSessionLocal() as db:
            await run_all_seeders(db, settings)
    logger.info("SubSentinel backend started")
    yield
    # Shutdown


def create_app() -> FastAPI:
    configure_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="SubSentinel API",
        description="Subscription tracking backend",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.state.providers = build_providers(settings)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Uploaded logos are served from the blob store directory.
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

    app.include_router(api_router)

    return app


app = create_app()
