"""
Main FastAPI application entry point.
Configures the application, middleware, error envelopes and routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from clubhub.api.routes import (
    admin,
    announcements,
    auth,
    comments,
    contact,
    events,
    gallery,
    health,
    leadership,
    likes,
    members,
    news,
    reports,
    resources,
    system_settings,
)
from clubhub.core.config import settings
from clubhub.core.errors import ClubHubError, StoreError
from clubhub.core.logging import get_logger, log_request_error, setup_logging
from clubhub.core.security import get_token_issuer
from clubhub.db.session import create_db_engine, init_db
from clubhub.services.account_service import AccountService

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Startup builds the engine and token issuer (a missing secret is fatal),
    creates tables and bootstraps the first super admin. Shutdown disposes
    the engine.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    get_token_issuer()

    engine = create_db_engine()
    app.state.engine = engine
    init_db(engine)

    if not settings.DISABLE_BOOTSTRAP_USERS:
        with Session(engine) as session:
            account = AccountService.ensure_first_superuser(session)
            if account:
                logger.info(f"Super admin created: {account.username}")
    else:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS] or ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, "error": code})


@app.exception_handler(ClubHubError)
async def clubhub_error_handler(request: Request, exc: ClubHubError) -> JSONResponse:
    log_request_error(logger, request.method, request.url.path, exc.status_code, exc.code, exc.message)
    return error_response(exc.status_code, exc.message, exc.code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    log_request_error(logger, request.method, request.url.path, exc.status_code, "http_error", str(exc.detail))
    return error_response(exc.status_code, str(exc.detail), "http_error")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400, naming the missing fields."""
    missing = []
    invalid = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        field = loc[-1] if loc else "body"
        if error.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field}: {error.get('msg')}")

    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        message = f"Invalid request: {'; '.join(invalid)}"
    log_request_error(
        logger, request.method, request.url.path, status.HTTP_400_BAD_REQUEST, "validation_error", message
    )
    return error_response(status.HTTP_400_BAD_REQUEST, message, "validation_error")


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    error = StoreError()
    log_request_error(
        logger, request.method, request.url.path, error.status_code, error.code, str(exc), exc_info=exc
    )
    return error_response(error.status_code, error.message, error.code)


# API routers
for module in (
    health,
    auth,
    admin,
    members,
    events,
    news,
    announcements,
    comments,
    likes,
    gallery,
    leadership,
    resources,
    reports,
    contact,
    system_settings,
):
    app.include_router(module.router, prefix=settings.API_PREFIX)

# Uploaded files; the directory may not exist until the first upload.
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
