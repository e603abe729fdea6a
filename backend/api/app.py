"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modules.auth.exceptions import InvalidTokenError
from modules.auth.routes import router as auth_router
from modules.sessions.routes import router as sessions_router
from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BeeleeError,
    ConfigurationError,
    ConflictError,
    StorageError,
    ValidationError,
)

from .dependencies import ServiceContainer, get_container
from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import health

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ("POST", "/api/login", "Login"),
    ("GET", "/api/verify", "Verify token"),
    ("GET", "/api/recipes", "Get recipes"),
    ("POST", "/api/recipes", "Save recipe"),
    ("DELETE", "/api/recipes/:id", "Delete recipe"),
    ("GET", "/api/basket", "Get basket"),
    ("POST", "/api/basket", "Update basket"),
    ("DELETE", "/api/basket", "Clear basket"),
    ("POST", "/api/admin/users", "Add user"),
    ("GET", "/api/health", "Health check"),
)


def check_startup(container: ServiceContainer) -> None:
    """
    Load both stores and refuse unsafe production configurations.

    Raises:
        ConfigurationError: Production with a missing/placeholder secret
            or seeded accounts that still have their default passwords
        StorageError: If a snapshot cannot be loaded
    """
    settings = container.settings
    settings.validate_for_startup()

    # Property access loads the stores and builds the token service
    credentials = container.credentials
    _ = container.sessions, container.tokens

    if settings.is_production and credentials.uses_default_passwords():
        raise ConfigurationError(
            "Default seeded accounts still use their well-known passwords",
            details={"setting": "seed_default_users"},
        )

    if settings.admin_create_mode == "open":
        logger.warning(
            "POST /api/admin/users accepts unauthenticated requests "
            "(ADMIN_USER_CREATION=open)"
        )


def log_banner(container: ServiceContainer) -> None:
    settings = container.settings
    credentials = container.credentials
    lines = [
        f"{settings.app_name} running",
        f"Port: {settings.port}",
        f"Users: {credentials.count()}",
        f"Sessions: {container.sessions.count()}",
        "",
        "API Endpoints:",
    ]
    lines += [f"  {method:<6} {path:<19} - {label}" for method, path, label in ENDPOINTS]
    lines += ["", "Current Users:"]
    lines += [f"  - {user.id} ({user.name})" for user in credentials.list_users()]
    logger.info("\n".join(lines))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    container = get_container()
    settings = container.settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    check_startup(container)
    log_banner(container)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def status_for(exc: BeeleeError) -> int:
    """HTTP status for a domain exception."""
    if isinstance(exc, InvalidTokenError):
        return 403
    if isinstance(exc, (ValidationError, ConflictError)):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    return 500


async def beelee_error_handler(request: Request, exc: BeeleeError) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        body = ErrorResponse(error="Storage failure", code=exc.code)
    elif status_code == 500:
        logger.error("Unhandled %s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
        body = ErrorResponse(error="Internal server error", code=exc.code)
    else:
        body = ErrorResponse(**exc.to_dict())

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    body = ValidationErrorResponse(detail=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, recipes and shopping baskets",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(BeeleeError, beelee_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(sessions_router, prefix="/api", tags=["sessions"])

    return app


# Application instance for uvicorn
app = create_app()
