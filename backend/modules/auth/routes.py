"""
Authentication API endpoints.

Login, token verification and admin user creation.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies import get_app_settings, get_credential_store, get_token_service
from api.middleware.auth import authenticate_credentials, bearer_scheme, get_current_user
from shared.config import Settings
from shared.models import AuthenticatedUser

from .interfaces import ICredentialStore, ITokenService
from .models import (
    CreateUserRequest,
    CreateUserResponse,
    LoginRequest,
    LoginResponse,
    UserSummary,
    VerifyResponse,
)
from .exceptions import (
    AdminCreationDisabledError,
    AdminRequiredError,
    InvalidCredentialsError,
    MissingCredentialsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def require_admin_create(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    tokens: ITokenService = Depends(get_token_service),
) -> Optional[AuthenticatedUser]:
    """
    Guard for user creation, driven by ``admin_user_creation``.

    open: anyone may create users (returns None).
    admin: caller must hold a valid token for an account in ``admin_usernames``.
    disabled: always rejected.
    """
    mode = settings.admin_create_mode
    if mode == "open":
        return None
    if mode == "disabled":
        raise AdminCreationDisabledError()

    user = authenticate_credentials(credentials, tokens)
    admins = {name.strip().lower() for name in settings.admin_usernames}
    if user.id not in admins:
        raise AdminRequiredError(user.id)
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    store: ICredentialStore = Depends(get_credential_store),
    tokens: ITokenService = Depends(get_token_service),
) -> LoginResponse:
    """
    Exchange username and password for a bearer token.

    Unknown users and wrong passwords get the same 401.
    """
    if not request.username or not request.password:
        raise MissingCredentialsError()

    user = store.authenticate(request.username, request.password)
    if user is None:
        logger.info("Failed login for %r", request.username)
        raise InvalidCredentialsError()

    token = tokens.issue(user.id, user.id)
    return LoginResponse(token=token, user=UserSummary.from_user(user))


@router.get("/verify", response_model=VerifyResponse)
def verify(
    user: AuthenticatedUser = Depends(get_current_user),
    store: ICredentialStore = Depends(get_credential_store),
) -> VerifyResponse:
    """
    Return the user behind the bearer token.

    Requires authentication.
    """
    record = store.find(user.id)
    if record is None:
        raise UserNotFoundError(user.id)
    return VerifyResponse(user=UserSummary.from_user(record))


@router.post("/admin/users", response_model=CreateUserResponse)
def create_user(
    request: CreateUserRequest,
    admin: Optional[AuthenticatedUser] = Depends(require_admin_create),
    store: ICredentialStore = Depends(get_credential_store),
) -> CreateUserResponse:
    """
    Create a user account.

    Open to unauthenticated callers when ``admin_user_creation`` is ``open``.
    """
    if not request.username or not request.password:
        raise MissingCredentialsError()

    user = store.create(request.username, request.password, request.name)
    logger.info(
        "User %s created via API by %s", user.id, admin.id if admin else "anonymous"
    )
    return CreateUserResponse(user_id=user.id)
