"""
Health check endpoint.

Reports record counts only; never configuration or secrets.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.interfaces import ICredentialStore
from modules.sessions.interfaces import ISessionStore
from ..dependencies import get_credential_store, get_session_store

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    users: int
    sessions: int


@router.get("/health", response_model=HealthResponse)
def health_check(
    credentials: ICredentialStore = Depends(get_credential_store),
    sessions: ISessionStore = Depends(get_session_store),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 with user and session counts if the API is running.
    """
    return HealthResponse(
        status="ok",
        users=credentials.count(),
        sessions=sessions.count(),
    )
