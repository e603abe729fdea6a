"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from verified token claims and made available
    to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (lowercase username)")
    username: str = Field(..., description="Username the token was issued for")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
