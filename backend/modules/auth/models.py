"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    A stored account.

    Serialized with camelCase aliases, which is the credential file format.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Lowercase username, primary key")
    password_hash: str = Field(..., alias="passwordHash", description="bcrypt hash")
    name: str = Field(..., description="Display name")


class UserSummary(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str
    name: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, name=user.name)


class TokenIdentity(BaseModel):
    """Identity bound into a bearer token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(..., alias="userId")
    username: str


class LoginRequest(BaseModel):
    """Login body. Fields are optional so missing values map to a 400."""

    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """Successful login."""

    token: str
    user: UserSummary


class VerifyResponse(BaseModel):
    """Current user behind a valid token."""

    user: UserSummary


class CreateUserRequest(BaseModel):
    """Admin user creation body."""

    username: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class CreateUserResponse(BaseModel):
    """Admin user creation result."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user_id: str = Field(..., alias="userId")
