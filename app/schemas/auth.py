"""Request/response schemas for auth, profile and user-management endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

UserRole = Literal["customer", "admin"]


class RegisterRequest(BaseModel):
    """Sign-up form."""

    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: str = Field(..., min_length=3, max_length=255, description="E-mail address")
    phone: str | None = Field(default=None, max_length=32, description="Phone number")
    password: str = Field(..., min_length=6, max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="E-mail address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role) for dependency injection. Role read from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: UserRole


class UserProfile(BaseModel):
    """Profile row as shown to its owner and to admins."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str | None = None
    role: UserRole
    created_at: datetime | None = None


class SessionResponse(BaseModel):
    """Returned by register/login; the same token is also set in the session cookie."""

    access_token: str = Field(..., description="JWT session token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserProfile
    redirect_to: str = Field(..., description="Landing page for the user's role")


class ProfileUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=32)


class RoleUpdateRequest(BaseModel):
    role: UserRole


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[UserProfile]
