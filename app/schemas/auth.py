"""Request/response schemas for user registration and login."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class AuthResponse(BaseModel):
    """Returned by register and login; token goes in Authorization: Bearer <token>."""

    message: str
    token: str = Field(..., description="JWT access token")


class CurrentUser(BaseModel):
    """Authenticated user (no password hash) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
