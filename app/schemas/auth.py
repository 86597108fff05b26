"""Pydantic schemas for authentication-related payloads and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.common.enums import AuthMethod, RegisterMethod


class AuthRequest(BaseModel):
    """Payload for login attempts; `username` is matched per `method`."""

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    method: AuthMethod


class RegisterRequest(BaseModel):
    """Payload for registration requests."""

    username: str = Field(min_length=3, max_length=50)
    fullname: str = Field(min_length=1, max_length=100)
    email_or_phone: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=6, max_length=64)
    method: RegisterMethod


class Token(BaseModel):
    """Bearer token response returned after a verified OTP."""

    message: str
    access_token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    fullname: str
    bio: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Response body representing a user record."""

    id: int
    username: str
    email: str | None = None
    phone: str | None = None
    verify_email: bool
    verify_phone: bool
    created_at: datetime
    profile: ProfileResponse | None = None

    model_config = ConfigDict(from_attributes=True)
