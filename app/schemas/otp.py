"""Pydantic schemas for OTP issuance and verification."""

from pydantic import BaseModel, Field


class CheckOtpRequest(BaseModel):
    """Payload used when submitting a received OTP code for validation."""

    code: str = Field(pattern=r"^\d{5}$")


class OtpSent(BaseModel):
    """Response after a code was issued; `code` is omitted when not exposed."""

    message: str
    code: str | None = None
