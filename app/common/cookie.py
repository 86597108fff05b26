from typing import Any

from app.core.config import settings


def otp_cookie_options() -> dict[str, Any]:
    """Keyword arguments for `Response.set_cookie` when storing the OTP token."""
    return {
        "httponly": True,
        "max_age": settings.OTP_TOKEN_EXPIRE_SECONDS,
        "secure": settings.COOKIE_SECURE,
        "samesite": "lax",
    }
