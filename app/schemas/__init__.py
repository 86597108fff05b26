from app.schemas.auth import AuthRequest, ProfileResponse, RegisterRequest, Token, UserResponse
from app.schemas.common import Message
from app.schemas.otp import CheckOtpRequest, OtpSent
from app.schemas.post import PostCreate, PostResponse, PostUpdate

__all__ = [
    "AuthRequest",
    "CheckOtpRequest",
    "Message",
    "OtpSent",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "ProfileResponse",
    "RegisterRequest",
    "Token",
    "UserResponse",
]
