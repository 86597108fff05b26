"""Password hashing and JWT helpers for OTP and access tokens."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.common.enums import AuthMessage
from app.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

OTP_TOKEN_TYPE = "otp"
ACCESS_TOKEN_TYPE = "access"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


@dataclass
class TokenPayload:
    """Decoded claims shared by OTP and access tokens."""

    user_id: int


class TokenService:
    """Sign and verify the two JWT kinds issued by the auth flow."""

    def __init__(
        self,
        otp_secret: str | None = None,
        access_secret: str | None = None,
        algorithm: str | None = None,
    ) -> None:
        self.otp_secret = otp_secret or settings.OTP_TOKEN_SECRET
        self.access_secret = access_secret or settings.ACCESS_TOKEN_SECRET
        self.algorithm = algorithm or settings.ALGORITHM

    def _encode(self, payload: TokenPayload, token_type: str, secret: str, expires_delta: timedelta) -> str:
        to_encode = {
            "sub": str(payload.user_id),
            "typ": token_type,
            "exp": datetime.now(timezone.utc) + expires_delta,
        }
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str, secret: str, failure: AuthMessage) -> TokenPayload:
        try:
            claims = jwt.decode(token, secret, algorithms=[self.algorithm])
            if claims.get("typ") != token_type:
                raise JWTError("unexpected token type")
            return TokenPayload(user_id=int(claims["sub"]))
        except (JWTError, KeyError, ValueError, TypeError):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=failure.value)

    def create_otp_token(self, payload: TokenPayload) -> str:
        expires_delta = timedelta(seconds=settings.OTP_TOKEN_EXPIRE_SECONDS)
        return self._encode(payload, OTP_TOKEN_TYPE, self.otp_secret, expires_delta)

    def verify_otp_token(self, token: str) -> TokenPayload:
        """Decode an OTP token; any failure means the code window is gone."""
        return self._decode(token, OTP_TOKEN_TYPE, self.otp_secret, AuthMessage.ExpiredCode)

    def create_access_token(self, payload: TokenPayload) -> str:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return self._encode(payload, ACCESS_TOKEN_TYPE, self.access_secret, expires_delta)

    def verify_access_token(self, token: str) -> TokenPayload:
        return self._decode(token, ACCESS_TOKEN_TYPE, self.access_secret, AuthMessage.LoginAgain)
