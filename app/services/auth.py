"""Authentication domain logic: credential checks, OTP issuance, token minting."""

import logging
import re
import secrets
from datetime import datetime, timedelta, timezone

from email_validator import EmailNotValidError, validate_email
from fastapi import HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.common.cookie import otp_cookie_options
from app.common.enums import AuthMessage, AuthMethod, BadRequestMessage, CookieKeys, PublicMessage, RegisterMethod
from app.core.config import settings
from app.core.security import TokenPayload, TokenService, get_password_hash, verify_password
from app.db.models import Otp, Profile, User
from app.schemas.auth import AuthRequest, RegisterRequest, Token
from app.schemas.otp import OtpSent
from app.services.email import send_otp_email

logger = logging.getLogger(__name__)

# fa-IR mobile numbers: 090x-093x and 099x, optional +98/98 prefix, -/space separators
IR_MOBILE_RE = re.compile(r"^(\+?98[\-\s]?|0)9[0-39]\d[\-\s]?\d{3}[\-\s]?\d{4}$")

OTP_CODE_MIN = 10000
OTP_CODE_MAX = 99999


def generate_otp_code() -> str:
    """Return a 5-digit code in [OTP_CODE_MIN, OTP_CODE_MAX)."""
    return str(OTP_CODE_MIN + secrets.randbelow(OTP_CODE_MAX - OTP_CODE_MIN))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """Request-scoped service behind the /auth routes.

    Holds the DB session, the incoming request (for the OTP cookie) and the
    token service. Every failure is raised as an `HTTPException`.
    """

    def __init__(self, session: AsyncSession, request: Request, token_service: TokenService):
        self.session = session
        self.request = request
        self.token_service = token_service

    async def login(self, payload: AuthRequest, response: Response) -> OtpSent:
        """Check credentials and issue an OTP; the access token comes from `check_otp`."""

        valid_username = self.username_validator(payload.method, payload.username)
        user = await self.check_exist_user(payload.method, valid_username)
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.NotFoundAccount.value)
        if not verify_password(payload.password, user.password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="email or password is incorrect")

        otp = await self.save_otp(user.id, payload.method)
        await self._deliver_otp(user, otp)
        token = self.token_service.create_otp_token(TokenPayload(user_id=user.id))
        logger.info("Login step one passed for user %s via %s", user.id, payload.method.value)
        return self.send_response(response, token, otp.code)

    async def register(self, payload: RegisterRequest, response: Response) -> OtpSent:
        """Create the user and its profile, then issue the first OTP."""

        valid_username = self.username_validator(payload.method, payload.email_or_phone)
        user = await self.check_exist_user(payload.method, valid_username)
        if user:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=AuthMessage.AlreadyExistAccount.value)
        if await self.check_exist_user(AuthMethod.Username, payload.username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=AuthMessage.AlreadyExistUsername.value)

        user = User(
            **{payload.method.value: valid_username},
            username=payload.username,
            password=self.hash_password(payload.password),
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        profile = Profile(fullname=payload.fullname, user_id=user.id)
        self.session.add(profile)
        await self.session.commit()
        await self.session.refresh(profile)

        user.profile_id = profile.id
        await self.session.commit()

        otp = await self.save_otp(user.id, payload.method)
        await self._deliver_otp(user, otp)
        token = self.token_service.create_otp_token(TokenPayload(user_id=user.id))
        logger.info("Registered user %s via %s", user.id, payload.method.value)
        return self.send_response(response, token, otp.code)

    def send_response(self, response: Response, token: str, code: str) -> OtpSent:
        response.set_cookie(CookieKeys.OTP.value, token, **otp_cookie_options())
        return OtpSent(
            message=PublicMessage.SentOtp.value,
            code=code if settings.OTP_EXPOSE_CODE else None,
        )

    async def save_otp(self, user_id: int, method: AuthMethod | RegisterMethod) -> Otp:
        """Overwrite the user's OTP row, or create it and link it to the user."""

        code = generate_otp_code()
        expires_in = datetime.now(timezone.utc) + timedelta(seconds=settings.OTP_EXPIRE_SECONDS)

        otp = await self.session.scalar(select(Otp).where(Otp.user_id == user_id))
        exist_otp = otp is not None
        if otp:
            otp.code = code
            otp.expires_in = expires_in
            otp.method = method.value
            otp.attempts = 0
        else:
            otp = Otp(code=code, expires_in=expires_in, user_id=user_id, method=method.value, attempts=0)
            self.session.add(otp)
        await self.session.commit()
        await self.session.refresh(otp)

        if not exist_otp:
            user = await self.session.get(User, user_id)
            user.otp_id = otp.id
            await self.session.commit()
        return otp

    async def _deliver_otp(self, user: User, otp: Otp) -> None:
        if not settings.OTP_SEND_EMAIL or otp.method != AuthMethod.Email.value or not user.email:
            return
        sent, err = await send_otp_email(user.email, otp.code)
        if not sent:
            otp.expires_in = datetime.now(timezone.utc)
            await self.session.commit()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to send verification code. Please check SMTP settings. ({err})",
            )

    async def check_otp(self, code: str, response: Response) -> Token:
        """Verify the submitted code against the OTP cookie and mint an access token."""

        token = self.request.cookies.get(CookieKeys.OTP.value)
        if not token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.ExpiredCode.value)
        user_id = self.token_service.verify_otp_token(token).user_id

        otp = await self.session.scalar(select(Otp).where(Otp.user_id == user_id))
        if not otp:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.LoginAgain.value)

        now = datetime.now(timezone.utc)
        if _as_utc(otp.expires_in) < now:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.ExpiredCode.value)
        if otp.code != code:
            otp.attempts = (otp.attempts or 0) + 1
            # too many wrong guesses burn the code; a new login is required
            if otp.attempts >= settings.OTP_MAX_ATTEMPTS:
                otp.expires_in = now
                logger.warning("OTP for user %s expired after %s wrong attempts", user_id, otp.attempts)
            await self.session.commit()
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.TryAgain.value)
        access_token = self.token_service.create_access_token(TokenPayload(user_id=user_id))

        user = await self.session.get(User, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.LoginAgain.value)
        if otp.method == AuthMethod.Email.value:
            user.verify_email = True
        elif otp.method == AuthMethod.Phone.value:
            user.verify_phone = True

        # single use
        otp.expires_in = now
        await self.session.commit()
        response.delete_cookie(CookieKeys.OTP.value)

        logger.info("OTP verified for user %s", user_id)
        return Token(message=PublicMessage.LoggedIn.value, access_token=access_token)

    async def check_exist_user(self, method: AuthMethod | RegisterMethod, username: str) -> User | None:
        """Look the user up by the column that matches `method`."""
        if method == AuthMethod.Phone:
            column = User.phone
        elif method == AuthMethod.Email:
            column = User.email
        elif method == AuthMethod.Username:
            column = User.username
        else:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=BadRequestMessage.InValidLoginData.value)
        return await self.session.scalar(select(User).where(column == username))

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def username_validator(self, method: AuthMethod | RegisterMethod, username: str) -> str:
        if method == AuthMethod.Email:
            try:
                validate_email(username, check_deliverability=False)
            except EmailNotValidError:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email format is incorrect")
            return username
        if method == AuthMethod.Phone:
            if IR_MOBILE_RE.match(username):
                return username
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone format is incorrect")
        if method == AuthMethod.Username:
            return username
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="username data is not valid")

    async def validate_access_token(self, token: str) -> User:
        user_id = self.token_service.verify_access_token(token).user_id
        user = await self.session.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.LoginAgain.value)
        return user
