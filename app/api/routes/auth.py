"""HTTP route handlers for login, registration and OTP verification."""

from fastapi import APIRouter, Depends, Response, status

from app.api import deps
from app.schemas.auth import AuthRequest, RegisterRequest, Token
from app.schemas.otp import CheckOtpRequest, OtpSent
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=OtpSent, response_model_exclude_none=True)
async def login(
    payload: AuthRequest,
    response: Response,
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> OtpSent:
    """Check credentials, issue an OTP and set the OTP token cookie."""

    return await auth_service.login(payload, response)


@router.post(
    "/register",
    response_model=OtpSent,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    response: Response,
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> OtpSent:
    """Create a user with profile, issue an OTP and set the OTP token cookie."""

    return await auth_service.register(payload, response)


@router.post("/check-otp", response_model=Token)
async def check_otp(
    payload: CheckOtpRequest,
    response: Response,
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> Token:
    """Exchange a valid OTP (plus the OTP cookie) for a bearer access token."""

    return await auth_service.check_otp(payload.code, response)
