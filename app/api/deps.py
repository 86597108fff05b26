"""Dependency providers used by FastAPI endpoints.

These helpers expose database sessions, the token service, composed services
and the authenticated user through FastAPI's dependency injection system so
route handlers remain thin.
"""

from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.common.enums import AuthMessage
from app.core.security import TokenService
from app.db.models import User
from app.db.session import get_session
from app.services.auth import AuthService
from app.services.post import PostService
from app.services.user import UserService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async SQLAlchemy session tied to the shared engine."""

    async for session in get_session():
        yield session


def get_token_service() -> TokenService:
    return TokenService()


async def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
) -> AsyncGenerator[AuthService, None]:
    """Assemble a request-scoped AuthService.

    Dependencies:
    - `AsyncSession` from `get_db_session` for user and OTP persistence.
    - the current `Request`, whose cookies carry the OTP token.
    - `TokenService` from `get_token_service` for JWT signing.
    """

    yield AuthService(session=session, request=request, token_service=token_service)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the Bearer access token into a user or fail with 401."""

    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.LoginIsRequired.value)
    return await auth_service.validate_access_token(credentials.credentials)


def get_post_service(session: AsyncSession = Depends(get_db_session)) -> PostService:
    return PostService(session)


def get_user_service(session: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(session)
