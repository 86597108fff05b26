from fastapi import APIRouter, Depends

from app.api import deps
from app.db.models import User
from app.schemas.auth import UserResponse
from app.services.user import UserService

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=UserResponse)
async def profile(
    current_user: User = Depends(deps.get_current_user),
    user_service: UserService = Depends(deps.get_user_service),
) -> UserResponse:
    """Return the authenticated user with their profile."""

    return await user_service.get_profile(current_user)
