from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Profile, User
from app.schemas.auth import ProfileResponse, UserResponse


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_profile(self, user: User) -> UserResponse:
        """Combine the user row with its profile row."""
        profile = await self.session.scalar(select(Profile).where(Profile.user_id == user.id))
        response = UserResponse.model_validate(user)
        if profile:
            response.profile = ProfileResponse.model_validate(profile)
        return response
