from app.db.models.otp import Otp
from app.db.models.post import Post
from app.db.models.user import Profile, User

__all__ = ["Otp", "Post", "Profile", "User"]
