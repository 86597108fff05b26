from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.common.enums import EntityName, PostStatus
from app.db.base import Base, TimestampMixin


class Post(TimestampMixin, Base):
    __tablename__ = EntityName.Post.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    caption: Mapped[str] = mapped_column(String(300))
    status: Mapped[str] = mapped_column(String(20), default=PostStatus.Published.value)
    author_id: Mapped[int] = mapped_column(
        ForeignKey(f"{EntityName.User.value}.id", ondelete="CASCADE"), index=True
    )
