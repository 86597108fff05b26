from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.common.enums import EntityName
from app.db.base import Base


class Otp(Base):
    """The single outstanding one-time code of a user, overwritten on reissue."""

    __tablename__ = EntityName.Otp.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(10))
    expires_in: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    method: Mapped[str] = mapped_column(String(20))
    attempts: Mapped[int] = mapped_column(Integer, default=0)
    user_id: Mapped[int] = mapped_column(ForeignKey(f"{EntityName.User.value}.id", ondelete="CASCADE"), unique=True)
