"""User and profile tables."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.common.enums import EntityName
from app.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """Account row; at least one of email/phone is set for registered users."""

    __tablename__ = EntityName.User.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), unique=True, index=True, nullable=True)
    password: Mapped[str] = mapped_column(String(255))

    # back-references to the one-to-one rows, kept in sync by AuthService
    otp_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    new_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    new_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    verify_email: Mapped[bool] = mapped_column(Boolean, default=False)
    verify_phone: Mapped[bool] = mapped_column(Boolean, default=False)


class Profile(Base):
    __tablename__ = EntityName.Profile.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    fullname: Mapped[str] = mapped_column(String(100))
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[int] = mapped_column(ForeignKey(f"{EntityName.User.value}.id", ondelete="CASCADE"), unique=True)
