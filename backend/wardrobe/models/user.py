"""
Wardrobe Backend — User SQLAlchemy Model
=========================================

Accounts created at registration and checked at login. Never updated or
deleted through the API.

password_hash holds a bcrypt hash ("$2b$<cost>$<salt+digest>"), 60 chars.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from wardrobe.database import Base

USER_ROLES = ("wardrobe_keeper", "dancer", "musician")


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ('wardrobe_keeper', 'dancer', 'musician')",
            name="ck_users_role",
        ),
    )

    def __repr__(self) -> str:
        # Never include password_hash
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
