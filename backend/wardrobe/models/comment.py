"""
Wardrobe Backend — Comment SQLAlchemy Model
============================================

What:  ORM model for the `comments` table.
Why:   Free-text notes attached to a garment ("button missing", "washed").

A comment always belongs to exactly one garment; the foreign key cascades so
deleting the garment deletes its comments. `author_id` is taken from the
verified token of whoever created the comment and survives user removal as NULL.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Text
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from wardrobe.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    garment_id: Mapped[int] = mapped_column(
        ForeignKey("garments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Nullable: a comment may only flag the garment as damaged
    text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    damaged: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=sql_text("false"),
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=sql_text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, garment_id={self.garment_id})>"
