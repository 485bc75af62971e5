"""
Wardrobe Backend — Garment SQLAlchemy Models
=============================================

What:  ORM models for the `garments` table and the `garment_labels`
       association table (many-to-many with labels).
Why:   A garment is the unit of inventory: a named binary file (photo, audio
       recording, video or PDF) plus a damaged flag.

Table Design Rationale:
    - Integer primary key: ids appear in URLs as plain digits (^\\d+$)
    - name UNIQUE: the database constraint is the real guarantee; the service
      pre-check only produces a friendlier 409 on the common path
    - content: stored as a BLOB and deferred, so list queries never pull
      megabytes of binary data
    - logical_type: application-level category, checked against the sniffed
      MIME type at upload time

Association table:
    Composite primary key (garment_id, label_id) is the uniqueness constraint
    that turns a duplicate association into a 409. Both foreign keys cascade
    on delete, so removing a garment or a label leaves no orphaned rows.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from wardrobe.database import Base

LOGICAL_TYPES = ("image", "audio", "video", "pdf")


class Garment(Base):
    """
    A garment (or any wardrobe file) with its binary content.

    Lifecycle:
        1. Created on upload after content sniffing agrees with logical_type
        2. Renamed / flagged as damaged through PUT
        3. Deleted together with its comments and label associations
    """

    __tablename__ = "garments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Display name, unique across the wardrobe",
    )

    logical_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        comment="One of: image, audio, video, pdf",
    )

    # Deferred: only GET /garments/{id} undefers it
    content: Mapped[bytes] = mapped_column(
        LargeBinary,
        nullable=False,
        deferred=True,
    )

    damaged: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint(
            "logical_type IN ('image', 'audio', 'video', 'pdf')",
            name="ck_garments_logical_type",
        ),
    )

    def __repr__(self) -> str:
        return f"<Garment(id={self.id}, name='{self.name}', logical_type='{self.logical_type}')>"


class GarmentLabel(Base):
    """One (garment, label) pair. Unique per pair by primary key."""

    __tablename__ = "garment_labels"

    garment_id: Mapped[int] = mapped_column(
        ForeignKey("garments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    label_id: Mapped[int] = mapped_column(
        ForeignKey("labels.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<GarmentLabel(garment_id={self.garment_id}, label_id={self.label_id})>"
