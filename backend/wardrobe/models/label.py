"""
Wardrobe Backend — Label SQLAlchemy Model
==========================================

Classification tags ("Prekmurje", "skirt", "female", "M") attachable to many
garments through `garment_labels`.
"""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wardrobe.database import Base

LABEL_CATEGORIES = ("region", "garment_type", "gender", "size", "other")


class Label(Base):
    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "category IN ('region', 'garment_type', 'gender', 'size', 'other')",
            name="ck_labels_category",
        ),
    )

    def __repr__(self) -> str:
        return f"<Label(id={self.id}, name='{self.name}', category='{self.category}')>"
