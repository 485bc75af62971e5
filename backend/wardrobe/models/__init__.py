"""
ORM models. Importing this package registers every table on Base.metadata,
which Database.create_schema() relies on.
"""

from wardrobe.models.comment import Comment
from wardrobe.models.garment import Garment, GarmentLabel
from wardrobe.models.label import Label
from wardrobe.models.user import User

__all__ = ["Comment", "Garment", "GarmentLabel", "Label", "User"]
