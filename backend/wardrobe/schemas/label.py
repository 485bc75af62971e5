"""
Wardrobe Backend — Label Schemas
=================================
"""

from typing import Optional

from pydantic import BaseModel, Field


class LabelResponse(BaseModel):
    id: int
    name: str
    category: str = Field(description="One of: region, garment_type, gender, size, other")

    model_config = {"from_attributes": True}


class LabelCreate(BaseModel):
    # Optional at the schema level so missing fields get our 400 message
    name: Optional[str] = None
    category: Optional[str] = None


class LabelUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
