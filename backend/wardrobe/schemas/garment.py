"""
Wardrobe Backend — Garment Schemas
===================================

What:  API contract for garments and garment↔label associations.

Note on uploads:
    POST /garments is multipart/form-data (name, logical_type, file), so it
    has no JSON request model; FastAPI's Form()/File() parameters describe it.
"""

from typing import Optional

from pydantic import BaseModel, Field


class GarmentResponse(BaseModel):
    """
    Garment metadata. Never contains the binary content; that is served
    only by GET /garments/{id}.
    """
    id: int
    name: str
    logical_type: str = Field(description="One of: image, audio, video, pdf")
    damaged: bool = Field(description="True when the garment is marked as damaged")

    model_config = {"from_attributes": True}


class GarmentUpdate(BaseModel):
    """
    Partial update for PUT /garments/{id}.

    Only fields present in the JSON body are written. The service reads them
    with `model_dump(exclude_unset=True)`, so an omitted field and an explicit
    value are distinguishable.
    """
    name: Optional[str] = Field(default=None, description="New unique name")
    damaged: Optional[bool] = Field(default=None, description="Damaged flag")
