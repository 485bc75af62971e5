"""
Wardrobe Backend — Comment Schemas
===================================

garment_id is accepted as int or string on input and validated by the service
with the same digits-only rule as path ids, so "abc" produces a 400 instead
of FastAPI's default 422.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class CommentResponse(BaseModel):
    id: int
    garment_id: int
    author_id: Optional[int] = Field(default=None, description="User who wrote the comment")
    text: Optional[str] = None
    damaged: bool

    model_config = {"from_attributes": True}


class CommentCreate(BaseModel):
    """A comment needs a garment and either text or the damaged flag."""
    garment_id: Optional[Union[int, str]] = Field(default=None, description="Owning garment id")
    text: Optional[str] = Field(default=None, description="Comment text")
    damaged: Optional[bool] = Field(default=None, description="Marks the garment as damaged")


class CommentUpdate(BaseModel):
    """Partial update for PUT /comments/{id}; garment_id moves the comment."""
    garment_id: Optional[Union[int, str]] = None
    text: Optional[str] = None
    damaged: Optional[bool] = None
