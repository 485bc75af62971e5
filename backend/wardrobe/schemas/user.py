"""
Wardrobe Backend — User & Login Schemas
========================================

Passwords only ever appear in request models. Response models expose
id, username and role, never the hash.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = Field(
        default=None,
        description="One of: wardrobe_keeper, dancer, musician",
    )


class UserResponse(BaseModel):
    id: int
    username: str
    role: str

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """
    Successful login. The token is returned in the body (not as a cookie);
    clients send it back as `Authorization: Bearer <token>`.
    """
    message: str
    token: str = Field(description="Signed JWT, valid for one hour")
    username: str
