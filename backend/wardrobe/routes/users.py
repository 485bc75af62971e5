"""
Wardrobe Backend — User Route Handlers
=======================================

Registration, public profile and login. None of these require a token.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.config import Settings
from wardrobe.database import get_db_session
from wardrobe.dependencies import get_settings, get_token_service
from wardrobe.schemas.common import CreatedResponse, ErrorResponse
from wardrobe.schemas.user import LoginRequest, LoginResponse, UserCreate, UserResponse
from wardrobe.services.auth_service import TokenService
from wardrobe.services.urls import location_for
from wardrobe.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Missing field or invalid role", "model": ErrorResponse},
        409: {"description": "Username taken", "model": ErrorResponse},
    },
    summary="Register a user",
    description="`role` is one of: wardrobe_keeper, dancer, musician.",
)
async def register_user(
    body: UserCreate,
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    user = await user_service.register(db, body, bcrypt_rounds=settings.bcrypt_rounds)

    url = location_for(request, f"/users/{quote(user.username, safe='')}")
    response.headers["Location"] = url
    return CreatedResponse(message="User registered successfully.", url=url)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"description": "Invalid username or password", "model": ErrorResponse},
    },
    summary="Log in and receive a token",
    description="The token is valid for one hour; send it as `Authorization: Bearer <token>`.",
)
async def login(
    body: LoginRequest,
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await user_service.login(db, body, tokens, bcrypt_rounds=settings.bcrypt_rounds)


@router.get(
    "/{username}",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a user's public profile",
)
async def get_user(username: str, db: AsyncSession = Depends(get_db_session)):
    return await user_service.get_profile(db, username)
