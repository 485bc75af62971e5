"""
Wardrobe Backend — Comment Route Handlers
==========================================

Creating a comment requires a bearer token; the author is the token's user.
Reading, editing and deleting comments are open.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.database import get_db_session
from wardrobe.dependencies import require_principal
from wardrobe.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from wardrobe.schemas.common import CreatedResponse, ErrorResponse
from wardrobe.services.auth_service import Principal
from wardrobe.services.comment_service import comment_service
from wardrobe.services.urls import location_for

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get(
    "",
    response_model=List[CommentResponse],
    summary="List all comments",
)
async def list_comments(db: AsyncSession = Depends(get_db_session)):
    return await comment_service.list_comments(db)


@router.get(
    "/garment/{garment_id}",
    response_model=List[CommentResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="List the comments on one garment",
)
async def list_comments_for_garment(garment_id: str, db: AsyncSession = Depends(get_db_session)):
    return await comment_service.list_by_garment(db, garment_id)


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a comment",
)
async def get_comment(comment_id: str, db: AsyncSession = Depends(get_db_session)):
    return await comment_service.get_comment(db, comment_id)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"description": "Garment not found", "model": ErrorResponse},
    },
    summary="Comment on a garment",
    description="Body needs `garment_id` and either `text` or `damaged: true`.",
)
async def create_comment(
    body: CommentCreate,
    request: Request,
    response: Response,
    principal: Principal = Depends(require_principal),
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    comment = await comment_service.create_comment(db, body, author_id=principal.id)

    url = location_for(request, f"/comments/{comment.id}")
    response.headers["Location"] = url
    return CreatedResponse(message="Comment created successfully.", url=url)


@router.put(
    "/{comment_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Edit a comment",
)
async def update_comment(
    comment_id: str,
    body: CommentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await comment_service.update_comment(db, comment_id, body)
    return Response(status_code=204)


@router.delete(
    "/{comment_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a comment",
)
async def delete_comment(comment_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await comment_service.delete_comment(db, comment_id)
    return Response(status_code=204)
