"""
Wardrobe Backend — Label Route Handlers
========================================

Every route in this router requires `Authorization: Bearer <token>`; the
check is a router-level dependency, so a request without a valid token is
answered with 401 before any id is parsed or any query runs.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.database import get_db_session
from wardrobe.dependencies import require_principal
from wardrobe.schemas.common import CreatedResponse, ErrorResponse
from wardrobe.schemas.label import LabelCreate, LabelResponse, LabelUpdate
from wardrobe.services.label_service import label_service
from wardrobe.services.urls import location_for

router = APIRouter(
    prefix="/labels",
    tags=["Labels"],
    dependencies=[Depends(require_principal)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get("", response_model=List[LabelResponse], summary="List all labels")
async def list_labels(db: AsyncSession = Depends(get_db_session)):
    return await label_service.list_labels(db)


@router.get(
    "/garment/{garment_id}",
    response_model=List[LabelResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="List the labels attached to a garment",
)
async def list_labels_for_garment(garment_id: str, db: AsyncSession = Depends(get_db_session)):
    return await label_service.list_by_garment(db, garment_id)


@router.get(
    "/{label_id}",
    response_model=LabelResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a label",
)
async def get_label(label_id: str, db: AsyncSession = Depends(get_db_session)):
    return await label_service.get_label(db, label_id)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create a label",
    description="`category` is one of: region, garment_type, gender, size, other.",
)
async def create_label(
    body: LabelCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    label = await label_service.create_label(db, body)

    url = location_for(request, f"/labels/{label.id}")
    response.headers["Location"] = url
    return CreatedResponse(message="Label created successfully.", url=url)


@router.put(
    "/{label_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Rename or recategorise a label",
)
async def update_label(
    label_id: str,
    body: LabelUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await label_service.update_label(db, label_id, body)
    return Response(status_code=204)


@router.delete(
    "/{label_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a label",
    description="Also detaches the label from every garment.",
)
async def delete_label(label_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await label_service.delete_label(db, label_id)
    return Response(status_code=204)
