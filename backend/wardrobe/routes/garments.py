"""
Wardrobe Backend — Garment Route Handlers
==========================================

What:  HTTP surface for garments and their label associations.
How:   Thin handlers: read path/body/form values, call GarmentService, set the
       status code and `Location` header. Errors are raised by the service and
       formatted by the global exception handlers.

Path ids are declared as `str` so that a malformed id reaches the service's
digits-only check (400) rather than FastAPI's integer coercion (422).

Route order matters: `/garments/labels/{label_id}` is registered before the
`/garments/{garment_id}/...` routes so "labels" is never read as an id.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.config import Settings
from wardrobe.database import get_db_session
from wardrobe.dependencies import get_settings
from wardrobe.exceptions import PayloadTooLargeError
from wardrobe.schemas.common import CreatedResponse, ErrorResponse
from wardrobe.schemas.garment import GarmentResponse, GarmentUpdate
from wardrobe.services.content_classifier import content_type_for
from wardrobe.services.garment_service import garment_service
from wardrobe.services.urls import location_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/garments", tags=["Garments"])


@router.get(
    "",
    response_model=List[GarmentResponse],
    responses={500: {"model": ErrorResponse}},
    summary="List all garments",
    description="Metadata of every garment in insertion order. Binary content is not included.",
)
async def list_garments(db: AsyncSession = Depends(get_db_session)):
    return await garment_service.list_garments(db)


@router.get(
    "/labels/{label_id}",
    response_model=List[GarmentResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="List garments carrying a label",
)
async def list_garments_by_label(label_id: str, db: AsyncSession = Depends(get_db_session)):
    return await garment_service.list_by_label(db, label_id)


@router.get(
    "/{garment_id}",
    response_class=Response,
    responses={
        200: {
            "description": "Raw garment content",
            "content": {
                "image/jpeg": {}, "audio/mpeg": {}, "video/mp4": {}, "application/pdf": {},
            },
        },
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Download a garment's content",
    description="Returns the stored bytes with a Content-Type derived from the logical type.",
)
async def download_garment(garment_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    garment = await garment_service.get_garment(db, garment_id)
    return Response(content=garment.content, media_type=content_type_for(garment.logical_type))


@router.get(
    "/{garment_id}/meta",
    response_model=GarmentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a garment's metadata",
)
async def get_garment_metadata(garment_id: str, db: AsyncSession = Depends(get_db_session)):
    return await garment_service.get_metadata(db, garment_id)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Missing field, unknown type or content mismatch", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
        413: {"description": "Upload too large", "model": ErrorResponse},
        415: {"description": "Unrecognised file content", "model": ErrorResponse},
    },
    summary="Upload a garment",
    description=(
        "multipart/form-data with `name`, `logical_type` (image, audio, video, pdf) and `file`. "
        "The file's byte signature must agree with `logical_type`."
    ),
)
async def upload_garment(
    request: Request,
    response: Response,
    name: Optional[str] = Form(default=None),
    logical_type: Optional[str] = Form(default=None),
    file: Optional[UploadFile] = File(default=None),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    content: Optional[bytes] = None
    if file is not None:
        try:
            content = await file.read()
        finally:
            await file.close()

        if len(content) > settings.max_upload_size:
            raise PayloadTooLargeError(max_size=settings.max_upload_size)

        logger.info(
            "Received upload: filename=%s, size=%d bytes",
            file.filename or "unknown",
            len(content),
        )

    garment = await garment_service.create_garment(db, name, logical_type, content)

    url = location_for(request, f"/garments/{garment.id}")
    response.headers["Location"] = url
    return CreatedResponse(message="Garment uploaded successfully.", url=url)


@router.put(
    "/{garment_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Rename a garment or change its damaged flag",
)
async def update_garment(
    garment_id: str,
    body: GarmentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await garment_service.update_garment(db, garment_id, body)
    return Response(status_code=204)


@router.delete(
    "/{garment_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a garment",
    description="Also removes the garment's comments and label associations.",
)
async def delete_garment(garment_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await garment_service.delete_garment(db, garment_id)
    return Response(status_code=204)


@router.post(
    "/{garment_id}/labels/{label_id}",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"description": "Garment or label not found", "model": ErrorResponse},
        409: {"description": "Label already attached", "model": ErrorResponse},
    },
    summary="Attach a label to a garment",
)
async def add_label(
    garment_id: str,
    label_id: str,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    gid, lid = await garment_service.add_label(db, garment_id, label_id)

    url = location_for(request, f"/garments/{gid}/labels/{lid}")
    response.headers["Location"] = url
    return CreatedResponse(message="Label attached to garment.", url=url)


@router.delete(
    "/{garment_id}/labels/{label_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Detach a label from a garment",
)
async def remove_label(
    garment_id: str,
    label_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await garment_service.remove_label(db, garment_id, label_id)
    return Response(status_code=204)
