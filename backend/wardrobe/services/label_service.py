"""
Wardrobe Backend — Label Service
=================================

What:  CRUD for classification labels (region, garment type, gender, size).
Who:   Called by routes/labels.py; every label route requires a valid token.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.database import is_unique_violation
from wardrobe.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from wardrobe.models import GarmentLabel, Label
from wardrobe.models.label import LABEL_CATEGORIES
from wardrobe.schemas.label import LabelCreate, LabelUpdate
from wardrobe.services.existence import garment_exists, label_exists, label_name_taken
from wardrobe.services.validation import is_blank, parse_id, require_choice, require_fields

logger = logging.getLogger(__name__)


class LabelService:
    """
    Responsibilities:
        - list_labels() / list_by_garment()
        - get_label()
        - create_label(): unique name, fixed category vocabulary
        - update_label(): partial, renames checked by the unique constraint
        - delete_label(): associations removed by ON DELETE CASCADE
    """

    async def list_labels(self, db: AsyncSession) -> List[Label]:
        result = await db.execute(select(Label).order_by(Label.id))
        return list(result.scalars().all())

    async def list_by_garment(self, db: AsyncSession, raw_garment_id: str) -> List[Label]:
        garment_id = parse_id(raw_garment_id, "garment")
        if not await garment_exists(db, garment_id):
            raise NotFoundError(resource="garment", resource_id=garment_id)

        result = await db.execute(
            select(Label)
            .join(GarmentLabel, GarmentLabel.label_id == Label.id)
            .where(GarmentLabel.garment_id == garment_id)
            .order_by(Label.id)
        )
        return list(result.scalars().all())

    async def get_label(self, db: AsyncSession, raw_id: str) -> Label:
        label_id = parse_id(raw_id, "label", bounded=True)
        label = await db.get(Label, label_id)
        if label is None:
            raise NotFoundError(resource="label", resource_id=label_id)
        return label

    async def create_label(self, db: AsyncSession, body: LabelCreate) -> Label:
        require_fields("label", name=body.name, category=body.category)
        require_choice(body.category, LABEL_CATEGORIES, "category")

        if await label_name_taken(db, body.name):
            raise ConflictError(message=f"A label named '{body.name}' already exists.")

        label = Label(name=body.name, category=body.category)
        db.add(label)
        try:
            await db.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(message=f"A label named '{body.name}' already exists.")
            logger.error("Integrity error storing label '%s': %s", body.name, str(e.orig))
            raise DatabaseError(context={"operation": "create_label"})

        logger.info("Label %s created: name=%s category=%s", label.id, label.name, label.category)
        return label

    async def update_label(self, db: AsyncSession, raw_id: str, patch: LabelUpdate) -> None:
        label_id = parse_id(raw_id, "label")
        if not await label_exists(db, label_id):
            raise NotFoundError(resource="label", resource_id=label_id)

        values = patch.model_dump(exclude_unset=True)
        if not values:
            raise ValidationError(message="No data supplied for the update.")
        if "name" in values and is_blank(values["name"]):
            raise ValidationError(message="Label name cannot be empty.", field="name")
        if "category" in values:
            if values["category"] is None:
                raise ValidationError(message="Label category cannot be empty.", field="category")
            require_choice(values["category"], LABEL_CATEGORIES, "category")

        try:
            result = await db.execute(update(Label).where(Label.id == label_id).values(**values))
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(message=f"A label named '{values.get('name')}' already exists.")
            raise DatabaseError(context={"operation": "update_label", "label_id": label_id})

        if result.rowcount != 1:
            raise DatabaseError(
                message="Updating the label was not successful.",
                context={"label_id": label_id, "rowcount": result.rowcount},
            )
        logger.info("Label %s updated: fields=%s", label_id, sorted(values))

    async def delete_label(self, db: AsyncSession, raw_id: str) -> None:
        label_id = parse_id(raw_id, "label")
        if not await label_exists(db, label_id):
            raise NotFoundError(resource="label", resource_id=label_id)

        result = await db.execute(delete(Label).where(Label.id == label_id))
        if result.rowcount != 1:
            raise DatabaseError(
                message="Deleting the label was not successful.",
                context={"label_id": label_id, "rowcount": result.rowcount},
            )
        logger.info("Label %s deleted", label_id)


label_service = LabelService()
