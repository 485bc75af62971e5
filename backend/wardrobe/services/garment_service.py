"""
Wardrobe Backend — Garment Service
===================================

What:  Business logic for garments and garment↔label associations.
Who:   Called by routes/garments.py; receives the request's AsyncSession.

Upload workflow (create):
    ┌──────────┐   ┌───────────┐   ┌────────────┐   ┌───────────┐   ┌────────┐
    │ required │──▶│ logical   │──▶│ name free? │──▶│ sniff     │──▶│ INSERT │
    │ fields   │   │ type enum │   │ (409)      │   │ (415/400) │   │ (409)  │
    └──────────┘   └───────────┘   └────────────┘   └───────────┘   └────────┘

    The name pre-check is the fast path; the unique constraint is the
    authoritative one. A concurrent upload of the same name loses at INSERT
    with an IntegrityError, which is translated to the same 409.

Every other operation follows the CRUD contract:
    id format (400) → existence (404) → single statement → status code.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from wardrobe.database import is_unique_violation
from wardrobe.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from wardrobe.models import Garment, GarmentLabel
from wardrobe.models.garment import LOGICAL_TYPES
from wardrobe.schemas.garment import GarmentUpdate
from wardrobe.services.content_classifier import ContentClassifier, content_classifier
from wardrobe.services.existence import (
    association_exists,
    garment_exists,
    garment_name_taken,
    label_exists,
)
from wardrobe.services.validation import parse_id, require_choice, require_fields

logger = logging.getLogger(__name__)


class GarmentService:
    """
    Responsibilities:
        - list_garments() / list_by_label(): metadata rows, no binary content
        - get_garment() / get_metadata(): single row, 404 when absent
        - create_garment(): upload with content sniffing
        - update_garment(): partial update of name / damaged
        - delete_garment(): cascade removes comments and associations
        - add_label() / remove_label(): association table writes
    """

    def __init__(self, classifier: Optional[ContentClassifier] = None):
        self.classifier = classifier or content_classifier

    # ── Reads ────────────────────────────────────────────────────────────

    async def list_garments(self, db: AsyncSession) -> List[Garment]:
        result = await db.execute(select(Garment).order_by(Garment.id))
        return list(result.scalars().all())

    async def list_by_label(self, db: AsyncSession, raw_label_id: str) -> List[Garment]:
        """All garments carrying the label; 404 if the label does not exist."""
        label_id = parse_id(raw_label_id, "label")
        if not await label_exists(db, label_id):
            raise NotFoundError(resource="label", resource_id=label_id)

        result = await db.execute(
            select(Garment)
            .join(GarmentLabel, GarmentLabel.garment_id == Garment.id)
            .where(GarmentLabel.label_id == label_id)
            .order_by(Garment.id)
        )
        return list(result.scalars().all())

    async def get_garment(self, db: AsyncSession, raw_id: str) -> Garment:
        """Full row including the binary content (for download)."""
        garment_id = parse_id(raw_id, "garment", bounded=True)
        garment = await db.scalar(
            select(Garment).options(undefer(Garment.content)).where(Garment.id == garment_id)
        )
        if garment is None:
            raise NotFoundError(resource="garment", resource_id=garment_id)
        return garment

    async def get_metadata(self, db: AsyncSession, raw_id: str) -> Garment:
        garment_id = parse_id(raw_id, "garment", bounded=True)
        garment = await db.scalar(select(Garment).where(Garment.id == garment_id))
        if garment is None:
            raise NotFoundError(resource="garment", resource_id=garment_id)
        return garment

    # ── Writes ───────────────────────────────────────────────────────────

    async def create_garment(
        self,
        db: AsyncSession,
        name: Optional[str],
        logical_type: Optional[str],
        content: Optional[bytes],
    ) -> Garment:
        """
        Validate and store an uploaded garment.

        Raises:
            ValidationError:          missing field, unknown type, content mismatch
            ConflictError:            name already used
            UnsupportedContentError:  unrecognised byte signature
            DatabaseError:            unexpected persistence failure
        """
        require_fields("garment", name=name, logical_type=logical_type, file=content)
        require_choice(logical_type, LOGICAL_TYPES, "logical_type")

        if await garment_name_taken(db, name):
            raise ConflictError(
                message=f"A garment named '{name}' already exists.",
                context={"name": name},
            )

        mime_type = self.classifier.classify(content, logical_type)

        garment = Garment(name=name, logical_type=logical_type, content=content, damaged=False)
        db.add(garment)
        try:
            await db.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(
                    message=f"A garment named '{name}' already exists.",
                    context={"name": name, "source": "constraint"},
                )
            logger.error("Integrity error storing garment '%s': %s", name, str(e.orig))
            raise DatabaseError(context={"operation": "create_garment"})

        logger.info(
            "Garment %s stored: name=%s type=%s mime=%s size=%d bytes",
            garment.id, name, logical_type, mime_type, len(content),
        )
        return garment

    async def update_garment(self, db: AsyncSession, raw_id: str, patch: GarmentUpdate) -> None:
        """
        Apply a partial update built only from the fields present in `patch`.

        An explicit null for `name` is rejected: the column is NOT NULL.
        """
        garment_id = parse_id(raw_id, "garment")
        if not await garment_exists(db, garment_id):
            raise NotFoundError(resource="garment", resource_id=garment_id)

        values = patch.model_dump(exclude_unset=True)
        if not values:
            raise ValidationError(message="No data supplied for the update.")
        if "name" in values and (values["name"] is None or not values["name"].strip()):
            raise ValidationError(message="Garment name cannot be empty.", field="name")
        if "damaged" in values and values["damaged"] is None:
            raise ValidationError(message="The damaged flag must be true or false.", field="damaged")

        try:
            result = await db.execute(
                update(Garment).where(Garment.id == garment_id).values(**values)
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(
                    message=f"A garment named '{values.get('name')}' already exists.",
                )
            raise DatabaseError(context={"operation": "update_garment", "garment_id": garment_id})

        if result.rowcount != 1:
            raise DatabaseError(
                message="Updating the garment was not successful.",
                context={"garment_id": garment_id, "rowcount": result.rowcount},
            )
        logger.info("Garment %s updated: fields=%s", garment_id, sorted(values))

    async def delete_garment(self, db: AsyncSession, raw_id: str) -> None:
        """
        Delete a garment. Comments and label associations go with it through
        ON DELETE CASCADE. Zero affected rows after a passing existence check
        is a server fault, not a 404.
        """
        garment_id = parse_id(raw_id, "garment")
        if not await garment_exists(db, garment_id):
            raise NotFoundError(resource="garment", resource_id=garment_id)

        try:
            result = await db.execute(delete(Garment).where(Garment.id == garment_id))
        except SQLAlchemyError as e:
            logger.error("Failed to delete garment %s: %s", garment_id, str(e))
            raise DatabaseError(context={"operation": "delete_garment", "garment_id": garment_id})

        if result.rowcount != 1:
            raise DatabaseError(
                message="Deleting the garment was not successful.",
                context={"garment_id": garment_id, "rowcount": result.rowcount},
            )
        logger.info("Garment %s deleted", garment_id)

    # ── Associations ─────────────────────────────────────────────────────

    async def add_label(self, db: AsyncSession, raw_garment_id: str, raw_label_id: str) -> tuple:
        """
        Attach a label to a garment.

        The garment is checked before the label, so a request naming two
        missing rows reports the garment.

        Returns:
            (garment_id, label_id) as ints, for building the Location URL.
        """
        garment_id = parse_id(raw_garment_id, "garment")
        label_id = parse_id(raw_label_id, "label")

        if not await garment_exists(db, garment_id):
            raise NotFoundError(resource="garment", resource_id=garment_id)
        if not await label_exists(db, label_id):
            raise NotFoundError(resource="label", resource_id=label_id)

        try:
            await db.execute(
                insert(GarmentLabel).values(garment_id=garment_id, label_id=label_id)
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(
                    message="This label is already attached to the garment.",
                    context={"garment_id": garment_id, "label_id": label_id},
                )
            logger.error("Integrity error attaching label %s to garment %s: %s",
                         label_id, garment_id, str(e.orig))
            raise DatabaseError(context={"operation": "add_label"})

        logger.info("Label %s attached to garment %s", label_id, garment_id)
        return garment_id, label_id

    async def remove_label(self, db: AsyncSession, raw_garment_id: str, raw_label_id: str) -> None:
        garment_id = parse_id(raw_garment_id, "garment")
        label_id = parse_id(raw_label_id, "label")

        if not await association_exists(db, garment_id, label_id):
            raise NotFoundError(
                resource="garment-label association",
                context={"garment_id": garment_id, "label_id": label_id},
            )

        result = await db.execute(
            delete(GarmentLabel).where(
                GarmentLabel.garment_id == garment_id,
                GarmentLabel.label_id == label_id,
            )
        )
        if result.rowcount != 1:
            raise DatabaseError(
                message="Removing the label from the garment was not successful.",
                context={"garment_id": garment_id, "label_id": label_id},
            )
        logger.info("Label %s removed from garment %s", label_id, garment_id)


garment_service = GarmentService()
