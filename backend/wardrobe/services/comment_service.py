"""
Wardrobe Backend — Comment Service
===================================

What:  CRUD for comments attached to garments.
Who:   Called by routes/comments.py.

A comment is only meaningful with text or with the damaged flag set; a body
carrying neither is rejected with 400. The author is never read from the body:
POST /comments passes the id from the verified token.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.exceptions import DatabaseError, NotFoundError, ValidationError
from wardrobe.models import Comment
from wardrobe.schemas.comment import CommentCreate, CommentUpdate
from wardrobe.services.existence import comment_exists, garment_exists
from wardrobe.services.validation import is_blank, parse_id, require_fields

logger = logging.getLogger(__name__)


class CommentService:

    async def list_comments(self, db: AsyncSession) -> List[Comment]:
        result = await db.execute(select(Comment).order_by(Comment.id))
        return list(result.scalars().all())

    async def list_by_garment(self, db: AsyncSession, raw_garment_id: str) -> List[Comment]:
        garment_id = parse_id(raw_garment_id, "garment")
        if not await garment_exists(db, garment_id):
            raise NotFoundError(resource="garment", resource_id=garment_id)

        result = await db.execute(
            select(Comment).where(Comment.garment_id == garment_id).order_by(Comment.id)
        )
        return list(result.scalars().all())

    async def get_comment(self, db: AsyncSession, raw_id: str) -> Comment:
        comment_id = parse_id(raw_id, "comment", bounded=True)
        comment = await db.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return comment

    async def create_comment(
        self,
        db: AsyncSession,
        body: CommentCreate,
        author_id: Optional[int] = None,
    ) -> Comment:
        """
        Store a new comment on an existing garment.

        Raises:
            ValidationError: missing garment_id, malformed garment_id, or
                             neither text nor damaged supplied
            NotFoundError:   the garment does not exist
        """
        require_fields("comment", garment_id=body.garment_id)
        garment_id = parse_id(body.garment_id, "garment", field="garment_id")

        if is_blank(body.text) and not body.damaged:
            raise ValidationError(
                message="Missing data for comment: a comment needs text or the damaged flag.",
                field="text",
            )

        if not await garment_exists(db, garment_id):
            raise NotFoundError(resource="garment", resource_id=garment_id)

        comment = Comment(
            garment_id=garment_id,
            author_id=author_id,
            text=body.text,
            damaged=bool(body.damaged),
        )
        db.add(comment)
        try:
            await db.flush()
        except IntegrityError as e:
            # Garment deleted between the check and the insert
            logger.error("Integrity error storing comment on garment %s: %s", garment_id, str(e.orig))
            raise NotFoundError(resource="garment", resource_id=garment_id)

        logger.info("Comment %s created on garment %s by user %s", comment.id, garment_id, author_id)
        return comment

    async def update_comment(self, db: AsyncSession, raw_id: str, patch: CommentUpdate) -> None:
        """
        Partial update. Order of checks: both id formats (400), comment exists
        (404), new garment exists (404), at least one field present (400),
        the merged row still has text or the damaged flag (400).
        """
        comment_id = parse_id(raw_id, "comment")
        values = patch.model_dump(exclude_unset=True)

        new_garment_id = None
        if values.get("garment_id") is not None:
            new_garment_id = parse_id(values["garment_id"], "garment", field="garment_id")

        if not await comment_exists(db, comment_id):
            raise NotFoundError(resource="comment", resource_id=comment_id)
        if new_garment_id is not None and not await garment_exists(db, new_garment_id):
            raise NotFoundError(resource="garment", resource_id=new_garment_id)

        if "garment_id" in values:
            if new_garment_id is None:
                raise ValidationError(message="A comment must belong to a garment.", field="garment_id")
            values["garment_id"] = new_garment_id
        if "damaged" in values and values["damaged"] is None:
            raise ValidationError(message="The damaged flag must be true or false.", field="damaged")
        if not values:
            raise ValidationError(message="No data supplied for the update.")

        if "text" in values or "damaged" in values:
            current = await db.get(Comment, comment_id)
            if current is None:
                raise NotFoundError(resource="comment", resource_id=comment_id)
            text = values.get("text", current.text)
            damaged = values.get("damaged", current.damaged)
            if is_blank(text) and not damaged:
                raise ValidationError(
                    message="A comment needs text or the damaged flag.",
                    field="text",
                )

        try:
            result = await db.execute(
                update(Comment).where(Comment.id == comment_id).values(**values)
            )
        except IntegrityError as e:
            logger.error("Integrity error updating comment %s: %s", comment_id, str(e.orig))
            raise DatabaseError(context={"operation": "update_comment", "comment_id": comment_id})

        if result.rowcount != 1:
            raise DatabaseError(
                message="Updating the comment was not successful.",
                context={"comment_id": comment_id, "rowcount": result.rowcount},
            )
        logger.info("Comment %s updated: fields=%s", comment_id, sorted(values))

    async def delete_comment(self, db: AsyncSession, raw_id: str) -> None:
        comment_id = parse_id(raw_id, "comment")
        if not await comment_exists(db, comment_id):
            raise NotFoundError(resource="comment", resource_id=comment_id)

        result = await db.execute(delete(Comment).where(Comment.id == comment_id))
        if result.rowcount != 1:
            raise DatabaseError(
                message="Deleting the comment was not successful.",
                context={"comment_id": comment_id, "rowcount": result.rowcount},
            )
        logger.info("Comment %s deleted", comment_id)


comment_service = CommentService()
