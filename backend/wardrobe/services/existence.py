"""
Wardrobe Backend — Existence Predicates
========================================

What:  Boolean lookups used as request-time guards before reads, updates,
       deletes and relational writes.
Why:   They let services answer 404 before attempting a write, and let the
       association route tell "garment missing" apart from "label missing".

Each predicate runs one indexed `SELECT id ... LIMIT 1` and returns a bool.
Ids outside the Integer column range are answered False without a query.
They are a fast path only: a row can disappear between the check and the
write, so callers still handle the write's own failure.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.models import Comment, Garment, GarmentLabel, Label, User
from wardrobe.services.validation import id_in_range


async def garment_exists(db: AsyncSession, garment_id: int) -> bool:
    if not id_in_range(garment_id):
        return False
    found = await db.scalar(select(Garment.id).where(Garment.id == garment_id).limit(1))
    return found is not None


async def garment_name_taken(db: AsyncSession, name: str) -> bool:
    found = await db.scalar(select(Garment.id).where(Garment.name == name).limit(1))
    return found is not None


async def comment_exists(db: AsyncSession, comment_id: int) -> bool:
    if not id_in_range(comment_id):
        return False
    found = await db.scalar(select(Comment.id).where(Comment.id == comment_id).limit(1))
    return found is not None


async def label_exists(db: AsyncSession, label_id: int) -> bool:
    if not id_in_range(label_id):
        return False
    found = await db.scalar(select(Label.id).where(Label.id == label_id).limit(1))
    return found is not None


async def label_name_taken(db: AsyncSession, name: str) -> bool:
    found = await db.scalar(select(Label.id).where(Label.name == name).limit(1))
    return found is not None


async def association_exists(db: AsyncSession, garment_id: int, label_id: int) -> bool:
    if not (id_in_range(garment_id) and id_in_range(label_id)):
        return False
    found = await db.scalar(
        select(GarmentLabel.garment_id)
        .where(GarmentLabel.garment_id == garment_id, GarmentLabel.label_id == label_id)
        .limit(1)
    )
    return found is not None


async def user_exists(db: AsyncSession, username: str) -> bool:
    if not username:
        return False
    found = await db.scalar(select(User.id).where(User.username == username).limit(1))
    return found is not None
