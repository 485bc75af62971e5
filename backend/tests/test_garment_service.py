"""
Wardrobe Backend — Garment Service Unit Tests
==============================================

What:  GarmentService logic against a mocked AsyncSession.
Why:   Covers paths an HTTP test cannot reach deterministically: the lost
       race on the unique name and writes that affect zero rows.

What we test:
    ✅ Check order on upload (fields → type → name → sniff)
    ✅ IntegrityError at flush → ConflictError
    ✅ Zero affected rows after a passing existence check → DatabaseError
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from wardrobe.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from wardrobe.schemas.garment import GarmentUpdate
from wardrobe.services.garment_service import GarmentService


def _unique_violation():
    return IntegrityError("INSERT INTO garments ...", {}, Exception("UNIQUE constraint failed: garments.name"))


class TestGarmentServiceCreate:

    def setup_method(self):
        self.classifier = MagicMock()
        self.classifier.classify.return_value = "image/jpeg"
        self.service = GarmentService(classifier=self.classifier)

    @pytest.mark.asyncio
    async def test_name_taken_short_circuits_sniffing(self, mock_db_session):
        mock_db_session.scalar.return_value = 1

        with pytest.raises(ConflictError):
            await self.service.create_garment(mock_db_session, "kilt.jpg", "image", b"\xff\xd8\xff")

        self.classifier.classify.assert_not_called()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_type_checked_before_name(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.create_garment(mock_db_session, "kilt.jpg", "tapestry", b"\xff\xd8\xff")

        mock_db_session.scalar.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_race_becomes_conflict(self, mock_db_session):
        mock_db_session.scalar.return_value = None
        mock_db_session.flush.side_effect = _unique_violation()

        with pytest.raises(ConflictError):
            await self.service.create_garment(mock_db_session, "kilt.jpg", "image", b"\xff\xd8\xff")

        self.classifier.classify.assert_called_once_with(b"\xff\xd8\xff", "image")
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_success_adds_and_flushes(self, mock_db_session):
        mock_db_session.scalar.return_value = None

        garment = await self.service.create_garment(mock_db_session, "kilt.jpg", "image", b"\xff\xd8\xff")

        assert garment.name == "kilt.jpg"
        assert garment.logical_type == "image"
        assert garment.damaged is False
        mock_db_session.flush.assert_awaited_once()


class TestGarmentServiceWrites:

    def setup_method(self):
        self.service = GarmentService(classifier=MagicMock())

    @pytest.mark.asyncio
    async def test_delete_affecting_no_rows_is_server_fault(self, mock_db_session):
        mock_db_session.scalar.return_value = 5
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(DatabaseError):
            await self.service.delete_garment(mock_db_session, "5")

    @pytest.mark.asyncio
    async def test_update_affecting_no_rows_is_server_fault(self, mock_db_session):
        mock_db_session.scalar.return_value = 5
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(DatabaseError):
            await self.service.update_garment(mock_db_session, "5", GarmentUpdate(damaged=True))

    @pytest.mark.asyncio
    async def test_update_only_writes_supplied_fields(self, mock_db_session):
        mock_db_session.scalar.return_value = 5
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        await self.service.update_garment(mock_db_session, "5", GarmentUpdate(damaged=True))

        statement = mock_db_session.execute.await_args.args[0]
        assert set(statement.compile().params) == {"damaged", "id_1"}

    @pytest.mark.asyncio
    async def test_missing_garment_checked_before_label(self, mock_db_session):
        mock_db_session.scalar.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.add_label(mock_db_session, "1", "2")

        assert exc_info.value.context["resource"] == "garment"
        mock_db_session.scalar.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_association_is_conflict(self, mock_db_session):
        mock_db_session.scalar.return_value = 1
        mock_db_session.execute.side_effect = IntegrityError(
            "INSERT INTO garment_labels ...", {},
            Exception("UNIQUE constraint failed: garment_labels.garment_id, garment_labels.label_id"),
        )

        with pytest.raises(ConflictError):
            await self.service.add_label(mock_db_session, "1", "2")
