"""
WorshipDeck Backend - Psalm Service
====================================

What:  CRUD for bilingual psalm verses, plus bulk import and wipe.
Who:   Called by app.routes.psalms.

Bulk import:
    Incomplete items are skipped silently (a partially filled spreadsheet
    export should still import what it can). All complete items are
    inserted in the request's single transaction; a storage failure rolls
    back the whole batch.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.psalm import Psalm
from app.schemas.common import MessageResponse
from app.schemas.psalm import PsalmCreated, PsalmPayload, PsalmResponse
from app.services.validation import is_blank, require_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("chapter", "verse", "telugu", "english")


class PsalmService:

    async def create_psalm(self, db: AsyncSession, payload: PsalmPayload) -> PsalmCreated:
        require_fields(payload.model_dump(), REQUIRED_FIELDS, "All fields are required.")
        psalm = Psalm(**payload.model_dump(include=set(REQUIRED_FIELDS)))
        try:
            db.add(psalm)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Could not insert psalm verse: %s", str(e))
            raise DatabaseError.from_exception(e, operation="create_psalm")
        return PsalmCreated(id=psalm.id)

    async def bulk_insert(
        self, db: AsyncSession, verses: List[PsalmPayload]
    ) -> MessageResponse:
        if not verses:
            raise ValidationError(message="Must be a non-empty array of verses.")

        rows = [
            verse.model_dump(include=set(REQUIRED_FIELDS))
            for verse in verses
            if not any(is_blank(getattr(verse, name)) for name in REQUIRED_FIELDS)
        ]
        skipped = len(verses) - len(rows)
        if rows:
            try:
                await db.execute(insert(Psalm), rows)
            except SQLAlchemyError as e:
                logger.error("Bulk psalm insert failed: %s", str(e))
                raise DatabaseError.from_exception(e, operation="bulk_insert_psalms")

        logger.info("Bulk psalm import: %d inserted, %d skipped", len(rows), skipped)
        return MessageResponse(message="Verses inserted successfully.")

    async def get_range(
        self,
        db: AsyncSession,
        chapter: int,
        start: Optional[int],
        end: Optional[int],
    ) -> List[PsalmResponse]:
        """Verses start..end (inclusive) of a chapter, ordered by verse."""
        if start is None or end is None:
            raise ValidationError(message="Provide start and end verse numbers.")
        return await self._select(
            db,
            select(Psalm)
            .where(Psalm.chapter == chapter, Psalm.verse.between(start, end))
            .order_by(Psalm.verse.asc()),
            operation="get_psalm_range",
        )

    async def get_verse(self, db: AsyncSession, chapter: int, verse: int) -> PsalmResponse:
        rows = await self._select(
            db,
            select(Psalm).where(Psalm.chapter == chapter, Psalm.verse == verse).limit(1),
            operation="get_psalm_verse",
        )
        if not rows:
            raise NotFoundError(message="Verse not found.", resource="psalm")
        return rows[0]

    async def get_chapter(self, db: AsyncSession, chapter: int) -> List[PsalmResponse]:
        return await self._select(
            db,
            select(Psalm).where(Psalm.chapter == chapter).order_by(Psalm.verse.asc()),
            operation="get_psalm_chapter",
        )

    async def update_psalm(
        self, db: AsyncSession, psalm_id: int, payload: PsalmPayload
    ) -> MessageResponse:
        require_fields(payload.model_dump(), REQUIRED_FIELDS, "All fields are required.")
        try:
            result = await db.execute(
                update(Psalm)
                .where(Psalm.id == psalm_id)
                .values(**payload.model_dump(include=set(REQUIRED_FIELDS)))
            )
        except SQLAlchemyError as e:
            logger.error("Could not update psalm %d: %s", psalm_id, str(e))
            raise DatabaseError.from_exception(e, operation="update_psalm")

        if result.rowcount == 0:
            raise NotFoundError(message="Psalm not found.", resource="psalm")
        return MessageResponse(message="Psalm updated.")

    async def delete_psalm(self, db: AsyncSession, psalm_id: int) -> MessageResponse:
        try:
            result = await db.execute(delete(Psalm).where(Psalm.id == psalm_id))
        except SQLAlchemyError as e:
            logger.error("Could not delete psalm %d: %s", psalm_id, str(e))
            raise DatabaseError.from_exception(e, operation="delete_psalm")

        if result.rowcount == 0:
            raise NotFoundError(message="Psalm not found.", resource="psalm")
        return MessageResponse(message="Psalm deleted successfully.")

    async def delete_all(self, db: AsyncSession, confirm: Optional[str]) -> MessageResponse:
        """Wipe the table. Requires the explicit confirm=yes query flag."""
        if confirm != "yes":
            raise ValidationError(message="Pass ?confirm=yes to delete all psalms.")
        try:
            result = await db.execute(delete(Psalm))
        except SQLAlchemyError as e:
            logger.error("Could not delete all psalms: %s", str(e))
            raise DatabaseError.from_exception(e, operation="delete_all_psalms")

        logger.warning("All psalm verses deleted (%d rows)", result.rowcount)
        return MessageResponse(message=f"All {result.rowcount} verses deleted.")

    async def _select(self, db: AsyncSession, query, operation: str) -> List[PsalmResponse]:
        try:
            result = await db.execute(query)
            psalms = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error in %s: %s", operation, str(e))
            raise DatabaseError.from_exception(e, operation=operation)
        return [PsalmResponse.model_validate(psalm) for psalm in psalms]


psalm_service = PsalmService()
