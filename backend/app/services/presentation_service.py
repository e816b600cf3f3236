"""
WorshipDeck Backend - Presentation Service
===========================================

What:  CRUD for presentation slides.
How:   A presentation has no row of its own; it is the set of slides that
       share a `presentation_name`. Slides are addressed by the
       client-generated `random_id`.
Who:   Called by app.routes.presentations.
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.presentation import Slide
from app.schemas.common import MessageResponse
from app.schemas.presentation import (
    PresentationInit,
    SlideCreate,
    SlideResponse,
    SlideUpdate,
)
from app.services.validation import require_fields

logger = logging.getLogger(__name__)


class PresentationService:
    """
    Business logic for slides.

    Error Handling Strategy:
        SQLAlchemy errors are wrapped in DatabaseError with the driver's
        message (e.g. a duplicate randomId surfaces as
        "UNIQUE constraint failed: presentations.randomId").
    """

    async def init_presentation(self, payload: PresentationInit) -> MessageResponse:
        """
        Acknowledge a new presentation.

        Only validates the payload: the presentation comes into existence
        when its first slide is added.
        """
        require_fields(
            payload.model_dump(),
            ("presentation_name", "created_date_time"),
            "presentationName and createdDateTime required.",
        )
        logger.info("Presentation %r initialized", payload.presentation_name)
        return MessageResponse(message="Presentation initialized.")

    async def add_slide(self, db: AsyncSession, payload: SlideCreate) -> MessageResponse:
        require_fields(
            payload.model_dump(),
            ("presentation_name", "slide_data", "random_id"),
            "presentationName, randomId and slideData are required.",
        )
        now = datetime.now(timezone.utc)
        slide = Slide(
            random_id=payload.random_id,
            presentation_name=payload.presentation_name,
            slide_order=payload.slide_order,
            slide_data=payload.slide_data,
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(slide)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Could not add slide %r: %s", payload.random_id, str(e))
            raise DatabaseError.from_exception(e, operation="add_slide")

        logger.info(
            "Slide %r added to presentation %r",
            payload.random_id,
            payload.presentation_name,
        )
        return MessageResponse(message="Slide added.")

    async def update_slide(self, db: AsyncSession, payload: SlideUpdate) -> MessageResponse:
        require_fields(
            payload.model_dump(),
            ("presentation_name", "random_id", "slide_data"),
            "presentationName, randomId and slideData are required.",
        )
        try:
            result = await db.execute(
                update(Slide)
                .where(
                    Slide.presentation_name == payload.presentation_name,
                    Slide.random_id == payload.random_id,
                )
                .values(
                    slide_data=payload.slide_data,
                    updated_at=datetime.now(timezone.utc),
                )
            )
        except SQLAlchemyError as e:
            logger.error("Could not update slide %r: %s", payload.random_id, str(e))
            raise DatabaseError.from_exception(e, operation="update_slide")

        if result.rowcount == 0:
            raise NotFoundError(message="Slide not found.", resource="slide")
        return MessageResponse(message="Slide updated.")

    async def delete_slide(
        self, db: AsyncSession, presentation_name: str, random_id: str
    ) -> MessageResponse:
        try:
            result = await db.execute(
                delete(Slide).where(
                    Slide.presentation_name == presentation_name,
                    Slide.random_id == random_id,
                )
            )
        except SQLAlchemyError as e:
            logger.error("Could not delete slide %r: %s", random_id, str(e))
            raise DatabaseError.from_exception(e, operation="delete_slide")

        if result.rowcount == 0:
            raise NotFoundError(message="Slide not found.", resource="slide")
        return MessageResponse(message=f'Slide with ID "{random_id}" deleted.')

    async def list_slides(
        self, db: AsyncSession, presentation_name: str
    ) -> List[SlideResponse]:
        """Slides of one presentation, oldest first. Unknown names give []."""
        try:
            result = await db.execute(
                select(Slide)
                .where(Slide.presentation_name == presentation_name)
                .order_by(Slide.created_at.asc(), Slide.id.asc())
            )
            slides = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Could not list slides of %r: %s", presentation_name, str(e))
            raise DatabaseError.from_exception(e, operation="list_slides")

        return [
            SlideResponse(
                random_id=slide.random_id,
                slide_data=slide.slide_data,
                created_at=slide.created_at,
            )
            for slide in slides
        ]

    async def get_slide_data(self, db: AsyncSession, random_id: str) -> str:
        """Raw slideData of one slide, exactly as stored."""
        try:
            result = await db.execute(
                select(Slide.slide_data).where(Slide.random_id == random_id)
            )
            slide_data = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Could not fetch slide %r: %s", random_id, str(e))
            raise DatabaseError.from_exception(e, operation="get_slide")

        if slide_data is None:
            raise NotFoundError(message="Slide not found.", resource="slide")
        return slide_data

    async def delete_presentation(
        self, db: AsyncSession, presentation_name: str
    ) -> MessageResponse:
        """Delete every slide of a presentation."""
        try:
            result = await db.execute(
                delete(Slide).where(Slide.presentation_name == presentation_name)
            )
        except SQLAlchemyError as e:
            logger.error("Could not delete presentation %r: %s", presentation_name, str(e))
            raise DatabaseError.from_exception(e, operation="delete_presentation")

        deleted = result.rowcount
        if deleted == 0:
            raise NotFoundError(
                message="No presentation found with that name.",
                resource="presentation",
            )
        logger.info("Deleted %d slide(s) of presentation %r", deleted, presentation_name)
        return MessageResponse(
            message=f'Deleted {deleted} slide(s) from presentation "{presentation_name}".'
        )

    async def list_presentation_names(self, db: AsyncSession) -> List[str]:
        try:
            result = await db.execute(
                select(Slide.presentation_name)
                .distinct()
                .order_by(Slide.presentation_name.asc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Could not list presentations: %s", str(e), exc_info=True)
            raise DatabaseError.from_exception(e, operation="list_presentations")


presentation_service = PresentationService()
