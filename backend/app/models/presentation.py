"""
WorshipDeck Backend - Presentation Slide SQLAlchemy Model
==========================================================

What:  ORM model for the `presentations` table. Each row is ONE slide;
       a "presentation" is simply the set of rows sharing a name.
Why:   Slides are edited independently by the presenter UI, so they are
       addressed by a client-generated `randomId`.

Column naming:
    Database columns keep their camelCase names (randomId, slideData, ...)
    so an existing sqlite.db created by earlier deployments is used as-is.
    Python attributes are snake_case.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Slide(Base):
    """
    A single slide of a named presentation.

    Query Patterns:
        - Slides of a presentation, oldest first:
          WHERE presentationName = ? ORDER BY createdDateTime
        - Single slide by randomId (UNIQUE index)
        - Distinct presentation names for the picker
    """

    __tablename__ = "presentations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Client-generated identifier; unique across all presentations
    random_id: Mapped[str] = mapped_column(
        "randomId", Text, nullable=False, unique=True
    )
    presentation_name: Mapped[str] = mapped_column(
        "presentationName", Text, nullable=False
    )
    slide_order: Mapped[Optional[int]] = mapped_column(
        "slideOrder", Integer, nullable=True
    )
    # Opaque to the backend: whatever the editor serialized
    slide_data: Mapped[str] = mapped_column("slideData", Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdDateTime", DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedDateTime", DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        Index("idx_presentations_name_created", presentation_name, created_at),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Slide(random_id={self.random_id!r}, "
            f"presentation_name={self.presentation_name!r})>"
        )
