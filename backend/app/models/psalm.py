"""
WorshipDeck Backend - Psalm SQLAlchemy Model

One row per verse, bilingual (Telugu + English). Chapter/verse pairs are
not unique at the storage level; bulk imports may insert duplicates.
"""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Psalm(Base):
    __tablename__ = "psalms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    verse: Mapped[int] = mapped_column(Integer, nullable=False)
    telugu: Mapped[str] = mapped_column(Text, nullable=False)
    english: Mapped[str] = mapped_column(Text, nullable=False)

    # Every read filters by chapter and orders by verse
    __table_args__ = (
        Index("idx_psalms_chapter_verse", chapter, verse),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Psalm(id={self.id}, {self.chapter}:{self.verse})>"
