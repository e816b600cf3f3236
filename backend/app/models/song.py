"""
WorshipDeck Backend - Song SQLAlchemy Model
============================================

What:  ORM model representing the `songs` table.
Why:   Maps song rows to Python objects for the song service.
How:   Stanza content is structured data (objects/arrays from the client);
       the JSON column type serializes it to TEXT on write and decodes it
       on read, so rows written by older deployments remain readable.

Table Design Rationale:
    - song_id: INTEGER PRIMARY KEY AUTOINCREMENT. Monotonic and never
      reused, even after deletes.
    - song_name: free text, no UNIQUE constraint. Near-duplicate names are
      rejected by the application-level guard on create only.
    - main_stanza / stanzas: NOT NULL JSON text.
"""

from typing import Any

from sqlalchemy import JSON, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Song(Base):
    """
    A song with its lyrics.

    Lifecycle:
        1. Created through SongService.create_song (duplicate-name guard)
        2. song_id is immutable; name and stanzas may be replaced freely
           (updates are NOT re-checked for similar names)
        3. Deleted by id, or by exact case-insensitive name
    """

    __tablename__ = "songs"
    # AUTOINCREMENT keeps ids monotonic across deletes
    __table_args__ = {"sqlite_autoincrement": True}

    song_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    song_name: Mapped[str] = mapped_column(Text, nullable=False)
    main_stanza: Mapped[Any] = mapped_column(JSON, nullable=False)
    stanzas: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<Song(song_id={self.song_id}, song_name={self.song_name!r})>"
