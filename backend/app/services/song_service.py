"""
WorshipDeck Backend - Song Service (Duplicate-Name Guard + CRUD)
=================================================================

What:  Business logic for the /songs endpoints.
Why:   Song creation is gated: a new song is rejected when its name is
       "similar enough" to any existing song name. Everything else is plain
       parameter-bound CRUD.
Who:   Called by app.routes.songs; receives the request's AsyncSession.

Guard Flow (POST /songs):
    ┌────────────┐    ┌──────────────┐    ┌───────────────┐    ┌──────────┐
    │  Validate  │───▶│  Read ALL    │───▶│  Dice score   │───▶│  Insert  │
    │  payload   │    │  song names  │    │  vs each name │    │  + commit│
    └────────────┘    └──────────────┘    └───────────────┘    └──────────┘
          │                                      │
          ▼                                      ▼
    ValidationError (400)              any score ≥ 0.8 → ConflictError (409)

    Storage failure in either the read or the write → DatabaseError (500).
    Nothing is inserted on any error path, so the whole call may be retried.

Cost:
    One unbounded read (O(n) names) plus one O(n) scan per create. Fine for
    a songbook of thousands of titles; not indexed in any way.

Concurrency:
    Read-scan-insert is a check-then-act sequence. Two concurrent creates
    with similar names could both pass the scan before either commits.
    The guard therefore runs inside an in-process asyncio.Lock and commits
    before releasing it, so within one worker process the sequence is
    atomic. Several worker processes sharing one SQLite file can still race;
    SQLite only serializes the individual writes, not the whole sequence.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DatabaseError, NotFoundError
from app.models.song import Song
from app.schemas.common import MessageResponse
from app.schemas.song import SongCreated, SongPayload, SongResponse
from app.services.similarity import compare_two_strings
from app.services.validation import require_fields

logger = logging.getLogger(__name__)

# Names scoring at or above this are treated as the same song
SIMILARITY_THRESHOLD = 0.8

REQUIRED_FIELDS = ("song_name", "main_stanza", "stanzas")


def find_similar_name(
    candidate: str,
    existing_names: Iterable[str],
    threshold: float = SIMILARITY_THRESHOLD,
) -> Optional[Tuple[str, float]]:
    """
    Return the first existing name whose similarity to `candidate` meets
    the threshold, with its score, or None when every name is below it.
    """
    for name in existing_names:
        # Rows written before the NOT NULL migration may hold NULL names
        if name is None:
            continue
        score = compare_two_strings(candidate, name)
        if score >= threshold:
            return name, score
    return None


class SongService:
    """
    Business logic layer for song operations.

    Responsibilities:
        - create_song(): validation + duplicate-name guard + insert
        - update_song(): replace content (no similarity re-check)
        - list_songs() / get_song(): reads, stanzas decoded from JSON
        - delete_song() / delete_songs_by_name(): removal
    """

    def __init__(self, threshold: float = SIMILARITY_THRESHOLD):
        self.threshold = threshold
        # Serializes the guard's read-scan-insert-commit within this process
        self._create_lock = asyncio.Lock()

    # ── Storage primitives used by the guard ──────────────────────────────

    async def list_all_names(self, db: AsyncSession) -> List[str]:
        """Every song name currently stored (no LIMIT; the guard needs all of them)."""
        result = await db.execute(select(Song.song_name))
        return list(result.scalars().all())

    async def insert_song(
        self, db: AsyncSession, song_name: str, main_stanza, stanzas
    ) -> int:
        song = Song(song_name=song_name, main_stanza=main_stanza, stanzas=stanzas)
        db.add(song)
        await db.flush()  # Assigns song_id
        return song.song_id

    # ── Guarded create ────────────────────────────────────────────────────

    async def create_song(self, db: AsyncSession, payload: SongPayload) -> SongCreated:
        """
        Insert a new song unless a similarly named one already exists.

        Raises:
            ValidationError: song_name, main_stanza, or stanzas missing/empty
            ConflictError:   an existing name scores ≥ threshold
            DatabaseError:   the read or the insert failed
        """
        require_fields(
            payload.model_dump(), REQUIRED_FIELDS, "Missing required fields"
        )
        candidate = payload.song_name

        async with self._create_lock:
            try:
                existing_names = await self.list_all_names(db)
            except SQLAlchemyError as e:
                logger.error("Could not read song names: %s", str(e))
                raise DatabaseError.from_exception(e, operation="list_song_names")

            match = find_similar_name(candidate, existing_names, self.threshold)
            if match is not None:
                similar_to, score = match
                logger.warning(
                    "Rejected song %r: similar to %r (score=%.3f)",
                    candidate,
                    similar_to,
                    score,
                )
                raise ConflictError(
                    context={"similar_to": similar_to, "score": round(score, 4)}
                )

            try:
                song_id = await self.insert_song(
                    db, candidate, payload.main_stanza, payload.stanzas
                )
                # Commit while still holding the lock; the next create must
                # see this row in its name scan
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error("Could not insert song %r: %s", candidate, str(e))
                raise DatabaseError.from_exception(e, operation="insert_song")

        logger.info(
            "Song created: song_id=%d (scanned %d existing names)",
            song_id,
            len(existing_names),
        )
        return SongCreated(song_id=song_id)

    # ── Plain CRUD ────────────────────────────────────────────────────────

    async def update_song(
        self, db: AsyncSession, song_id: int, payload: SongPayload
    ) -> MessageResponse:
        """
        Replace name and stanzas of an existing song.

        The duplicate-name guard is NOT applied: an update may introduce a
        name that create would have rejected.
        """
        require_fields(
            payload.model_dump(), REQUIRED_FIELDS, "Missing required fields"
        )
        try:
            result = await db.execute(
                update(Song)
                .where(Song.song_id == song_id)
                .values(
                    song_name=payload.song_name,
                    main_stanza=payload.main_stanza,
                    stanzas=payload.stanzas,
                )
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating song %d: %s", song_id, str(e))
            raise DatabaseError.from_exception(e, operation="update_song")

        if result.rowcount == 0:
            raise NotFoundError(message="Song not found", resource="song")
        logger.info("Song %d updated", song_id)
        return MessageResponse(message="Song updated")

    async def list_songs(
        self, db: AsyncSession, name: Optional[str] = None
    ) -> List[SongResponse]:
        """
        Without `name`: id and name of every song (lightweight picker list).
        With `name`: full rows whose name contains it (SQL LIKE, so ASCII
        letters match case-insensitively).
        """
        try:
            if name:
                result = await db.execute(
                    select(Song).where(Song.song_name.like(f"%{name}%"))
                )
                return [
                    SongResponse.model_validate(song) for song in result.scalars().all()
                ]

            result = await db.execute(select(Song.song_id, Song.song_name))
            return [
                SongResponse(song_id=row.song_id, song_name=row.song_name)
                for row in result.all()
            ]
        except SQLAlchemyError as e:
            logger.error("Database error listing songs: %s", str(e), exc_info=True)
            raise DatabaseError.from_exception(e, operation="list_songs")

    async def get_song(self, db: AsyncSession, song_id: int) -> SongResponse:
        try:
            result = await db.execute(select(Song).where(Song.song_id == song_id))
            song = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching song %d: %s", song_id, str(e))
            raise DatabaseError.from_exception(e, operation="get_song")

        if song is None:
            raise NotFoundError(message="Song not found", resource="song")
        return SongResponse.model_validate(song)

    async def delete_song(self, db: AsyncSession, song_id: int) -> MessageResponse:
        try:
            result = await db.execute(delete(Song).where(Song.song_id == song_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting song %d: %s", song_id, str(e))
            raise DatabaseError.from_exception(e, operation="delete_song")

        if result.rowcount == 0:
            raise NotFoundError(message="Song not found.", resource="song")
        logger.info("Song %d deleted", song_id)
        return MessageResponse(message="Song deleted successfully.")

    async def delete_songs_by_name(self, db: AsyncSession, name: str) -> MessageResponse:
        """Delete every song whose name equals `name`, ignoring case."""
        try:
            result = await db.execute(
                delete(Song).where(func.lower(Song.song_name) == func.lower(name))
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting songs named %r: %s", name, str(e))
            raise DatabaseError.from_exception(e, operation="delete_songs_by_name")

        if result.rowcount == 0:
            raise NotFoundError(message="No song found with that name.", resource="song")
        logger.info("Deleted %d song(s) named %r", result.rowcount, name)
        return MessageResponse(message="Song(s) deleted successfully.")


# ── Singleton Instance ────────────────────────────────────────────────────
# Shared so that every request contends on the same create lock
song_service = SongService()
