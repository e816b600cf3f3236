"""
WorshipDeck Backend - Song Route Handlers
==========================================

What:  /songs endpoints: guarded create, update, list/search, fetch, delete.
How:   Thin handlers; SongService owns validation, the duplicate-name
       guard, and all queries. Errors are formatted by the global handlers
       registered in main.py (400 / 404 / 409 / 500).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.song import SongCreated, SongPayload, SongResponse
from app.services.song_service import song_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/songs", tags=["Songs"])


@router.post(
    "",
    response_model=SongCreated,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        409: {"description": "A similar song already exists", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Create a song",
    description=(
        "Stores a new song unless an existing song name is at least 80% similar "
        "(bigram Dice coefficient) to the proposed name."
    ),
)
async def create_song(
    payload: SongPayload,
    db: AsyncSession = Depends(get_db_session),
) -> SongCreated:
    return await song_service.create_song(db=db, payload=payload)


@router.put(
    "/{song_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        404: {"description": "Song not found", "model": ErrorResponse},
    },
    summary="Replace a song's name and stanzas",
)
async def update_song(
    song_id: int,
    payload: SongPayload,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """No similarity check here; only creation is guarded."""
    return await song_service.update_song(db=db, song_id=song_id, payload=payload)


@router.get(
    "",
    response_model=List[SongResponse],
    response_model_exclude_none=True,
    summary="List songs or search by name",
    description=(
        "Without `name`, returns id and name of every song. With `name`, returns "
        "full songs whose name contains the given text."
    ),
)
async def list_songs(
    name: Optional[str] = Query(default=None, description="Substring of the song name"),
    db: AsyncSession = Depends(get_db_session),
) -> List[SongResponse]:
    return await song_service.list_songs(db=db, name=name)


@router.get(
    "/{song_id}",
    response_model=SongResponse,
    responses={404: {"description": "Song not found", "model": ErrorResponse}},
    summary="Get a song by id",
)
async def get_song(
    song_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SongResponse:
    return await song_service.get_song(db=db, song_id=song_id)


@router.delete(
    "/by-name/{name}",
    response_model=MessageResponse,
    responses={404: {"description": "No song with that name", "model": ErrorResponse}},
    summary="Delete songs by exact name (case-insensitive)",
)
async def delete_songs_by_name(
    name: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await song_service.delete_songs_by_name(db=db, name=name)


@router.delete(
    "/{song_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Song not found", "model": ErrorResponse}},
    summary="Delete a song by id",
)
async def delete_song(
    song_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await song_service.delete_song(db=db, song_id=song_id)
