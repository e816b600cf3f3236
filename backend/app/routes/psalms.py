"""
WorshipDeck Backend - Psalm Route Handlers

Route order matters: `/psalms/{chapter}/range` is declared before
`/psalms/{chapter}/{verse}`; "range" would otherwise fail int conversion
of `verse` with a 422.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.psalm import PsalmCreated, PsalmPayload, PsalmResponse
from app.services.psalm_service import psalm_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/psalms", tags=["Psalms"])

_VALIDATION = {400: {"description": "Invalid input", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=PsalmCreated,
    responses=_VALIDATION,
    summary="Add a verse",
)
async def create_psalm(
    payload: PsalmPayload,
    db: AsyncSession = Depends(get_db_session),
) -> PsalmCreated:
    return await psalm_service.create_psalm(db, payload)


@router.post(
    "/bulk",
    response_model=MessageResponse,
    responses=_VALIDATION,
    summary="Import many verses",
    description="Items missing any of chapter, verse, telugu, english are skipped.",
)
async def bulk_insert(
    verses: List[PsalmPayload],
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await psalm_service.bulk_insert(db, verses)


@router.get(
    "/{chapter}/range",
    response_model=List[PsalmResponse],
    responses=_VALIDATION,
    summary="Verses of a chapter within an inclusive range",
)
async def get_range(
    chapter: int,
    start: Optional[int] = Query(default=None, description="First verse (inclusive)"),
    end: Optional[int] = Query(default=None, description="Last verse (inclusive)"),
    db: AsyncSession = Depends(get_db_session),
) -> List[PsalmResponse]:
    return await psalm_service.get_range(db, chapter, start, end)


@router.get(
    "/{chapter}/{verse}",
    response_model=PsalmResponse,
    responses=_NOT_FOUND,
    summary="A single verse",
)
async def get_verse(
    chapter: int,
    verse: int,
    db: AsyncSession = Depends(get_db_session),
) -> PsalmResponse:
    return await psalm_service.get_verse(db, chapter, verse)


@router.get(
    "/{chapter}",
    response_model=List[PsalmResponse],
    summary="All verses of a chapter",
)
async def get_chapter(
    chapter: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[PsalmResponse]:
    return await psalm_service.get_chapter(db, chapter)


@router.put(
    "/{psalm_id}",
    response_model=MessageResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Replace a verse",
)
async def update_psalm(
    psalm_id: int,
    payload: PsalmPayload,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await psalm_service.update_psalm(db, psalm_id, payload)


@router.delete(
    "/{psalm_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a verse",
)
async def delete_psalm(
    psalm_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await psalm_service.delete_psalm(db, psalm_id)


@router.delete(
    "",
    response_model=MessageResponse,
    responses=_VALIDATION,
    summary="Delete every verse",
    description="Destructive. Requires `?confirm=yes`.",
)
async def delete_all(
    confirm: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await psalm_service.delete_all(db, confirm)
