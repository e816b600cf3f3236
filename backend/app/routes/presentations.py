"""
WorshipDeck Backend - Presentation Route Handlers
==================================================

What:  Slide endpoints used by the presenter UI.

Route Inventory:
    POST   /presentations                                   initialize (validation only)
    GET    /presentations                                   distinct presentation names
    POST   /presentations/slide                             add a slide
    PUT    /presentations/slide                             replace slideData
    DELETE /presentations/slide/{presentationName}/{randomId}
    GET    /presentations/{name}/slides                     slides, oldest first
    DELETE /presentations/{presentationName}                all slides of a presentation
    GET    /slide/{randomId}                                raw slideData (text/plain)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.presentation import (
    PresentationInit,
    SlideCreate,
    SlideResponse,
    SlideUpdate,
)
from app.services.presentation_service import presentation_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Presentations"])

_VALIDATION = {400: {"description": "Missing required fields", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}


@router.post(
    "/presentations",
    status_code=201,
    response_model=MessageResponse,
    responses=_VALIDATION,
    summary="Initialize a presentation",
)
async def init_presentation(payload: PresentationInit) -> MessageResponse:
    return await presentation_service.init_presentation(payload)


@router.get(
    "/presentations",
    response_model=List[str],
    summary="List presentation names",
)
async def list_presentations(
    db: AsyncSession = Depends(get_db_session),
) -> List[str]:
    return await presentation_service.list_presentation_names(db)


@router.post(
    "/presentations/slide",
    status_code=201,
    response_model=MessageResponse,
    responses={**_VALIDATION, 500: {"description": "Storage failure", "model": ErrorResponse}},
    summary="Add a slide to a presentation",
)
async def add_slide(
    payload: SlideCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await presentation_service.add_slide(db, payload)


@router.put(
    "/presentations/slide",
    response_model=MessageResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Replace a slide's data",
)
async def update_slide(
    payload: SlideUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await presentation_service.update_slide(db, payload)


@router.delete(
    "/presentations/slide/{presentation_name}/{random_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a single slide",
)
async def delete_slide(
    presentation_name: str,
    random_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await presentation_service.delete_slide(db, presentation_name, random_id)


@router.get(
    "/presentations/{name}/slides",
    response_model=List[SlideResponse],
    summary="List the slides of a presentation",
)
async def list_slides(
    name: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[SlideResponse]:
    return await presentation_service.list_slides(db, name)


@router.delete(
    "/presentations/{presentation_name}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a whole presentation",
)
async def delete_presentation(
    presentation_name: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await presentation_service.delete_presentation(db, presentation_name)


@router.get(
    "/slide/{random_id}",
    response_class=PlainTextResponse,
    responses=_NOT_FOUND,
    summary="Get the raw data of one slide",
)
async def get_slide(
    random_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PlainTextResponse:
    """slideData is returned exactly as stored; the editor parses it."""
    slide_data = await presentation_service.get_slide_data(db, random_id)
    return PlainTextResponse(slide_data)
