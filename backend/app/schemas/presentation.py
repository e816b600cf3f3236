"""
WorshipDeck Backend - Presentation Schemas
===========================================

What:  API contract for the presentation/slide endpoints.

Field naming:
    The presenter UI speaks camelCase (presentationName, randomId, ...).
    Python attributes are snake_case with camelCase aliases; responses are
    serialized by alias (FastAPI's default).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PresentationInit(BaseModel):
    """Body of POST /presentations. Nothing is stored; see PresentationService."""
    model_config = ConfigDict(populate_by_name=True)

    presentation_name: Optional[str] = Field(default=None, alias="presentationName")
    created_date_time: Optional[str] = Field(default=None, alias="createdDateTime")


class SlideCreate(BaseModel):
    """Body of POST /presentations/slide."""
    model_config = ConfigDict(populate_by_name=True)

    presentation_name: Optional[str] = Field(default=None, alias="presentationName")
    random_id: Optional[str] = Field(default=None, alias="randomId")
    slide_data: Optional[str] = Field(default=None, alias="slideData")
    slide_order: Optional[int] = Field(default=None, alias="slideOrder")


class SlideUpdate(BaseModel):
    """Body of PUT /presentations/slide. Only slideData can change."""
    model_config = ConfigDict(populate_by_name=True)

    presentation_name: Optional[str] = Field(default=None, alias="presentationName")
    random_id: Optional[str] = Field(default=None, alias="randomId")
    slide_data: Optional[str] = Field(default=None, alias="slideData")


class SlideResponse(BaseModel):
    """One entry of GET /presentations/{name}/slides."""
    model_config = ConfigDict(populate_by_name=True)

    random_id: str = Field(alias="randomId")
    slide_data: str = Field(alias="slideData")
    created_at: datetime = Field(alias="createdDateTime")
