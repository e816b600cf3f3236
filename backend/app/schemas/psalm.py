"""
WorshipDeck Backend - Psalm Schemas

Verses are bilingual; `telugu` and `english` hold the verse text.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PsalmPayload(BaseModel):
    """Body of POST /psalms, PUT /psalms/{id}, and each POST /psalms/bulk item."""
    chapter: Optional[int] = Field(default=None, description="Psalm number")
    verse: Optional[int] = Field(default=None, description="Verse number")
    telugu: Optional[str] = Field(default=None, description="Verse text in Telugu")
    english: Optional[str] = Field(default=None, description="Verse text in English")


class PsalmCreated(BaseModel):
    id: int


class PsalmResponse(BaseModel):
    id: int
    chapter: int
    verse: int
    telugu: str
    english: str

    model_config = {"from_attributes": True}
