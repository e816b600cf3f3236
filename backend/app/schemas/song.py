"""
WorshipDeck Backend - Song Schemas
===================================

What:  API contract for the /songs endpoints.

Stanza content is structured and opaque to the backend: `main_stanza` is
any JSON value (usually an object with a title and lines), `stanzas` is an
ordered list of such values.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class SongPayload(BaseModel):
    """
    Body of POST /songs and PUT /songs/{id}.

    All three fields are required by the service layer; they are Optional
    here so that a missing field surfaces as a 400 validation error rather
    than FastAPI's 422.
    """
    song_name: Optional[str] = Field(default=None, description="Display name")
    main_stanza: Optional[Any] = Field(default=None, description="Primary stanza (chorus)")
    stanzas: Optional[List[Any]] = Field(default=None, description="All stanzas, in order")


class SongCreated(BaseModel):
    """Returned by POST /songs on success."""
    song_id: int = Field(description="Identifier assigned by the store")


class SongResponse(BaseModel):
    """
    A song row.

    GET /songs without a search term returns only `song_id` and
    `song_name`; the stanza fields are then omitted from the JSON.
    """
    song_id: int
    song_name: str
    main_stanza: Optional[Any] = None
    stanzas: Optional[List[Any]] = None

    model_config = {"from_attributes": True}
