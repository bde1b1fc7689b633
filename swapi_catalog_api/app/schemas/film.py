"""
Pydantic schemas for films and for person↔film links.

``FilmLinkPayload`` is the body accepted when attaching a film to a
person: ``{"film": {"id": 4}}``.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilmAttributes(BaseModel):
    """Writable film attributes, used for both create and update."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    episode_id: Optional[int] = Field(None, ge=1, description="Episode number within the saga")
    director: Optional[str] = None
    producer: Optional[str] = Field(None, description="Comma separated list of producers")
    release_date: Optional[str] = Field(None, description="Release date in ISO 8601 format")
    opening_crawl: Optional[str] = None


class FilmPayload(BaseModel):
    film: FilmAttributes


class FilmRead(BaseModel):
    """Schema for reading a film."""

    id: int
    title: str
    episode_id: Optional[int]
    director: str
    producer: str
    release_date: str
    opening_crawl: Optional[str]
    created_at: str
    updated_at: str


class FilmResponse(BaseModel):
    film: FilmRead


class FilmListResponse(BaseModel):
    films: List[FilmRead]


class FilmRef(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Identifier of an existing film")


class FilmLinkPayload(BaseModel):
    film: FilmRef
