"""
Pydantic schemas for people.

The API keeps the plural ``people`` as the wrapper key for a single
person as well as for lists, e.g. ``{"people": {"name": ...}}`` on
create and ``{"people": [...]}`` on list.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PersonAttributes(BaseModel):
    """Writable person attributes, used for both create and update."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    birth_year: Optional[str] = Field(None, description="Birth year using the in-universe BBY/ABY notation")
    eye_color: Optional[str] = None
    gender: Optional[str] = None
    hair_color: Optional[str] = None
    height: Optional[str] = Field(None, description="Height in centimetres")
    mass: Optional[str] = Field(None, description="Mass in kilograms")
    skin_color: Optional[str] = None
    planet_id: Optional[int] = Field(None, description="Identifier of the home planet")


class PersonPayload(BaseModel):
    people: PersonAttributes


class PersonRead(BaseModel):
    """Schema for reading a person."""

    id: int
    name: str
    birth_year: str
    eye_color: str
    gender: str
    hair_color: str
    height: str
    mass: str
    skin_color: str
    planet_id: int
    created_at: str
    updated_at: str


class PersonResponse(BaseModel):
    people: PersonRead


class PersonListResponse(BaseModel):
    people: List[PersonRead]
