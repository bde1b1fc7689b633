"""
Pydantic schemas for planets.

Request bodies are wrapped in a ``planet`` key, e.g.
``{"planet": {"name": "Tatooine", ...}}``.  The inner model lists the
attributes a client may send; anything else is rejected before the
request reaches the service layer.  Presence and length rules are
enforced by ``CatalogService`` so that create and update share them.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlanetAttributes(BaseModel):
    """Writable planet attributes, used for both create and update."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, description="Planet name")
    diameter: Optional[str] = Field(None, description="Diameter in kilometres")
    rotation_period: Optional[str] = Field(None, description="Standard hours per rotation")
    orbital_period: Optional[str] = Field(None, description="Standard days per orbit")
    gravity: Optional[str] = Field(None, description="Gravity relative to standard, e.g. '1 standard'")
    population: Optional[str] = None
    climate: Optional[str] = None
    terrain: Optional[str] = None
    surface_water: Optional[str] = Field(None, description="Percentage of the surface covered by water")


class PlanetPayload(BaseModel):
    planet: PlanetAttributes


class PlanetRead(BaseModel):
    """Schema for reading a planet."""

    id: int
    name: str
    diameter: str
    rotation_period: str
    orbital_period: str
    gravity: str
    population: str
    climate: str
    terrain: str
    surface_water: str
    created_at: str
    updated_at: str


class PlanetResponse(BaseModel):
    planet: PlanetRead


class PlanetListResponse(BaseModel):
    planets: List[PlanetRead]
