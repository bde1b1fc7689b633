"""
Descriptors for the catalog's entity kinds.

An ``EntityKind`` tells ``CatalogService`` which table a kind lives in,
which columns a client may write, which of them are required and
length‑bounded, which optional ones hold integers, which column
references a parent record, and which schema to build when reading a
row back.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Type

from pydantic import BaseModel

from ..schemas.film import FilmRead
from ..schemas.person import PersonRead
from ..schemas.planet import PlanetRead


# Upper bound on every required text attribute.
MAX_TEXT_LENGTH = 255


@dataclass(frozen=True)
class ParentRef:
    """A required reference from a child row to a parent record."""

    column: str
    kind: "EntityKind"


@dataclass(frozen=True)
class EntityKind:
    name: str
    table: str
    read_schema: Type[BaseModel]
    required: Tuple[str, ...]
    optional: Tuple[str, ...] = ()
    integers: Tuple[str, ...] = ()
    parent: Optional[ParentRef] = None

    @property
    def columns(self) -> Tuple[str, ...]:
        """Writable columns in insert order."""
        parent_column = (self.parent.column,) if self.parent else ()
        return self.required + self.optional + parent_column


PLANET = EntityKind(
    name="Planet",
    table="planets",
    read_schema=PlanetRead,
    required=(
        "name",
        "diameter",
        "rotation_period",
        "orbital_period",
        "gravity",
        "population",
        "climate",
        "terrain",
        "surface_water",
    ),
)

PERSON = EntityKind(
    name="People",
    table="people",
    read_schema=PersonRead,
    required=(
        "name",
        "birth_year",
        "eye_color",
        "gender",
        "hair_color",
        "height",
        "mass",
        "skin_color",
    ),
    parent=ParentRef(column="planet_id", kind=PLANET),
)

FILM = EntityKind(
    name="Film",
    table="films",
    read_schema=FilmRead,
    required=("title", "director", "producer", "release_date"),
    optional=("episode_id", "opening_crawl"),
    integers=("episode_id",),
)

KINDS = (PLANET, PERSON, FILM)
