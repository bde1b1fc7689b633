"""
Planet endpoints for API v1.

CRUD routes for planets plus two read‑only relational lookups: the
people who live on a planet and the films those people appear in.
Every route requires an authenticated caller.
"""

from fastapi import APIRouter, Depends, status

from swapi_catalog_api.app.core.security import get_current_user
from swapi_catalog_api.app.schemas.film import FilmListResponse
from swapi_catalog_api.app.schemas.person import PersonListResponse
from swapi_catalog_api.app.schemas.planet import (
    PlanetListResponse,
    PlanetPayload,
    PlanetResponse,
)
from swapi_catalog_api.app.services.catalog_service import CatalogService
from swapi_catalog_api.app.services.entity_kinds import FILM, PERSON, PLANET

router = APIRouter()


@router.get("/", response_model=PlanetListResponse)
async def list_planets(current_user: dict = Depends(get_current_user)) -> PlanetListResponse:
    """Return all planets."""
    planets = await CatalogService.list(PLANET)
    return PlanetListResponse(planets=planets)


@router.get("/{planet_id}", response_model=PlanetResponse)
async def get_planet(
    planet_id: int,
    current_user: dict = Depends(get_current_user),
) -> PlanetResponse:
    """Retrieve a single planet by ID; 404 if it does not exist."""
    planet = await CatalogService.find(PLANET, planet_id)
    return PlanetResponse(planet=planet)


@router.post("/", response_model=PlanetResponse, status_code=status.HTTP_201_CREATED)
async def create_planet(
    payload: PlanetPayload,
    current_user: dict = Depends(get_current_user),
) -> PlanetResponse:
    planet = await CatalogService.create(PLANET, payload.planet.model_dump(exclude_unset=True))
    return PlanetResponse(planet=planet)


@router.put("/{planet_id}", response_model=PlanetResponse)
async def update_planet(
    planet_id: int,
    payload: PlanetPayload,
    current_user: dict = Depends(get_current_user),
) -> PlanetResponse:
    """Update the attributes sent in the payload; the rest are kept."""
    planet = await CatalogService.update(PLANET, planet_id, payload.planet.model_dump(exclude_unset=True))
    return PlanetResponse(planet=planet)


@router.delete("/{planet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_planet(
    planet_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    """Delete a planet.

    Returns HTTP 409 while people still live on the planet; move or
    delete them first.
    """
    await CatalogService.delete(PLANET, planet_id)
    return None


@router.get("/{planet_id}/people", response_model=PersonListResponse)
async def list_planet_people(
    planet_id: int,
    current_user: dict = Depends(get_current_user),
) -> PersonListResponse:
    people = await CatalogService.children_of(planet_id, PERSON)
    return PersonListResponse(people=people)


@router.get("/{planet_id}/films", response_model=FilmListResponse)
async def list_planet_films(
    planet_id: int,
    current_user: dict = Depends(get_current_user),
) -> FilmListResponse:
    """List the films in which people from this planet appear."""
    films = await CatalogService.children_of(planet_id, FILM)
    return FilmListResponse(films=films)
