"""
Film endpoints for API v1.

CRUD routes for films and the reverse side of the person↔film link
(``GET /films/{id}/people``).  Deleting a film removes its links to
people.
"""

from fastapi import APIRouter, Depends, status

from swapi_catalog_api.app.core.security import get_current_user
from swapi_catalog_api.app.schemas.film import FilmListResponse, FilmPayload, FilmResponse
from swapi_catalog_api.app.schemas.person import PersonListResponse
from swapi_catalog_api.app.services.association_service import AssociationService
from swapi_catalog_api.app.services.catalog_service import CatalogService
from swapi_catalog_api.app.services.entity_kinds import FILM

router = APIRouter()


@router.get("/", response_model=FilmListResponse)
async def list_films(current_user: dict = Depends(get_current_user)) -> FilmListResponse:
    films = await CatalogService.list(FILM)
    return FilmListResponse(films=films)


@router.get("/{film_id}", response_model=FilmResponse)
async def get_film(
    film_id: int,
    current_user: dict = Depends(get_current_user),
) -> FilmResponse:
    film = await CatalogService.find(FILM, film_id)
    return FilmResponse(film=film)


@router.post("/", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
async def create_film(
    payload: FilmPayload,
    current_user: dict = Depends(get_current_user),
) -> FilmResponse:
    film = await CatalogService.create(FILM, payload.film.model_dump(exclude_unset=True))
    return FilmResponse(film=film)


@router.put("/{film_id}", response_model=FilmResponse)
async def update_film(
    film_id: int,
    payload: FilmPayload,
    current_user: dict = Depends(get_current_user),
) -> FilmResponse:
    film = await CatalogService.update(FILM, film_id, payload.film.model_dump(exclude_unset=True))
    return FilmResponse(film=film)


@router.delete("/{film_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_film(
    film_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    await CatalogService.delete(FILM, film_id)
    return None


@router.get("/{film_id}/people", response_model=PersonListResponse)
async def list_film_people(
    film_id: int,
    current_user: dict = Depends(get_current_user),
) -> PersonListResponse:
    """List the people who appear in the film."""
    people = await AssociationService.list_people(film_id)
    return PersonListResponse(people=people)
