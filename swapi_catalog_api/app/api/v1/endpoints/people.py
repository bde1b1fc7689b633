"""
People endpoints for API v1.

CRUD routes for people and the management of a person's films:
listing them, linking a film (``POST /people/{id}/films`` with
``{"film": {"id": ...}}``) and unlinking one.  Linking and unlinking
are idempotent.
"""

from fastapi import APIRouter, Depends, status

from swapi_catalog_api.app.core.security import get_current_user
from swapi_catalog_api.app.schemas.film import FilmLinkPayload, FilmListResponse
from swapi_catalog_api.app.schemas.person import (
    PersonListResponse,
    PersonPayload,
    PersonResponse,
)
from swapi_catalog_api.app.services.association_service import AssociationService
from swapi_catalog_api.app.services.catalog_service import CatalogService
from swapi_catalog_api.app.services.entity_kinds import PERSON

router = APIRouter()


@router.get("/", response_model=PersonListResponse)
async def list_people(current_user: dict = Depends(get_current_user)) -> PersonListResponse:
    people = await CatalogService.list(PERSON)
    return PersonListResponse(people=people)


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(
    person_id: int,
    current_user: dict = Depends(get_current_user),
) -> PersonResponse:
    person = await CatalogService.find(PERSON, person_id)
    return PersonResponse(people=person)


@router.post("/", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def create_person(
    payload: PersonPayload,
    current_user: dict = Depends(get_current_user),
) -> PersonResponse:
    """Create a person.  ``planet_id`` must reference an existing planet."""
    person = await CatalogService.create(PERSON, payload.people.model_dump(exclude_unset=True))
    return PersonResponse(people=person)


@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int,
    payload: PersonPayload,
    current_user: dict = Depends(get_current_user),
) -> PersonResponse:
    person = await CatalogService.update(PERSON, person_id, payload.people.model_dump(exclude_unset=True))
    return PersonResponse(people=person)


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(
    person_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    """Delete a person together with the person's film links."""
    await CatalogService.delete(PERSON, person_id)
    return None


@router.get("/{person_id}/films", response_model=FilmListResponse)
async def list_person_films(
    person_id: int,
    current_user: dict = Depends(get_current_user),
) -> FilmListResponse:
    films = await AssociationService.list_films(person_id)
    return FilmListResponse(films=films)


@router.post(
    "/{person_id}/films",
    response_model=FilmListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def link_person_film(
    person_id: int,
    payload: FilmLinkPayload,
    current_user: dict = Depends(get_current_user),
) -> FilmListResponse:
    """Link a film to the person and return the person's films.

    Both records must exist (404 otherwise).  Repeating the request
    does not create a second link.
    """
    films = await AssociationService.link_film(person_id, payload.film.id)
    return FilmListResponse(films=films)


@router.delete("/{person_id}/films/{film_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_person_film(
    person_id: int,
    film_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    """Remove a film from the person; succeeds even if it was not linked."""
    await AssociationService.unlink_film(person_id, film_id)
    return None
