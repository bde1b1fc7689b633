"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers (planets, people, films)
under a unified prefix.  When new domains are introduced, update this
file to include their routers.
"""

from fastapi import APIRouter

from swapi_catalog_api.app.schemas.error import ErrorResponse

from .endpoints import films, people, planets

# Documented error bodies shared by every catalog route.
ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Referenced record does not exist"},
    409: {"model": ErrorResponse, "description": "Change conflicts with related records"},
    422: {"model": ErrorResponse, "description": "Request or record fails validation"},
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(planets.router, prefix="/planets", tags=["planets"])
router.include_router(people.router, prefix="/people", tags=["people"])
router.include_router(films.router, prefix="/films", tags=["films"])
