"""Shared fixtures: an isolated SQLite database per test and record factories."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from swapi_catalog_api.app.core.config import settings
from swapi_catalog_api.app.core.db import init_db
from swapi_catalog_api.app.main import create_app
from swapi_catalog_api.app.services.catalog_service import CatalogService
from swapi_catalog_api.app.services.entity_kinds import FILM, PERSON, PLANET

API_TOKEN = "test-api-token"

PLANET_FIELDS = {
    "name": "Tatooine",
    "diameter": "10465",
    "rotation_period": "23",
    "orbital_period": "304",
    "gravity": "1 standard",
    "population": "200000",
    "climate": "arid",
    "terrain": "desert",
    "surface_water": "1",
}

PERSON_FIELDS = {
    "name": "Luke Skywalker",
    "birth_year": "19BBY",
    "eye_color": "blue",
    "gender": "male",
    "hair_color": "blond",
    "height": "172",
    "mass": "77",
    "skin_color": "fair",
}

FILM_FIELDS = {
    "title": "A New Hope",
    "episode_id": 4,
    "director": "George Lucas",
    "producer": "Gary Kurtz, Rick McCallum",
    "release_date": "1977-05-25",
    "opening_crawl": "It is a period of civil war.",
}


@pytest.fixture
def db(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "catalog.db"))
    monkeypatch.setattr(settings, "api_tokens", API_TOKEN)
    init_db()
    return settings.database_url


@pytest.fixture
def app(db):
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        test_client.headers.update({"Authorization": f"Bearer {API_TOKEN}"})
        yield test_client


@pytest.fixture
def anonymous_client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_planet(db):
    def _make(**overrides):
        return asyncio.run(CatalogService.create(PLANET, {**PLANET_FIELDS, **overrides}))
    return _make


@pytest.fixture
def make_person(db, make_planet):
    def _make(planet_id=None, **overrides):
        if planet_id is None:
            planet_id = make_planet().id
        fields = {**PERSON_FIELDS, "planet_id": planet_id, **overrides}
        return asyncio.run(CatalogService.create(PERSON, fields))
    return _make


@pytest.fixture
def make_film(db):
    def _make(**overrides):
        return asyncio.run(CatalogService.create(FILM, {**FILM_FIELDS, **overrides}))
    return _make


@pytest.fixture
def planet_fields():
    return dict(PLANET_FIELDS)


@pytest.fixture
def person_fields():
    return dict(PERSON_FIELDS)


@pytest.fixture
def film_fields():
    return dict(FILM_FIELDS)
