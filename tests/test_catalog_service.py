"""Tests for CatalogService: validation, lookups and delete rules."""

import asyncio

import pytest

from swapi_catalog_api.app.core.db import get_connection
from swapi_catalog_api.app.core.errors import ConflictError, NotFoundError, ValidationError
from swapi_catalog_api.app.services.association_service import AssociationService
from swapi_catalog_api.app.services.catalog_service import CatalogService
from swapi_catalog_api.app.services.entity_kinds import FILM, PERSON, PLANET


def _link_count(person_id=None, film_id=None):
    conn = get_connection()
    try:
        if person_id is not None:
            row = conn.execute("SELECT COUNT(*) AS n FROM film_people WHERE people_id = ?", (person_id,)).fetchone()
        else:
            row = conn.execute("SELECT COUNT(*) AS n FROM film_people WHERE film_id = ?", (film_id,)).fetchone()
        return row["n"]
    finally:
        conn.close()


def test_create_then_find_returns_equal_person(make_planet, person_fields):
    planet = make_planet()
    created = asyncio.run(CatalogService.create(PERSON, {**person_fields, "planet_id": planet.id}))

    found = asyncio.run(CatalogService.find(PERSON, created.id))

    assert found == created
    for field, value in person_fields.items():
        assert getattr(found, field) == value
    assert found.planet_id == planet.id


def test_create_assigns_unique_ids(make_planet):
    first = make_planet()
    second = make_planet(name="Alderaan")
    assert first.id != second.id


def test_create_person_without_planet_id_cites_planet_id(db, person_fields):
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.create(PERSON, person_fields))
    assert excinfo.value.fields == ["planet_id"]
    assert excinfo.value.errors["planet_id"] == ["can't be blank"]


def test_create_person_with_unknown_planet_fails_validation(db, person_fields):
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.create(PERSON, {**person_fields, "planet_id": 999}))
    assert excinfo.value.errors == {"planet_id": ["must exist"]}


def test_create_lists_every_violated_field(db, planet_fields):
    fields = {**planet_fields, "name": "   ", "climate": "x" * 256}
    del fields["terrain"]

    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.create(PLANET, fields))

    assert set(excinfo.value.fields) == {"name", "climate", "terrain"}
    assert excinfo.value.errors["climate"] == ["is too long (maximum is 255 characters)"]


def test_text_at_the_length_limit_is_accepted(make_planet):
    planet = make_planet(name="x" * 255)
    assert len(planet.name) == 255


def test_film_optional_fields_may_be_omitted(db, film_fields):
    del film_fields["episode_id"]
    del film_fields["opening_crawl"]
    film = asyncio.run(CatalogService.create(FILM, film_fields))
    assert film.episode_id is None
    assert film.opening_crawl is None


def test_update_merges_partial_fields(make_person):
    person = make_person()

    updated = asyncio.run(CatalogService.update(PERSON, person.id, {"name": "Biggs Darklighter"}))

    assert updated.name == "Biggs Darklighter"
    assert updated.eye_color == person.eye_color
    assert updated.planet_id == person.planet_id


def test_update_can_move_person_to_another_planet(make_person, make_planet):
    person = make_person()
    naboo = make_planet(name="Naboo")

    updated = asyncio.run(CatalogService.update(PERSON, person.id, {"planet_id": naboo.id}))

    assert updated.planet_id == naboo.id


def test_update_with_null_required_field_fails(make_person):
    person = make_person()
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.update(PERSON, person.id, {"name": None}))
    assert excinfo.value.fields == ["name"]
    assert asyncio.run(CatalogService.find(PERSON, person.id)).name == person.name


def test_update_missing_record_is_not_found_before_validation(db):
    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.update(PLANET, 42, {"name": None}))


def test_find_person_zero_is_not_found(db):
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(CatalogService.find(PERSON, 0))
    assert excinfo.value.record_id == 0


@pytest.mark.parametrize("kind", [PLANET, PERSON, FILM], ids=lambda kind: kind.table)
def test_delete_then_find_is_not_found(kind, make_planet, make_person, make_film):
    factory = {"planets": make_planet, "people": make_person, "films": make_film}[kind.table]
    record = factory()

    asyncio.run(CatalogService.delete(kind, record.id))

    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.find(kind, record.id))


def test_delete_missing_record_is_not_found(db):
    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.delete(FILM, 7))


def test_delete_planet_with_people_is_rejected(make_person):
    person = make_person()

    with pytest.raises(ConflictError):
        asyncio.run(CatalogService.delete(PLANET, person.planet_id))

    assert asyncio.run(CatalogService.find(PLANET, person.planet_id)).id == person.planet_id

    asyncio.run(CatalogService.delete(PERSON, person.id))
    asyncio.run(CatalogService.delete(PLANET, person.planet_id))


def test_delete_person_removes_its_links(make_person, make_film):
    person = make_person()
    film = make_film()
    asyncio.run(AssociationService.link_film(person.id, film.id))

    asyncio.run(CatalogService.delete(PERSON, person.id))

    assert _link_count(person_id=person.id) == 0
    assert asyncio.run(CatalogService.find(FILM, film.id)).id == film.id


def test_delete_film_removes_its_links(make_person, make_film):
    person = make_person()
    film = make_film()
    asyncio.run(AssociationService.link_film(person.id, film.id))

    asyncio.run(CatalogService.delete(FILM, film.id))

    assert _link_count(film_id=film.id) == 0
    assert asyncio.run(AssociationService.list_films(person.id)) == []


def test_list_returns_every_record(make_planet):
    names = {"Tatooine", "Hoth", "Dagobah"}
    for name in names:
        make_planet(name=name)

    planets = asyncio.run(CatalogService.list(PLANET))

    assert {planet.name for planet in planets} == names


def test_children_of_returns_people_of_the_planet(make_planet, make_person):
    tatooine = make_planet()
    hoth = make_planet(name="Hoth")
    luke = make_person(planet_id=tatooine.id)
    owen = make_person(planet_id=tatooine.id, name="Owen Lars")
    make_person(planet_id=hoth.id, name="Wampa")

    people = asyncio.run(CatalogService.children_of(tatooine.id, PERSON))

    assert {person.id for person in people} == {luke.id, owen.id}


def test_children_of_derives_films_from_people(make_planet, make_person, make_film):
    tatooine = make_planet()
    luke = make_person(planet_id=tatooine.id)
    owen = make_person(planet_id=tatooine.id, name="Owen Lars")
    hope = make_film()
    empire = make_film(title="The Empire Strikes Back", episode_id=5)
    make_film(title="The Phantom Menace", episode_id=1)
    for person_id, film_id in [(luke.id, hope.id), (owen.id, hope.id), (luke.id, empire.id)]:
        asyncio.run(AssociationService.link_film(person_id, film_id))

    films = asyncio.run(CatalogService.children_of(tatooine.id, FILM))

    assert sorted(film.id for film in films) == sorted([hope.id, empire.id])


def test_children_of_planet_without_people_is_empty(make_planet):
    planet = make_planet()
    assert asyncio.run(CatalogService.children_of(planet.id, PERSON)) == []
    assert asyncio.run(CatalogService.children_of(planet.id, FILM)) == []


def test_children_of_missing_planet_is_not_found(db):
    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.children_of(3, PERSON))


def test_children_of_rejects_planet_kind(make_planet):
    planet = make_planet()
    with pytest.raises(ValueError):
        asyncio.run(CatalogService.children_of(planet.id, PLANET))


def _film_count():
    conn = get_connection()
    try:
        return conn.execute("SELECT COUNT(*) AS n FROM films").fetchone()["n"]
    finally:
        conn.close()


@pytest.mark.parametrize("record_id", [2 ** 63, -(2 ** 63) - 1])
def test_ids_outside_the_integer_column_are_not_found(make_planet, record_id):
    make_planet()

    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.find(PERSON, record_id))
    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.update(PLANET, record_id, {"name": "Hoth"}))
    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.delete(FILM, record_id))
    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.children_of(record_id, FILM))


def test_create_person_with_oversized_planet_id_fails_validation(db, person_fields):
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.create(PERSON, {**person_fields, "planet_id": 2 ** 63}))
    assert excinfo.value.errors == {"planet_id": ["must exist"]}


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"episode_id": "four"}, "must be an integer"),
        ({"episode_id": True}, "must be an integer"),
        ({"episode_id": 0}, "must be greater than or equal to 1"),
        ({"episode_id": 2 ** 63}, "is too large"),
    ],
)
def test_create_film_with_bad_episode_id_stores_nothing(db, film_fields, overrides, message):
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.create(FILM, {**film_fields, **overrides}))

    assert excinfo.value.errors == {"episode_id": [message]}
    assert _film_count() == 0
    assert asyncio.run(CatalogService.list(FILM)) == []


def test_update_film_optional_fields_are_type_checked(make_film):
    film = make_film()

    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(CatalogService.update(FILM, film.id, {"episode_id": "five", "opening_crawl": 42}))

    assert excinfo.value.errors == {"episode_id": ["must be an integer"], "opening_crawl": ["must be text"]}
    assert asyncio.run(CatalogService.find(FILM, film.id)) == film


def test_update_film_may_clear_optional_fields(make_film):
    film = make_film()

    updated = asyncio.run(CatalogService.update(FILM, film.id, {"episode_id": None, "opening_crawl": None}))

    assert updated.episode_id is None
    assert updated.opening_crawl is None
    assert updated.title == film.title
