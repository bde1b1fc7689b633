"""
Business logic for the person↔film links.

A pair is either absent or linked.  ``link_film`` moves it to linked
and ``unlink_film`` back to absent; repeating either call leaves the
pair where it is.  Uniqueness is enforced by the ``UNIQUE(people_id,
film_id)`` constraint on ``film_people`` and the insert uses ``INSERT
OR IGNORE``, so two identical link requests racing on separate
connections still produce a single row.
"""

import logging
import sqlite3
from typing import List

from ..core.db import fits_integer_column, transaction
from ..schemas.film import FilmRead
from ..schemas.person import PersonRead
from .catalog_service import fetch_record, to_read
from .entity_kinds import FILM, PERSON


logger = logging.getLogger(__name__)


class AssociationService:
    """Service for listing, adding and removing the films of a person."""

    @classmethod
    async def list_films(cls, person_id: int) -> List[FilmRead]:
        """Return the films linked to a person, ordered by film ID."""
        with transaction("list films of People") as cursor:
            fetch_record(cursor, PERSON, person_id)
            return cls._films_of(cursor, person_id)

    @classmethod
    async def link_film(cls, person_id: int, film_id: int) -> List[FilmRead]:
        """Link a film to a person and return the person's films.

        Both records must exist.  Linking a pair that is already linked
        changes nothing and returns the current set.
        """
        with transaction("link film to People", write=True) as cursor:
            fetch_record(cursor, PERSON, person_id)
            fetch_record(cursor, FILM, film_id)
            cursor.execute(
                "INSERT OR IGNORE INTO film_people (people_id, film_id) VALUES (?, ?)",
                (person_id, film_id),
            )
            inserted = cursor.rowcount > 0
            films = cls._films_of(cursor, person_id)
        if inserted:
            logger.info("Linked film %s to person %s", film_id, person_id)
        else:
            logger.debug("Film %s already linked to person %s", film_id, person_id)
        return films

    @classmethod
    async def unlink_film(cls, person_id: int, film_id: int) -> None:
        """Remove the link between a person and a film.

        The person must exist.  Unlinking a pair that is not linked, or a
        film ID that does not exist, is a no‑op.
        """
        with transaction("unlink film from People", write=True) as cursor:
            fetch_record(cursor, PERSON, person_id)
            removed = 0
            if fits_integer_column(film_id):
                cursor.execute(
                    "DELETE FROM film_people WHERE people_id = ? AND film_id = ?",
                    (person_id, film_id),
                )
                removed = cursor.rowcount
        if removed:
            logger.info("Unlinked film %s from person %s", film_id, person_id)

    @classmethod
    async def list_people(cls, film_id: int) -> List[PersonRead]:
        """Return the people linked to a film, ordered by person ID."""
        with transaction("list people of Film") as cursor:
            fetch_record(cursor, FILM, film_id)
            rows = cursor.execute(
                """
                SELECT people.* FROM people
                JOIN film_people ON film_people.people_id = people.id
                WHERE film_people.film_id = ?
                ORDER BY people.id
                """,
                (film_id,),
            ).fetchall()
            return [to_read(PERSON, row) for row in rows]

    @staticmethod
    def _films_of(cursor: sqlite3.Cursor, person_id: int) -> List[FilmRead]:
        rows = cursor.execute(
            """
            SELECT films.* FROM films
            JOIN film_people ON film_people.film_id = films.id
            WHERE film_people.people_id = ?
            ORDER BY films.id
            """,
            (person_id,),
        ).fetchall()
        return [to_read(FILM, row) for row in rows]
