"""
Service layer for the catalog entities (planets, people and films).

``CatalogService`` implements create, find, update, delete and list
for any ``EntityKind`` plus the planet‑scoped lookups
(``children_of``).  Validation happens here rather than in the request
schemas so that a partial update is merged onto the stored record and
then checked by exactly the same rules as a create:

* every required attribute must be present, non‑blank and at most
  ``MAX_TEXT_LENGTH`` characters;
* optional attributes, when given, must have the column's type
  (``films.episode_id`` is a positive integer);
* a parent reference (``people.planet_id``) must be present and point
  at an existing record.

Delete rules:

* deleting a person or a film drops its film links (``ON DELETE
  CASCADE`` on ``film_people``);
* deleting a planet that people still reference is refused with
  ``ConflictError``.

All queries use parameterized statements.  Table and column names are
interpolated only from the ``EntityKind`` descriptors.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ..core.db import fits_integer_column, transaction
from ..core.errors import ConflictError, NotFoundError, ValidationError
from .entity_kinds import FILM, KINDS, MAX_TEXT_LENGTH, PERSON, PLANET, EntityKind


logger = logging.getLogger(__name__)


def fetch_record(cursor: sqlite3.Cursor, kind: EntityKind, record_id: int) -> sqlite3.Row:
    """Return the row of ``kind`` with ``record_id`` or raise ``NotFoundError``."""
    if not fits_integer_column(record_id):
        raise NotFoundError(kind.name, record_id)
    row = cursor.execute(
        f"SELECT * FROM {kind.table} WHERE id = ?",
        (record_id,),
    ).fetchone()
    if row is None:
        raise NotFoundError(kind.name, record_id)
    return row


def to_read(kind: EntityKind, row: sqlite3.Row) -> BaseModel:
    """Convert a database row to the kind's read schema."""
    return kind.read_schema(**dict(row))


class CatalogService:
    """Lifecycle operations for planets, people and films."""

    @classmethod
    async def create(cls, kind: EntityKind, fields: Dict[str, Any]) -> BaseModel:
        """Validate ``fields`` and insert a new record of ``kind``.

        Keys that are not writable columns of ``kind`` are ignored; the
        request schemas reject them before they get here.  Raises
        ``ValidationError`` listing every offending field.
        """
        record = {column: fields.get(column) for column in kind.columns}
        with transaction(f"create {kind.name}", write=True) as cursor:
            cls._validate(cursor, kind, record)
            columns = ", ".join(kind.columns)
            placeholders = ", ".join("?" for _ in kind.columns)
            cursor.execute(
                f"INSERT INTO {kind.table} ({columns}) VALUES ({placeholders})",
                tuple(record[column] for column in kind.columns),
            )
            record_id = cursor.lastrowid
            created = to_read(kind, fetch_record(cursor, kind, record_id))
        logger.info("Created %s %s", kind.name, record_id)
        return created

    @classmethod
    async def find(cls, kind: EntityKind, record_id: int) -> BaseModel:
        """Retrieve a single record by its ID."""
        with transaction(f"find {kind.name}") as cursor:
            return to_read(kind, fetch_record(cursor, kind, record_id))

    @classmethod
    async def update(cls, kind: EntityKind, record_id: int, fields: Dict[str, Any]) -> BaseModel:
        """Merge ``fields`` onto an existing record and re‑validate it.

        Only the keys present in ``fields`` change; an explicit ``None``
        clears the value and therefore fails validation for required
        attributes.  Raises ``NotFoundError`` before ``ValidationError``.
        """
        with transaction(f"update {kind.name}", write=True) as cursor:
            current = dict(fetch_record(cursor, kind, record_id))
            record = {column: current[column] for column in kind.columns}
            record.update({k: v for k, v in fields.items() if k in record})
            cls._validate(cursor, kind, record)
            assignments = ", ".join(f"{column} = ?" for column in kind.columns)
            cursor.execute(
                f"UPDATE {kind.table} SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                tuple(record[column] for column in kind.columns) + (record_id,),
            )
            updated = to_read(kind, fetch_record(cursor, kind, record_id))
        logger.info("Updated %s %s", kind.name, record_id)
        return updated

    @classmethod
    async def delete(cls, kind: EntityKind, record_id: int) -> None:
        """Delete a record by ID, applying the catalog's delete rules."""
        with transaction(f"delete {kind.name}", write=True) as cursor:
            fetch_record(cursor, kind, record_id)
            dependents = cls._count_dependents(cursor, kind, record_id)
            if dependents:
                raise ConflictError(
                    f"Cannot delete {kind.name} with 'id'={record_id}: "
                    f"{dependents} dependent record(s) still reference it"
                )
            cursor.execute(f"DELETE FROM {kind.table} WHERE id = ?", (record_id,))
        logger.info("Deleted %s %s", kind.name, record_id)

    @classmethod
    async def list(cls, kind: EntityKind) -> List[BaseModel]:
        """Return every record of ``kind``, ordered by ID."""
        with transaction(f"list {kind.name}") as cursor:
            rows = cursor.execute(f"SELECT * FROM {kind.table} ORDER BY id").fetchall()
            return [to_read(kind, row) for row in rows]

    @classmethod
    async def children_of(cls, planet_id: int, child_kind: EntityKind) -> List[BaseModel]:
        """Return the people of a planet, or the films those people appear in.

        Films have no direct relation to planets; a planet's films are
        the distinct films linked to any of its people.
        """
        if child_kind is PERSON:
            query = "SELECT * FROM people WHERE planet_id = ? ORDER BY id"
        elif child_kind is FILM:
            query = (
                "SELECT DISTINCT films.* FROM films "
                "JOIN film_people ON film_people.film_id = films.id "
                "JOIN people ON people.id = film_people.people_id "
                "WHERE people.planet_id = ? ORDER BY films.id"
            )
        else:
            raise ValueError(f"{child_kind.name} is not a child kind of {PLANET.name}")
        with transaction(f"list {child_kind.name} of {PLANET.name}") as cursor:
            fetch_record(cursor, PLANET, planet_id)
            rows = cursor.execute(query, (planet_id,)).fetchall()
            return [to_read(child_kind, row) for row in rows]

    @staticmethod
    def _validate(cursor: sqlite3.Cursor, kind: EntityKind, record: Dict[str, Any]) -> None:
        errors: Dict[str, List[str]] = {}
        for column in kind.required:
            message = _text_error(record.get(column))
            if message:
                errors.setdefault(column, []).append(message)
        for column in kind.optional:
            message = _optional_error(record.get(column), integer=column in kind.integers)
            if message:
                errors.setdefault(column, []).append(message)
        if kind.parent is not None:
            parent_id = record.get(kind.parent.column)
            message = None
            if parent_id is None:
                message = "can't be blank"
            elif not isinstance(parent_id, int) or isinstance(parent_id, bool):
                message = "is not a valid identifier"
            elif not fits_integer_column(parent_id) or cursor.execute(
                f"SELECT 1 FROM {kind.parent.kind.table} WHERE id = ?",
                (parent_id,),
            ).fetchone() is None:
                message = "must exist"
            if message:
                errors.setdefault(kind.parent.column, []).append(message)
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _count_dependents(cursor: sqlite3.Cursor, kind: EntityKind, record_id: int) -> int:
        """Count child rows that block deleting ``record_id``.

        Only parent references block a delete; film links cascade.
        """
        total = 0
        for child in KINDS:
            if child.parent is not None and child.parent.kind is kind:
                row = cursor.execute(
                    f"SELECT COUNT(*) AS n FROM {child.table} WHERE {child.parent.column} = ?",
                    (record_id,),
                ).fetchone()
                total += row["n"]
        return total


def _text_error(value: Any) -> Optional[str]:
    if value is None:
        return "can't be blank"
    if not isinstance(value, str):
        return "must be text"
    if not value.strip():
        return "can't be blank"
    if len(value) > MAX_TEXT_LENGTH:
        return f"is too long (maximum is {MAX_TEXT_LENGTH} characters)"
    return None


def _optional_error(value: Any, integer: bool = False) -> Optional[str]:
    if value is None:
        return None
    if integer:
        if not isinstance(value, int) or isinstance(value, bool):
            return "must be an integer"
        if value < 1:
            return "must be greater than or equal to 1"
        if not fits_integer_column(value):
            return "is too large"
        return None
    if not isinstance(value, str):
        return "must be text"
    return None
