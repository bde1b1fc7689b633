"""
Error taxonomy shared by the service layer.

Services raise these exceptions; the HTTP boundary translates them to
status codes (see ``api.v1.errors``).  Nothing in here knows about
HTTP.
"""

from typing import Dict, List, Optional


class CatalogError(Exception):
    """Base class for expected, user‑actionable catalog failures."""


class NotFoundError(CatalogError):
    """A referenced record does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"Couldn't find {kind} with 'id'={record_id}")


class ValidationError(CatalogError):
    """One or more fields violate presence, length or relation rules.

    ``errors`` maps each offending field to its messages, in the order
    the fields were checked.
    """

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        self.errors = errors
        messages = [f"{field} {message}" for field, items in errors.items() for message in items]
        super().__init__("Validation failed: " + ", ".join(messages))

    @property
    def fields(self) -> List[str]:
        return list(self.errors)


class ConflictError(CatalogError):
    """The store rejected the write because of a constraint on other rows."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(message)
