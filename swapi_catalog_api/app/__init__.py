"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each catalog domain (planets, people, films) exposes a
router defined in ``api/v1/endpoints``; the business rules live in
``services`` and the request/response shapes in ``schemas``.
Versioning is handled by grouping routers under the ``api/<version>/``
hierarchy.
"""

from .main import app  # noqa: F401
