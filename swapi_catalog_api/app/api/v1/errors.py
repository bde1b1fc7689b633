"""
Translation of service errors into HTTP responses.

``ERROR_STATUS`` is the single table mapping the error taxonomy in
``core.errors`` to status codes.  Anything outside the taxonomy is an
internal failure: it is logged with its traceback and the client gets
a generic 500 body without implementation detail.  Request bodies and
path parameters rejected by FastAPI are reported in the same
``{error, fields, errors}`` shape as a failed service validation.
"""

import logging
from typing import Dict, List, Tuple, Type, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from swapi_catalog_api.app.core.errors import (
    CatalogError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[CatalogError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_for(exc: CatalogError) -> int:
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = status_for(exc)
    body = {"error": str(exc)}
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
        body["errors"] = exc.errors
    if status_code >= 500:
        logger.error("Unmapped catalog error on %s %s: %s", request.method, request.url.path, exc)
        body = {"error": "Internal server error"}
    return JSONResponse(status_code=status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(error["loc"]), []).append(error["msg"])
    return await catalog_error_handler(request, ValidationError(errors))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def _field_name(loc: Tuple[Union[str, int], ...]) -> str:
    parts = [str(part) for part in loc[1:]]
    # Bodies nest the attributes under an envelope key ({"planet": {...}}).
    if loc and loc[0] == "body" and len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts) or str(loc[0])
