"""Error body returned by the catalog endpoints."""

from typing import Dict, List, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    fields: Optional[List[str]] = None
    errors: Optional[Dict[str, List[str]]] = None
