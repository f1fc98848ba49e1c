from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from datashift.errors import DatashiftError

T = TypeVar("T")


def segment(value: str) -> str:
    """Escape a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def query_datetime(value: datetime | str) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def decode(adapter: TypeAdapter[T], body: Any) -> T:
    """Validate a response body, mapping shape mismatches to INVALID_RESPONSE."""
    try:
        return adapter.validate_python(body)
    except PydanticValidationError as e:
        errors: dict[str, list[str]] = {}
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "body"
            errors.setdefault(field, []).append(err["msg"])
        raise DatashiftError(
            f"Unexpected API response: {e.error_count()} invalid field(s)",
            None,
            "INVALID_RESPONSE",
            errors,
        ) from e
