"""Translation of PostgREST failures into application errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from postgrest.exceptions import APIError

from nutrilog.errors import ConflictError, StoreError

UNIQUE_VIOLATION = "23505"


@contextmanager
def store_errors(action: str, conflict_message: str | None = None) -> Iterator[None]:
    """Re-raise PostgREST errors as ConflictError or StoreError."""
    try:
        yield
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            message = conflict_message or f"Duplicate value: {action}"
            raise ConflictError(message) from exc
        raise StoreError(f"Failed to {action}") from exc
