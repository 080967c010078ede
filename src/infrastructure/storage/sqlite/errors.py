"""Translation of aiosqlite failures into storage exceptions."""

from collections.abc import Iterator
from contextlib import contextmanager

import aiosqlite

from src.core.exceptions import DatabaseError


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise aiosqlite errors raised inside the block as DatabaseError.

    Cancellation is a BaseException and passes through untouched.
    """
    try:
        yield
    except aiosqlite.Error as e:
        raise DatabaseError(operation, str(e)) from e
