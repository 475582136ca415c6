"""Errors raised by the graphics toolkit, with an optional cause and a captured stack."""

from __future__ import annotations

import traceback
from contextlib import contextmanager
from typing import Iterator, Optional


class GraphicsError(Exception):
    """A human-readable error with an optional underlying cause."""

    def __init__(self, description: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(description)
        self.description = description
        self.cause = cause
        self.backtrace = traceback.extract_stack()[:-1]
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"GraphicsError(description={self.description!r}, cause={self.cause!r})"

    def context(self, description: str) -> GraphicsError:
        """A new error with ``description`` whose cause is this error."""
        return GraphicsError(description, self)


@contextmanager
def wrap_errors(description: str) -> Iterator[None]:
    """Re-raise any exception from the block as a GraphicsError with ``description``.

    Usable both as a context manager and as a decorator.
    """
    try:
        yield
    except Exception as err:
        raise GraphicsError(description, err) from err