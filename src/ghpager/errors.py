"""Exceptions raised while fetching and iterating paginated collections."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional

import requests


class GhPagerError(Exception):
    """Base exception for all ghpager errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class TransportError(GhPagerError):
    """Raised when a request fails at the network or I/O level."""

    def __init__(self, url: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(f"Request to {url} failed: {original_error}", original_error)
        self.url = url


class ProtocolError(GhPagerError):
    """Raised when the server answers with a status other than 200 OK."""

    def __init__(self, status: int, url: str, body: str = "") -> None:
        msg = f"Unexpected HTTP status {status} from {url}"
        if body:
            msg += f": {body}"
        super().__init__(msg)
        self.status = status
        self.url = url


class ParseError(GhPagerError):
    """Raised when a response body or its link metadata cannot be understood."""


class ExhaustionError(GhPagerError, LookupError):
    """Raised by ``next()`` when the sequence has no more elements."""

    def __init__(self, message: str = "no more elements in pagination, use has_next()") -> None:
        super().__init__(message)


class GistFileNotFound(GhPagerError):
    """Raised when a gist has no file with the requested name."""

    def __init__(self, gist_id: str, name: str) -> None:
        super().__init__(f"Gist {gist_id} has no file named '{name}'")
        self.gist_id = gist_id
        self.name = name


@contextmanager
def handle_transport_errors(url: str) -> Generator[None, None, None]:
    """
    Context manager that converts ``requests`` exceptions into TransportError.

    Usage:
        with handle_transport_errors(cursor.uri):
            response = session.get(...)
    """
    try:
        yield
    except requests.RequestException as e:
        raise TransportError(url, original_error=e) from e
