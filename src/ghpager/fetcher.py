"""Page fetching over HTTP: cursors, pages and the requests-based fetcher."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Tuple
from urllib.parse import urljoin

import requests

from ._logging import logger
from .errors import ParseError, ProtocolError, handle_transport_errors
from .links import next_link

# Longest body excerpt carried in a ProtocolError message
BODY_EXCERPT = 200


@dataclass(frozen=True)
class Cursor:
    """Where to fetch a page from: a URL plus query parameters.

    The request URI is encoded once, on construction, so a URL that can never
    be requested (no scheme, bad host) fails here with TransportError.
    """

    url: str
    params: Tuple[Tuple[str, str], ...] = ()
    uri: str = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        with handle_transport_errors(self.url):
            uri = requests.Request("GET", self.url, params=list(self.params)).prepare().url
        object.__setattr__(self, "uri", uri)

    @classmethod
    def of(cls, url: str, params: Optional[Dict[str, Any]] = None) -> "Cursor":
        """Build a cursor from a URL and a dict of query parameters."""
        return cls(url, tuple((k, str(v)) for k, v in (params or {}).items()))

    def jump(self, url: str) -> "Cursor":
        """Cursor for a link target, resolved against this cursor's URI.

        Link targets already carry their own query string, so the new cursor
        has no separate params.
        """
        return Cursor(urljoin(self.uri, url))

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class Page:
    """One fetched page: its raw items in order and the cursor of the next one."""

    items: Tuple[Dict[str, Any], ...]
    next: Optional[Cursor] = None

    @property
    def last(self) -> bool:
        """True if no further page was declared."""
        return self.next is None


class PageFetcher(Protocol):
    """Anything that can turn a cursor into a page."""

    def fetch(self, cursor: Cursor) -> Page: ...


class HttpPageFetcher:
    """Fetch pages of a link-header paginated JSON API with ``requests``."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.session = session or requests.Session()
        self.timeout = timeout

    def get(self, cursor: Cursor) -> requests.Response:
        """GET the cursor and return the response, which is always 200 OK."""
        logger.debug("Fetching page", extra={"url": cursor.uri})
        with handle_transport_errors(cursor.uri):
            response = self.session.get(cursor.url, params=list(cursor.params), timeout=self.timeout)

        if response.status_code != requests.codes.ok:
            logger.warning(
                "Unexpected status",
                extra={"url": cursor.uri, "status": response.status_code},
            )
            raise ProtocolError(response.status_code, cursor.uri, response.text[:BODY_EXCERPT])
        return response

    def fetch(self, cursor: Cursor) -> Page:
        """Fetch one page and work out where the next one is."""
        response = self.get(cursor)

        link = next_link(response.headers.get("Link"), base=response.url or cursor.uri)
        data = decode_json(response)
        if not isinstance(data, list):
            raise ParseError(f"Expected a JSON array from {cursor.uri}, got {type(data).__name__}")
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ParseError(
                    f"Expected JSON objects from {cursor.uri}, item {i} is {type(item).__name__}"
                )

        page = Page(items=tuple(data), next=cursor.jump(link) if link else None)
        logger.debug(
            "Fetched page",
            extra={"url": cursor.uri, "status": response.status_code, "count": len(page.items), "last": page.last},
        )
        return page

    def fetch_object(self, cursor: Cursor) -> Dict[str, Any]:
        """Fetch a single JSON object, for one-shot (non-paginated) reads."""
        data = decode_json(self.get(cursor))
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object from {cursor.uri}, got {type(data).__name__}")
        return data

    def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its body as text."""
        return self.get(Cursor(url)).text


def decode_json(response: requests.Response) -> Any:
    """Decode a response body, raising ParseError if it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"Invalid JSON from {response.url}", original_error=e) from e
