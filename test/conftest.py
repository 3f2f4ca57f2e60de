"""
Shared pytest fixtures for ghpager tests.

Provides an in-memory page fetcher and helpers for building canned
``requests.Response`` objects, so no test touches the network.
"""

import json
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from ghpager.fetcher import Cursor, Page

API = "https://api.github.com"


class FakeFetcher:
    """Serves pages from a dict of URI -> (items, next URI), recording every fetch."""

    def __init__(self, pages: Dict[str, Union[Tuple[List[Dict[str, Any]], Optional[str]], Exception]]):
        self.pages = pages
        self.calls: List[str] = []

    def fetch(self, cursor: Cursor) -> Page:
        self.calls.append(cursor.uri)
        page = self.pages[cursor.uri]
        if isinstance(page, Exception):
            raise page
        items, nxt = page
        return Page(items=tuple(items), next=Cursor(nxt) if nxt else None)


def make_response(
    body: Any = (),
    status: int = 200,
    headers: Optional[Dict[str, str]] = None,
    url: str = f"{API}/items",
) -> requests.Response:
    """Build a ``requests.Response`` without a server."""
    response = requests.Response()
    response.status_code = status
    if isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(list(body) if isinstance(body, tuple) else body).encode()
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = url
    response.encoding = "utf-8"
    return response


def link(url: str, rel: str = "next") -> Dict[str, str]:
    return {"Link": f'<{url}>; rel="{rel}"'}


@pytest.fixture
def two_pages() -> FakeFetcher:
    """Page 1 holds ids 1 and 2 and links to page 2, which holds id 3."""
    return FakeFetcher(
        {
            f"{API}/items": ([{"id": 1}, {"id": 2}], f"{API}/items?page=2"),
            f"{API}/items?page=2": ([{"id": 3}], None),
        }
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of settings and token lookup."""
    for var in ("GITHUB_API_URL", "GHPAGER_PER_PAGE", "GHPAGER_TIMEOUT", "GHPAGER_TOKEN_FILE", "GITHUB_TOKEN", "GH_TOKEN"):
        monkeypatch.delenv(var, raising=False)
