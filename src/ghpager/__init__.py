from .errors import (
    ExhaustionError,
    GhPagerError,
    GistFileNotFound,
    ParseError,
    ProtocolError,
    TransportError,
)
from .fetcher import Cursor, HttpPageFetcher, Page, PageFetcher
from .github import GitHubClient
from .links import next_link, parse_links
from .models import Gist, Organization, Repository, User
from .pagination import Mapping, PaginatedIterator, Pagination

__all__ = [
    # Pagination engine
    "Pagination",
    "PaginatedIterator",
    "Mapping",
    "Cursor",
    "Page",
    "PageFetcher",
    "HttpPageFetcher",
    "parse_links",
    "next_link",
    # GitHub
    "GitHubClient",
    "User",
    "Organization",
    "Repository",
    "Gist",
    # Exceptions
    "GhPagerError",
    "TransportError",
    "ProtocolError",
    "ParseError",
    "ExhaustionError",
    "GistFileNotFound",
]
