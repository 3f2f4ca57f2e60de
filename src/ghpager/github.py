"""GitHub API client: paginated listings and one-shot reads."""

from typing import Any, ContextManager, Dict, Optional
from urllib.parse import urljoin

import requests

from ._logging import logger
from .config import settings
from .errors import GistFileNotFound, ParseError
from .fetcher import Cursor, HttpPageFetcher
from .models import Gist, Organization, Repository, User
from .pagination import Mapping, Pagination, T

USER_AGENT = "ghpager/0.1.0"


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        per_page: Optional[int] = None,
        timeout: Optional[float] = None,
        throttle: Optional[ContextManager[Any]] = None,
    ):
        self.session = requests.Session()
        if token:
            self.session.headers.update({"Authorization": f"token {token}"})
        self.session.headers.update({"Accept": "application/vnd.github.v3+json", "User-Agent": USER_AGENT})
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.per_page = per_page or settings.per_page
        self.fetcher = HttpPageFetcher(self.session, timeout=settings.timeout if timeout is None else timeout)
        self.throttle = throttle

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _paginate(self, path: str, mapping: Mapping[T], params: Optional[Dict[str, Any]] = None) -> Pagination[T]:
        """Paginate through GitHub API responses.

        Only the first request carries ``params``; later pages follow the
        ``next`` link, which already encodes them.
        """
        params = dict(params or {})
        params.setdefault("per_page", self.per_page)
        return Pagination(Cursor.of(self._url(path), params), mapping, self.fetcher, self.throttle)

    def _read(self, path: str) -> Dict[str, Any]:
        logger.debug("Reading object", extra={"path": path})
        return self.fetcher.fetch_object(Cursor(self._url(path)))

    # --- Paginated listings ---

    def get_stargazers(self, owner: str, repo: str) -> Pagination[User]:
        """Get stargazers for a repository."""
        return self._paginate(f"/repos/{owner}/{repo}/stargazers", User.from_json)

    def get_followers(self, user: str) -> Pagination[User]:
        """Get followers for a user or organization."""
        return self._paginate(f"/users/{user}/followers", User.from_json)

    def get_following(self, user: str) -> Pagination[User]:
        """Get the accounts a user follows."""
        return self._paginate(f"/users/{user}/following", User.from_json)

    def get_repositories(self, user: str) -> Pagination[Repository]:
        """Get repositories for a user or organization."""
        return self._paginate(f"/users/{user}/repos", Repository.from_json, {"type": "owner"})

    def get_organizations(self, user: str) -> Pagination[Organization]:
        """Get public organization memberships of a user."""
        return self._paginate(f"/users/{user}/orgs", Organization.from_json)

    def get_gists(self, user: str) -> Pagination[Gist]:
        """Get public gists of a user."""
        return self._paginate(f"/users/{user}/gists", Gist.from_json)

    # --- One-shot reads ---

    def get_user(self, login: str) -> User:
        return User.from_json(self._read(f"/users/{login}"))

    def get_organization(self, login: str) -> Organization:
        return Organization.from_json(self._read(f"/orgs/{login}"))

    def get_gist(self, gist_id: str) -> Gist:
        return Gist.from_json(self._read(f"/gists/{gist_id}"))

    def read_gist_file(self, gist_id: str, name: str) -> str:
        """Read the contents of one file of a gist via its ``raw_url``."""
        gist = self._read(f"/gists/{gist_id}")
        files = gist.get("files") or {}
        if name not in files:
            raise GistFileNotFound(gist_id, name)
        raw_url = (files[name] or {}).get("raw_url")
        if not raw_url:
            raise ParseError(f"Gist {gist_id} file '{name}' has no raw_url")
        return self.fetcher.fetch_text(urljoin(self._url(f"/gists/{gist_id}"), raw_url))
