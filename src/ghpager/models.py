"""Typed views of GitHub API objects.

Each ``from_json`` is a pure mapping from one raw JSON object, suitable for
use as a ``Pagination`` mapping.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import ParseError


def _require(obj: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in obj:
        raise ParseError(f"{kind} object is missing '{key}': {sorted(obj)}")
    return obj[key]


@dataclass(frozen=True)
class User:
    login: str
    id: int
    type: str = "User"
    html_url: str = ""

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "User":
        return cls(
            login=_require(obj, "login", "User"),
            id=_require(obj, "id", "User"),
            type=obj.get("type") or "User",
            html_url=obj.get("html_url") or "",
        )


@dataclass(frozen=True)
class Organization:
    login: str
    id: int
    description: Optional[str] = None
    url: str = ""

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "Organization":
        return cls(
            login=_require(obj, "login", "Organization"),
            id=_require(obj, "id", "Organization"),
            description=obj.get("description"),
            url=obj.get("url") or "",
        )


@dataclass(frozen=True)
class Repository:
    name: str
    full_name: str
    owner: str
    stargazers_count: int = 0
    private: bool = False

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "Repository":
        full_name = _require(obj, "full_name", "Repository")
        owner = (obj.get("owner") or {}).get("login") or full_name.split("/", 1)[0]
        return cls(
            name=_require(obj, "name", "Repository"),
            full_name=full_name,
            owner=owner,
            stargazers_count=obj.get("stargazers_count") or 0,
            private=bool(obj.get("private", False)),
        )


@dataclass(frozen=True)
class Gist:
    """A gist; ``files`` holds the file names in the order GitHub lists them."""

    id: str
    description: Optional[str] = None
    public: bool = True
    files: Tuple[str, ...] = ()
    html_url: str = ""

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "Gist":
        return cls(
            id=_require(obj, "id", "Gist"),
            description=obj.get("description"),
            public=bool(obj.get("public", True)),
            files=tuple(obj.get("files") or {}),
            html_url=obj.get("html_url") or "",
        )
