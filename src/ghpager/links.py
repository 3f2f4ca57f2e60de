"""Web-linking (RFC 8288) helpers for following ``rel="next"`` pages."""

from typing import Dict, Iterable, Optional, Union
from urllib.parse import urljoin, urlsplit

from requests.utils import parse_header_links

from ._logging import logger
from .errors import ParseError

NEXT = "next"


def parse_links(values: Union[str, Iterable[str], None]) -> Dict[str, str]:
    """Map each link relation to its target URL.

    Accepts a single ``Link`` header value or several of them (a response may
    repeat the header). Relations are matched case-insensitively and a
    space-separated ``rel`` registers every relation it lists. The first
    link declaring a relation wins.

    Returns:
        Dict of relation name to the raw (possibly relative) target URL
    """
    if values is None:
        return {}
    if isinstance(values, str):
        values = [values]

    links: Dict[str, str] = {}
    for value in values:
        for link in parse_header_links(value):
            rels = link.get("rel")
            if not rels:
                continue
            for rel in rels.lower().split():
                links.setdefault(rel, link.get("url", ""))
    return links


def next_link(values: Union[str, Iterable[str], None], base: Optional[str] = None) -> Optional[str]:
    """Get the absolute URL of the ``next`` relation, if any.

    A missing header, or one with no ``next`` relation, means there are no
    further pages. A ``next`` relation that is present but points nowhere
    usable raises ParseError.
    """
    links = parse_links(values)
    if NEXT not in links:
        return None

    target = links[NEXT]
    # urljoin(base, "") would silently point back at the current page
    url = urljoin(base, target) if base and target else target
    if urlsplit(url).scheme not in ("http", "https"):
        logger.warning("Unusable next link", extra={"link": target, "base": base})
        raise ParseError(f"rel=\"next\" link is not an absolute http(s) URL: {target!r}")
    return url
