"""Command-line interface for ghpager."""

import logging
from dataclasses import asdict
from functools import partial
from itertools import islice
from typing import Any, Callable, Optional

from click import echo, group, option, pass_context

from ..auth import get_github_token
from ..github import GitHubClient
from ..pagination import Pagination
from ..storage import RecordWriter

err = partial(echo, err=True)


def listing_options(fn):
    """Add the ``--output`` and ``--limit`` options shared by listing commands."""
    fn = option("-n", "--limit", type=int, help="Stop after this many items (later pages are not fetched)")(fn)
    fn = option("-o", "--output", help="Write records to PATH (.parquet, else JSONL; '-' for stdout)")(fn)
    return fn


def emit(
    pagination: Pagination[Any],
    label: str,
    line: Callable[[Any], str],
    out: Optional[RecordWriter] = None,
    limit: Optional[int] = None,
) -> int:
    """Print one line per item, or write the records to ``out``."""
    if out is not None:
        n = out.write(islice(pagination.map(asdict), limit))
    else:
        n = 0
        for item in islice(pagination, limit):
            echo(line(item))
            n += 1
    err(f"{n} {label}")
    return n


@group
@option("-t", "--token", help="GitHub API token (overrides auto-detection)")
@option("-u", "--api-url", help="GitHub API base URL (default: $GITHUB_API_URL or https://api.github.com)")
@option("-p", "--per-page", type=int, help="Items requested per page (default: $GHPAGER_PER_PAGE or 100)")
@option("-v", "--verbose", is_flag=True, help="Log every page fetch to stderr")
@pass_context
def main(ctx, token: Optional[str], api_url: Optional[str], per_page: Optional[int], verbose: bool):
    """ghpager - Walk paginated GitHub API listings."""
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Use provided token or auto-detect from various sources
    if token is None:
        token = get_github_token()
    ctx.obj["client"] = GitHubClient(token, base_url=api_url, per_page=per_page)


# Import subcommands to register them with the main group
from . import gists, repos, users  # noqa: E402


if __name__ == "__main__":
    main()
