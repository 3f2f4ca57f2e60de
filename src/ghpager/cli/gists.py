"""Gist subcommands for ghpager CLI."""

from sys import exit
from typing import Optional

from click import argument, echo, pass_context

from . import emit, err, listing_options, main
from ..errors import GhPagerError
from ..storage import record_writer


def _gist_line(gist) -> str:
    return f"{gist.id}\t{', '.join(gist.files)}"


@main.command
@pass_context
@listing_options
@argument("targets", nargs=-1, required=True)
def gists(ctx, targets: tuple[str, ...], output: Optional[str], limit: Optional[int]):
    """Fetch public gists of users.

    Prints the gist id and its file names, tab-separated.
    """
    client = ctx.obj["client"]
    out = ctx.with_resource(record_writer(output))

    try:
        for user in targets:
            emit(client.get_gists(user), f"gists for {user}", _gist_line, out, limit)
    except GhPagerError as e:
        err(f"Error fetching gists: {e}")
        exit(1)


@main.command("gist-read")
@pass_context
@argument("gist_id")
@argument("name")
def gist_read(ctx, gist_id: str, name: str):
    """Print the contents of file NAME in gist GIST_ID."""
    client = ctx.obj["client"]

    try:
        echo(client.read_gist_file(gist_id, name), nl=False)
    except GhPagerError as e:
        err(f"Error reading gist: {e}")
        exit(1)
