"""User subcommands for ghpager CLI: followers, following and orgs."""

from sys import exit
from typing import Optional

from click import argument, pass_context

from . import emit, err, listing_options, main
from ..errors import GhPagerError
from ..storage import record_writer


@main.command
@pass_context
@listing_options
@argument("targets", nargs=-1, required=True)
def followers(ctx, targets: tuple[str, ...], output: Optional[str], limit: Optional[int]):
    """Fetch followers for users or organizations.

    TARGETS are GitHub usernames or organization names.
    Prints one login per line.
    """
    client = ctx.obj["client"]
    out = ctx.with_resource(record_writer(output))

    try:
        for user in targets:
            emit(client.get_followers(user), f"followers for {user}", lambda u: u.login, out, limit)
    except GhPagerError as e:
        err(f"Error fetching followers: {e}")
        exit(1)


@main.command
@pass_context
@listing_options
@argument("targets", nargs=-1, required=True)
def following(ctx, targets: tuple[str, ...], output: Optional[str], limit: Optional[int]):
    """Fetch the accounts each user follows."""
    client = ctx.obj["client"]
    out = ctx.with_resource(record_writer(output))

    try:
        for user in targets:
            emit(client.get_following(user), f"followed by {user}", lambda u: u.login, out, limit)
    except GhPagerError as e:
        err(f"Error fetching following: {e}")
        exit(1)


@main.command
@pass_context
@listing_options
@argument("targets", nargs=-1, required=True)
def orgs(ctx, targets: tuple[str, ...], output: Optional[str], limit: Optional[int]):
    """Fetch public organization memberships of users."""
    client = ctx.obj["client"]
    out = ctx.with_resource(record_writer(output))

    try:
        for user in targets:
            emit(client.get_organizations(user), f"organizations for {user}", lambda o: o.login, out, limit)
    except GhPagerError as e:
        err(f"Error fetching organizations: {e}")
        exit(1)
