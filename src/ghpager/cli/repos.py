"""Repository subcommands for ghpager CLI: stars and repos."""

from sys import exit
from time import sleep
from typing import Optional

from click import argument, option, pass_context

from . import emit, err, listing_options, main
from ..errors import GhPagerError
from ..storage import record_writer


@main.command
@pass_context
@listing_options
@option("-s", "--sleep-s", default=0.1, help="Sleep seconds between repo fetches (default: 0.1)")
@argument("targets", nargs=-1, required=True)
def stars(ctx, targets: tuple[str, ...], sleep_s: float, output: Optional[str], limit: Optional[int]):
    """Fetch stargazers for repositories or all repositories of users/orgs.

    TARGETS can be:
    - 'owner/repo' format for specific repositories
    - 'user' or 'org' format to fetch stars for all repositories owned by the user/org
    - Multiple targets can be specified

    Prints one login per line.
    """
    client = ctx.obj["client"]
    out = ctx.with_resource(record_writer(output))

    try:
        for target in targets:
            if "/" in target:
                # Single repository format: owner/repo
                owner, repo_name = target.split("/", 1)
                emit(client.get_stargazers(owner, repo_name), f"stargazers for {target}", lambda u: u.login, out, limit)
            else:
                # User/org format: fetch all repositories and their stargazers
                user = target
                repos = list(client.get_repositories(user))

                if not repos:
                    err(f"No repositories found for user/org: {user}")
                    continue

                for i, repo in enumerate(repos):
                    emit(
                        client.get_stargazers(repo.owner, repo.name),
                        f"stargazers for {repo.full_name}",
                        lambda u: u.login,
                        out,
                        limit,
                    )

                    # Sleep between repo fetches (except after the last one)
                    if i < len(repos) - 1 and sleep_s > 0:
                        sleep(sleep_s)

    except GhPagerError as e:
        err(f"Error fetching stargazers: {e}")
        exit(1)


@main.command
@pass_context
@listing_options
@argument("targets", nargs=-1, required=True)
def repos(ctx, targets: tuple[str, ...], output: Optional[str], limit: Optional[int]):
    """Fetch repositories owned by users or organizations.

    Prints one 'owner/name' per line.
    """
    client = ctx.obj["client"]
    out = ctx.with_resource(record_writer(output))

    try:
        for user in targets:
            emit(client.get_repositories(user), f"repositories for {user}", lambda r: r.full_name, out, limit)
    except GhPagerError as e:
        err(f"Error fetching repositories: {e}")
        exit(1)
