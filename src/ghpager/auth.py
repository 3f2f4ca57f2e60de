"""Token discovery for authenticated GitHub API access."""

import os
import subprocess
from pathlib import Path
from typing import Callable, Optional, Tuple

from ._logging import logger
from .config import settings

# Checked in order; GH_TOKEN is the variable the gh CLI itself honours
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def token_from_env() -> Optional[str]:
    for var in TOKEN_ENV_VARS:
        value = (os.getenv(var) or "").strip()
        if value:
            return value
    return None


def token_from_file(path: Path) -> Optional[str]:
    """First non-blank line of ``path``, if it exists and is readable."""
    if not path.is_file():
        return None
    try:
        lines = path.read_text().splitlines()
    except OSError as e:
        logger.warning("Could not read token file", extra={"path": str(path), "error": str(e)})
        return None
    return next((line.strip() for line in lines if line.strip()), None)


def token_from_gh() -> Optional[str]:
    """Ask an installed, logged-in gh CLI for its token."""
    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, check=True)
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    return result.stdout.strip() or None


def get_github_token(token_file: Optional[Path] = None) -> Optional[str]:
    """Find a GitHub token, or None to fall back to anonymous access.

    Sources, first hit wins: the GITHUB_TOKEN / GH_TOKEN environment
    variables, ``token_file`` (default ``$GHPAGER_TOKEN_FILE`` or ``.token``),
    then ``gh auth token``.
    """
    path = token_file if token_file is not None else settings.token_file
    sources: Tuple[Tuple[str, Callable[[], Optional[str]]], ...] = (
        ("environment", token_from_env),
        ("token file", lambda: token_from_file(path)),
        ("gh CLI", token_from_gh),
    )
    for name, source in sources:
        token = source()
        if token:
            logger.debug("Using GitHub token", extra={"source": name})
            return token

    logger.debug("No GitHub token found, using anonymous access")
    return None
