"""Environment-driven settings for ghpager."""

from os import getenv
from pathlib import Path

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 100
DEFAULT_TIMEOUT = 30.0


class Settings:
    """Reads configuration from the environment on every access."""

    @property
    def api_url(self) -> str:
        """Base URL of the GitHub REST API."""
        return getenv("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")

    @property
    def per_page(self) -> int:
        """Page size requested on the first page of every listing."""
        return int(getenv("GHPAGER_PER_PAGE", DEFAULT_PER_PAGE))

    @property
    def timeout(self) -> float:
        """Seconds the transport waits for a response."""
        return float(getenv("GHPAGER_TIMEOUT", DEFAULT_TIMEOUT))

    @property
    def token_file(self) -> Path:
        """File holding a GitHub token, read when no token variable is set."""
        return Path(getenv("GHPAGER_TOKEN_FILE", ".token"))


# Global instance for easy access
settings = Settings()
