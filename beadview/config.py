import os
from dataclasses import dataclass, field
from functools import lru_cache

from beadview.errors import SourceConfigurationError

FILESYSTEM_SOURCE = "filesystem"
GITHUB_SOURCE = "github"

DEFAULT_MAX_DEPTH = 5
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_CORS_ORIGINS = "http://localhost:3000"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, resolved once at the HTTP boundary."""

    source: str = FILESYSTEM_SOURCE
    scan_paths: tuple[str, ...] = ()
    max_depth: int = DEFAULT_MAX_DEPTH
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_timeout: float = 30.0
    github_max_pages: int = 10
    github_concurrency: int = 8
    cors_origins: tuple[str, ...] = field(default=(DEFAULT_CORS_ORIGINS,))

    def __post_init__(self):
        if self.source not in (FILESYSTEM_SOURCE, GITHUB_SOURCE):
            raise SourceConfigurationError(
                f"Unknown BEADS_SOURCE: {self.source!r} "
                f"(choose one of: {FILESYSTEM_SOURCE}, {GITHUB_SOURCE})"
            )


def _split(value: str, sep: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(sep) if part.strip())


def settings_from_env() -> Settings:
    """
    Build settings from environment variables.

    Reads:
    - BEADS_SOURCE: "filesystem" or "github"
    - BEADS_SCAN_PATHS: os.pathsep-separated root directories
    - BEADS_MAX_DEPTH: directory traversal depth limit
    - GITHUB_API_URL, GITHUB_TIMEOUT, GITHUB_MAX_PAGES, GITHUB_CONCURRENCY
    - CORS_ORIGINS: comma-separated allowed origins
    """
    scan_paths = _split(os.getenv("BEADS_SCAN_PATHS", ""), os.pathsep)

    return Settings(
        source=os.getenv("BEADS_SOURCE", FILESYSTEM_SOURCE).lower().strip(),
        scan_paths=tuple(os.path.expanduser(p) for p in scan_paths),
        max_depth=int(os.getenv("BEADS_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
        github_api_url=os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/"),
        github_timeout=float(os.getenv("GITHUB_TIMEOUT", "30")),
        github_max_pages=int(os.getenv("GITHUB_MAX_PAGES", "10")),
        github_concurrency=int(os.getenv("GITHUB_CONCURRENCY", "8")),
        cors_origins=_split(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS), ","),
    )


@lru_cache
def get_settings() -> Settings:
    return settings_from_env()
