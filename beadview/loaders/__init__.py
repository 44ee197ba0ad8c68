"""Issue sources: local directory scan or GitHub API."""

from typing import Optional

from beadview.config import FILESYSTEM_SOURCE, GITHUB_SOURCE, Settings
from beadview.errors import AuthenticationError, SourceConfigurationError
from beadview.loaders.base import IssueLoader, LoadReport, SkippedSource
from beadview.loaders.filesystem import FilesystemLoader
from beadview.loaders.github import GitHubLoader


def create_loader(settings: Settings, access_token: Optional[str] = None) -> IssueLoader:
    """
    Pick exactly one loader for a request.

    Raises:
        AuthenticationError: If the GitHub source is configured and no token is given
        SourceConfigurationError: If the configured source is unknown
    """
    if settings.source == FILESYSTEM_SOURCE:
        return FilesystemLoader(settings.scan_paths, max_depth=settings.max_depth)

    if settings.source == GITHUB_SOURCE:
        if not access_token:
            raise AuthenticationError("No GitHub access token found")
        return GitHubLoader(
            access_token,
            api_url=settings.github_api_url,
            timeout=settings.github_timeout,
            max_pages=settings.github_max_pages,
            concurrency=settings.github_concurrency,
        )

    raise SourceConfigurationError(f"Unknown source: {settings.source}")


__all__ = [
    "FilesystemLoader",
    "GitHubLoader",
    "IssueLoader",
    "LoadReport",
    "SkippedSource",
    "create_loader",
]
