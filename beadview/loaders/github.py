"""Load .beads repositories through the GitHub REST API."""

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from beadview.config import DEFAULT_GITHUB_API_URL
from beadview.errors import AuthenticationError
from beadview.loaders.base import (
    ISSUES_FILE,
    MARKER_DIR,
    IssueLoader,
    LoadReport,
    RepositoryOutcome,
    SkippedSource,
    assemble_report,
    prefix_from_listing,
)
from beadview.parsing import parse_issue_lines
from beadview.schemas import Repository

logger = logging.getLogger(__name__)

PER_PAGE = 100  # GitHub's maximum page size
API_VERSION = "2022-11-28"


@dataclass(frozen=True)
class RemoteRepo:
    name: str
    full_name: str
    html_url: str

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]


class GitHubLoader(IssueLoader):
    """
    Loads repositories visible to the token's owner.

    Repositories are probed concurrently, but the result keeps the order in
    which the API enumerated them. A failure while probing one repository
    only removes that repository from the result.
    """

    def __init__(
        self,
        access_token: str,
        api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 30.0,
        max_pages: int = 10,
        concurrency: int = 8,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not access_token:
            raise AuthenticationError("No GitHub access token provided")
        self.access_token = access_token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.max_pages = max_pages
        self.concurrency = max(concurrency, 1)
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }

    def _client_or_new(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return httpx.AsyncClient(base_url=self.api_url, timeout=self.timeout)

    async def list_repositories(self, client: httpx.AsyncClient) -> list[RemoteRepo]:
        """
        Enumerate repositories, most recently updated first.

        Follows the Link header's "next" relation up to `max_pages` pages.

        Raises:
            AuthenticationError: If GitHub answers 401
            httpx.HTTPError: On any other transport or HTTP failure
        """
        repos: list[RemoteRepo] = []
        url: Optional[str] = "/user/repos"
        params: Optional[dict] = {"per_page": PER_PAGE, "sort": "updated", "direction": "desc"}
        pages = 0

        while url and pages < self.max_pages:
            response = await client.get(url, params=params, headers=self._headers())
            if response.status_code == 401:
                raise AuthenticationError("GitHub rejected the access token")
            response.raise_for_status()

            for item in response.json():
                repos.append(
                    RemoteRepo(
                        name=item["name"],
                        full_name=item["full_name"],
                        html_url=item["html_url"],
                    )
                )

            pages += 1
            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None

        return repos

    async def _get_contents(self, client: httpx.AsyncClient, repo: RemoteRepo, path: str):
        response = await client.get(
            f"/repos/{repo.owner}/{repo.name}/contents/{path}", headers=self._headers()
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    async def _read_issue_file(self, client: httpx.AsyncClient, entry: dict) -> str:
        if entry.get("encoding") == "base64" and entry.get("content"):
            return base64.b64decode(entry["content"]).decode("utf-8")

        # Files over the inline size limit come back without content.
        download_url = entry.get("download_url")
        if not download_url:
            return ""
        response = await client.get(download_url, headers=self._headers())
        response.raise_for_status()
        return response.content.decode("utf-8")

    async def inspect_repository(
        self, client: httpx.AsyncClient, repo: RemoteRepo
    ) -> RepositoryOutcome:
        location = repo.full_name

        try:
            listing = await self._get_contents(client, repo, MARKER_DIR)
            if not isinstance(listing, list):
                return RepositoryOutcome(skipped=SkippedSource(location, f"no {MARKER_DIR} directory"))

            names = sorted(item.get("name", "") for item in listing)
            if ISSUES_FILE not in names:
                return RepositoryOutcome.skip(location, f"no {ISSUES_FILE}")

            entry = await self._get_contents(client, repo, f"{MARKER_DIR}/{ISSUES_FILE}")
            if not isinstance(entry, dict):
                return RepositoryOutcome.skip(location, f"{ISSUES_FILE} is not a file")

            content = await self._read_issue_file(client, entry)
        except httpx.HTTPError as e:
            return RepositoryOutcome.skip(location, f"request failed: {e}")
        except ValueError as e:
            # binascii.Error, UnicodeDecodeError and bad JSON bodies
            return RepositoryOutcome.skip(location, f"cannot decode {ISSUES_FILE}: {e}")

        parsed = parse_issue_lines(content, source=f"{repo.html_url}/{MARKER_DIR}/{ISSUES_FILE}")
        repository = Repository(
            name=repo.name,
            path=repo.html_url,
            db_path=f"{repo.html_url}/{MARKER_DIR}",
            prefix=prefix_from_listing(names, default=repo.name),
            issues=parsed.issues,
        )
        return RepositoryOutcome(repository=repository, line_faults=tuple(parsed.faults))

    async def load_report(self) -> LoadReport:
        client = self._client_or_new()
        try:
            return await self._load_with(client)
        finally:
            if self._client is None:
                await client.aclose()

    async def _load_with(self, client: httpx.AsyncClient) -> LoadReport:
        try:
            repos = await self.list_repositories(client)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching repositories from GitHub: {str(e)}")
            return assemble_report([], [SkippedSource(self.api_url, f"enumeration failed: {e}")])

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(repo: RemoteRepo) -> RepositoryOutcome:
            async with semaphore:
                return await self.inspect_repository(client, repo)

        # gather returns results in argument order, i.e. enumeration order
        outcomes = await asyncio.gather(*(bounded(repo) for repo in repos))

        report = assemble_report(list(outcomes))
        logger.info(
            f"Loaded {len(report.data.repositories)} of {len(repos)} GitHub repositories",
            extra={
                "repositories": len(report.data.repositories),
                "issues": len(report.data.all_issues),
                "skipped": len(report.skipped),
            },
        )
        return report
