"""Shared loader contract and aggregate assembly."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from beadview.parsing import LineFault
from beadview.schemas import Issue, IssueStatus, MultiRepoData, Repository

logger = logging.getLogger(__name__)

MARKER_DIR = ".beads"
ISSUES_FILE = "issues.jsonl"
DB_SUFFIX = ".db"
DEFAULT_DB_NAME = "beads.db"


@dataclass(frozen=True)
class SkippedSource:
    """A scan root, directory or repository that contributed nothing."""

    location: str
    reason: str


@dataclass(frozen=True)
class RepositoryOutcome:
    """Result of loading one repository: either a Repository or a skip reason."""

    repository: Optional[Repository] = None
    skipped: Optional[SkippedSource] = None
    line_faults: tuple[LineFault, ...] = ()

    @classmethod
    def skip(cls, location: str, reason: str) -> "RepositoryOutcome":
        logger.warning(
            f"Skipping {location}: {reason}",
            extra={"location": location, "reason": reason},
        )
        return cls(skipped=SkippedSource(location, reason))


@dataclass
class LoadReport:
    data: MultiRepoData
    skipped: list[SkippedSource] = field(default_factory=list)
    line_faults: list[tuple[str, LineFault]] = field(default_factory=list)


def prefix_from_listing(names: list[str], default: str) -> str:
    """
    Derive a repository prefix from the marker directory's file names.

    The first name ending in ".db" other than "beads.db" gives the prefix,
    without its extension. Falls back to `default` (the repository name).
    """
    for name in names:
        if name.endswith(DB_SUFFIX) and name != DEFAULT_DB_NAME:
            return name[: -len(DB_SUFFIX)]
    return default


def count_status(issues: list[Issue], status: IssueStatus) -> int:
    return sum(1 for issue in issues if issue.status == status)


def build_multi_repo_data(repositories: list[Repository]) -> MultiRepoData:
    """Flatten repositories into the aggregate root, in repository order."""
    all_issues = [issue for repo in repositories for issue in repo.issues]

    return MultiRepoData(
        repositories=repositories,
        all_issues=all_issues,
        total_open=count_status(all_issues, IssueStatus.OPEN),
        total_in_progress=count_status(all_issues, IssueStatus.IN_PROGRESS),
        total_closed=count_status(all_issues, IssueStatus.CLOSED),
    )


def assemble_report(
    outcomes: list[RepositoryOutcome], skipped: Optional[list[SkippedSource]] = None
) -> LoadReport:
    """Collect per-repository outcomes, preserving their order."""
    report_skipped = list(skipped or [])
    repositories = []
    line_faults = []

    for outcome in outcomes:
        if outcome.repository is not None:
            repositories.append(outcome.repository)
            line_faults.extend((outcome.repository.db_path, f) for f in outcome.line_faults)
        elif outcome.skipped is not None:
            report_skipped.append(outcome.skipped)

    return LoadReport(
        data=build_multi_repo_data(repositories),
        skipped=report_skipped,
        line_faults=line_faults,
    )


class IssueLoader:
    """Abstract base for issue sources.

    Every implementation produces the same MultiRepoData shape, so filtering,
    graph building and metrics never depend on which loader ran.
    """

    async def load_report(self) -> LoadReport:
        """
        Load every repository from this source.

        Returns:
            LoadReport with the aggregate and every skipped unit

        Raises:
            AuthenticationError: If the source rejects the caller's credentials
        """
        raise NotImplementedError

    async def load(self) -> MultiRepoData:
        report = await self.load_report()
        return report.data
