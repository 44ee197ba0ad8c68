"""Repository tagging and issue filtering over a loaded MultiRepoData."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from beadview.graph import UNKNOWN_REPO
from beadview.readiness import get_ready_issues
from beadview.schemas import IssueWithRepository, MultiRepoData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssueFilters:
    status: Optional[str] = None
    priority: Optional[Union[int, str]] = None
    repo: Optional[str] = None
    ready_only: bool = False

    def priority_value(self) -> Optional[int]:
        """The priority filter as an int, or None when absent or not numeric."""
        if self.priority is None or self.priority == "":
            return None
        try:
            return int(self.priority)
        except (TypeError, ValueError):
            logger.info(f"Ignoring non-numeric priority filter {self.priority!r}")
            return None


def build_repo_map(data: MultiRepoData) -> dict[str, str]:
    """
    Map each issue id to the name of the repository that contains it.

    When two repositories share an issue id, the first repository in
    enumeration order wins.
    """
    repo_map: dict[str, str] = {}
    for repository in data.repositories:
        for issue in repository.issues:
            repo_map.setdefault(issue.id, repository.name)
    return repo_map


def tag_issues(data: MultiRepoData) -> list[IssueWithRepository]:
    """Attach the owning repository name to every issue in `all_issues`."""
    repo_map = build_repo_map(data)
    return [
        IssueWithRepository.model_validate(
            {**issue.model_dump(), "repository": repo_map.get(issue.id, UNKNOWN_REPO)}
        )
        for issue in data.all_issues
    ]


def filter_issues(data: MultiRepoData, filters: IssueFilters) -> list[IssueWithRepository]:
    """
    Apply status, priority, repository and readiness filters.

    Readiness is computed over every loaded issue, not over the narrowed
    list, because blockers may be filtered out by the other criteria.
    """
    ready_ids = None
    if filters.ready_only:
        ready_ids = {issue.id for issue in get_ready_issues(data.all_issues)}

    issues = tag_issues(data)

    if filters.status:
        issues = [i for i in issues if i.status == filters.status]

    priority = filters.priority_value()
    if priority is not None:
        issues = [
            i for i in issues
            if not isinstance(i.priority, bool) and i.priority == priority
        ]

    if filters.repo:
        issues = [i for i in issues if i.repository == filters.repo]

    if ready_ids is not None:
        issues = [i for i in issues if i.id in ready_ids]

    return issues
