"""Response payloads built from a loaded MultiRepoData."""

from typing import Optional

from beadview.aggregation import IssueFilters, build_repo_map, filter_issues
from beadview.graph import build_dependency_graph
from beadview.loaders.base import count_status
from beadview.metrics import calculate_metrics
from beadview.schemas import (
    DependencyGraph,
    IssuesResponse,
    IssueStatus,
    MetricsResponse,
    MultiRepoData,
    RepoMetrics,
    RepositoriesResponse,
    RepositorySummary,
)


def repositories_report(data: MultiRepoData) -> RepositoriesResponse:
    summaries = [
        RepositorySummary(
            name=repo.name,
            path=repo.path,
            prefix=repo.prefix,
            issue_count=len(repo.issues),
            open_count=count_status(repo.issues, IssueStatus.OPEN),
            in_progress_count=count_status(repo.issues, IssueStatus.IN_PROGRESS),
            closed_count=count_status(repo.issues, IssueStatus.CLOSED),
        )
        for repo in data.repositories
    ]

    return RepositoriesResponse(
        repositories=summaries,
        total_repos=len(data.repositories),
        total_issues=len(data.all_issues),
        total_open=data.total_open,
        total_in_progress=data.total_in_progress,
        total_closed=data.total_closed,
    )


def issues_report(data: MultiRepoData, filters: IssueFilters) -> IssuesResponse:
    issues = filter_issues(data, filters)
    return IssuesResponse(issues=issues, count=len(issues))


def graph_report(data: MultiRepoData, repo: Optional[str] = None) -> DependencyGraph:
    """
    Build the dependency graph for all issues, or for one repository.

    An unknown repository name falls back to the full issue set.
    """
    issues = data.all_issues
    if repo:
        target = next((r for r in data.repositories if r.name == repo), None)
        if target is not None:
            issues = target.issues

    return build_dependency_graph(issues, build_repo_map(data))


def metrics_report(data: MultiRepoData) -> MetricsResponse:
    return MetricsResponse(
        overall=calculate_metrics(data.all_issues),
        by_repo=[
            RepoMetrics(name=repo.name, metrics=calculate_metrics(repo.issues))
            for repo in data.repositories
        ],
        repositories=len(data.repositories),
    )
