from beadview.readiness import get_ready_issues
from beadview.schemas import (
    Issue,
    IssueStatus,
    IssueType,
    MetricsResult,
    PriorityCounts,
    StatusCounts,
    TypeCounts,
)


def _count(issues: list[Issue], predicate) -> int:
    return sum(1 for issue in issues if predicate(issue))


def _has_priority(issue: Issue, level: int) -> bool:
    # JSON true would otherwise compare equal to 1
    return not isinstance(issue.priority, bool) and issue.priority == level


def calculate_metrics(issues: list[Issue]) -> MetricsResult:
    """
    Compute distribution statistics for a set of issues.

    Priorities outside 0-4 are left out of every priority bucket. The
    average dependency count is 0 for an empty set.
    """
    by_status = StatusCounts(
        open=_count(issues, lambda i: i.status == IssueStatus.OPEN),
        in_progress=_count(issues, lambda i: i.status == IssueStatus.IN_PROGRESS),
        closed=_count(issues, lambda i: i.status == IssueStatus.CLOSED),
    )

    by_priority = PriorityCounts(
        **{f"p{level}": _count(issues, lambda i, level=level: _has_priority(i, level)) for level in range(5)}
    )

    by_type = TypeCounts(
        task=_count(issues, lambda i: i.issue_type == IssueType.TASK),
        feature=_count(issues, lambda i: i.issue_type == IssueType.FEATURE),
        bug=_count(issues, lambda i: i.issue_type == IssueType.BUG),
        epic=_count(issues, lambda i: i.issue_type == IssueType.EPIC),
    )

    total_deps = sum(len(issue.dependencies or []) for issue in issues)

    return MetricsResult(
        total=len(issues),
        by_status=by_status,
        by_priority=by_priority,
        by_type=by_type,
        avg_deps_per_issue=total_deps / max(len(issues), 1),
        ready_count=len(get_ready_issues(issues)),
    )
