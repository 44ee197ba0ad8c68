from beadview.schemas import DependencyType, Issue, IssueStatus


def is_ready(issue: Issue, issues_by_id: dict[str, Issue]) -> bool:
    """
    Check whether an open issue has no unresolved blocking dependency.

    Only "blocks" dependencies count. A blocker that is not in
    `issues_by_id` is ignored. This is a one-hop check: a blocker's own
    status is trusted to reflect its own blockers.
    """
    if issue.status != IssueStatus.OPEN:
        return False

    for dep in issue.dependencies or []:
        if dep.type != DependencyType.BLOCKS:
            continue
        blocker = issues_by_id.get(dep.depends_on_id)
        if blocker is not None and blocker.status != IssueStatus.CLOSED:
            return False

    return True


def get_ready_issues(issues: list[Issue]) -> list[Issue]:
    """Return the open issues in `issues` that nothing in the same set blocks."""
    issues_by_id = {issue.id: issue for issue in issues}
    return [issue for issue in issues if is_ready(issue, issues_by_id)]
