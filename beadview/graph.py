"""Dependency graph construction for the visualization layer."""

from beadview.schemas import (
    DependencyGraph,
    DependencyGraphEdge,
    DependencyGraphNode,
    Issue,
)

UNKNOWN_REPO = "unknown"


def edge_id(depends_on_id: str, issue_id: str, dep_type: str) -> str:
    return f"{depends_on_id}-{issue_id}-{dep_type}"


def build_dependency_graph(issues: list[Issue], repo_map: dict[str, str]) -> DependencyGraph:
    """
    Convert issues into nodes and edges.

    Each edge points from the prerequisite (`depends_on_id`) to the dependent
    issue (`issue_id`), so "A -> B" reads "A must complete before B". Edges
    may reference issues that are not among the nodes.

    Args:
        issues: Issues to render, in display order
        repo_map: Issue id to owning repository name

    Returns:
        DependencyGraph with nodes in issue order and edges in issue, then
        dependency order
    """
    nodes = [
        DependencyGraphNode(
            id=issue.id,
            title=issue.title,
            status=issue.status,
            priority=issue.priority,
            type=issue.issue_type,
            repo=repo_map.get(issue.id) or UNKNOWN_REPO,
            assignee=issue.assignee,
        )
        for issue in issues
    ]

    edges = [
        DependencyGraphEdge(
            id=edge_id(dep.depends_on_id, dep.issue_id, dep.type),
            source=dep.depends_on_id,
            target=dep.issue_id,
            type=dep.type,
        )
        for issue in issues
        for dep in issue.dependencies or []
    ]

    return DependencyGraph(nodes=nodes, edges=edges)


def find_dangling_edges(graph: DependencyGraph) -> list[DependencyGraphEdge]:
    """Return edges whose source or target is not a node in the graph."""
    node_ids = {node.id for node in graph.nodes}
    return [
        edge for edge in graph.edges
        if edge.source not in node_ids or edge.target not in node_ids
    ]
