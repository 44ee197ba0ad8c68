from beadview.graph import build_dependency_graph, find_dangling_edges
from conftest import issues, make_issue


def test_edge_points_from_prerequisite_to_dependent():
    data = issues(make_issue("A", deps=[("B", "blocks")]), make_issue("B"))
    graph = build_dependency_graph(data, {"A": "repo", "B": "repo"})

    assert len(graph.edges) == 1
    edge = graph.edges[0]
    assert edge.source == "B"
    assert edge.target == "A"
    assert edge.type == "blocks"
    assert edge.id == "B-A-blocks"


def test_nodes_carry_issue_fields_and_repo():
    data = issues(
        make_issue("A", status="in_progress", priority=0, issue_type="bug", assignee="kim", title="Crash"),
    )
    graph = build_dependency_graph(data, {"A": "alpha"})

    node = graph.nodes[0]
    assert node.model_dump() == {
        "id": "A",
        "title": "Crash",
        "status": "in_progress",
        "priority": 0,
        "type": "bug",
        "repo": "alpha",
        "assignee": "kim",
    }


def test_missing_repo_is_unknown():
    graph = build_dependency_graph(issues(make_issue("A")), {})
    assert graph.nodes[0].repo == "unknown"


def test_all_dependency_types_become_edges_in_order():
    data = issues(
        make_issue("A", deps=[("B", "blocks"), ("C", "related")]),
        make_issue("B", deps=[("C", "parent-child")]),
        make_issue("C", deps=[("A", "discovered-from")]),
    )
    graph = build_dependency_graph(data, {})

    assert [n.id for n in graph.nodes] == ["A", "B", "C"]
    assert [e.id for e in graph.edges] == [
        "B-A-blocks",
        "C-A-related",
        "C-B-parent-child",
        "A-C-discovered-from",
    ]


def test_dangling_edges_pass_through_and_are_detectable():
    data = issues(make_issue("A", deps=[("ELSEWHERE-1", "blocks"), ("B", "related")]), make_issue("B"))
    graph = build_dependency_graph(data, {})

    assert len(graph.edges) == 2
    dangling = find_dangling_edges(graph)
    assert [e.source for e in dangling] == ["ELSEWHERE-1"]


def test_same_input_same_output():
    data = issues(make_issue("A", deps=[("B", "blocks")]), make_issue("B"))
    repo_map = {"A": "x", "B": "y"}
    assert build_dependency_graph(data, repo_map) == build_dependency_graph(data, repo_map)


def test_empty_graph():
    graph = build_dependency_graph([], {})
    assert graph.nodes == [] and graph.edges == []
