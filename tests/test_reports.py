from beadview.loaders.base import build_multi_repo_data
from beadview.reports import graph_report, metrics_report, repositories_report
from beadview.schemas import Repository
from conftest import issues, make_issue


def sample():
    return build_multi_repo_data([
        Repository(
            name="alpha", path="/src/alpha", db_path="/src/alpha/.beads", prefix="al",
            issues=issues(
                make_issue("al-1", "open", deps=[("be-1", "blocks")]),
                make_issue("al-2", "closed"),
            ),
        ),
        Repository(
            name="beta", path="/src/beta", db_path="/src/beta/.beads", prefix="be",
            issues=issues(make_issue("be-1", "in_progress")),
        ),
    ])


def test_repositories_report_shape():
    payload = repositories_report(sample()).model_dump(by_alias=True)

    assert payload["totalRepos"] == 2
    assert payload["totalIssues"] == 3
    assert (payload["totalOpen"], payload["totalInProgress"], payload["totalClosed"]) == (1, 1, 1)
    assert payload["repositories"][0] == {
        "name": "alpha",
        "path": "/src/alpha",
        "prefix": "al",
        "issueCount": 2,
        "openCount": 1,
        "inProgressCount": 0,
        "closedCount": 1,
    }


def test_graph_report_for_one_repository_keeps_cross_repo_edges():
    graph = graph_report(sample(), repo="alpha")
    assert [n.id for n in graph.nodes] == ["al-1", "al-2"]
    assert [(e.source, e.target) for e in graph.edges] == [("be-1", "al-1")]


def test_graph_report_unknown_repo_falls_back_to_all():
    graph = graph_report(sample(), repo="nope")
    assert [n.id for n in graph.nodes] == ["al-1", "al-2", "be-1"]
    assert [n.repo for n in graph.nodes] == ["alpha", "alpha", "beta"]


def test_metrics_report_overall_and_per_repo():
    report = metrics_report(sample())

    assert report.repositories == 2
    assert report.overall.total == 3
    assert [r.name for r in report.by_repo] == ["alpha", "beta"]
    # globally al-1 is blocked by in-progress be-1; inside alpha alone it is not
    assert report.overall.ready_count == 0
    assert report.by_repo[0].metrics.ready_count == 1
    assert set(report.model_dump(by_alias=True)) == {"overall", "byRepo", "repositories"}
