import pytest

from beadview.aggregation import IssueFilters, build_repo_map, filter_issues, tag_issues
from beadview.loaders.base import build_multi_repo_data
from beadview.schemas import Repository
from conftest import issues, make_issue


def repo(name: str, *records: dict) -> Repository:
    return Repository(name=name, path=f"/src/{name}", db_path=f"/src/{name}/.beads", prefix=name, issues=issues(*records))


@pytest.fixture
def data():
    return build_multi_repo_data([
        repo(
            "alpha",
            make_issue("al-1", "open", deps=[("al-2", "blocks")], priority=0),
            make_issue("al-2", "in_progress", priority=1),
            make_issue("al-3", "open", priority=1),
        ),
        repo(
            "beta",
            make_issue("be-1", "open", deps=[("al-3", "blocks")], priority=1),
            make_issue("be-2", "closed", priority=1),
        ),
    ])


def ids(result):
    return [i.id for i in result]


def test_no_filters_returns_everything_tagged(data):
    result = filter_issues(data, IssueFilters())
    assert ids(result) == ["al-1", "al-2", "al-3", "be-1", "be-2"]
    assert [i.repository for i in result] == ["alpha", "alpha", "alpha", "beta", "beta"]


def test_status_filter(data):
    assert ids(filter_issues(data, IssueFilters(status="open"))) == ["al-1", "al-3", "be-1"]


def test_priority_filter_accepts_strings(data):
    assert ids(filter_issues(data, IssueFilters(priority="0"))) == ["al-1"]
    assert ids(filter_issues(data, IssueFilters(priority=1))) == ["al-2", "al-3", "be-1", "be-2"]


def test_non_numeric_priority_is_ignored(data):
    assert len(filter_issues(data, IssueFilters(priority="high"))) == 5


def test_repo_filter(data):
    assert ids(filter_issues(data, IssueFilters(repo="beta"))) == ["be-1", "be-2"]


def test_ready_uses_unfiltered_issue_set(data):
    # be-1 is blocked by al-3 in another repository; filtering to beta must
    # not hide that blocker from the readiness check
    result = filter_issues(data, IssueFilters(repo="beta", ready_only=True))
    assert ids(result) == []

    assert ids(filter_issues(data, IssueFilters(ready_only=True))) == ["al-3"]


def test_filters_combine(data):
    result = filter_issues(data, IssueFilters(status="open", priority="1", repo="alpha"))
    assert ids(result) == ["al-3"]


def test_duplicate_ids_first_repository_wins():
    data = build_multi_repo_data([
        repo("first", make_issue("dup-1")),
        repo("second", make_issue("dup-1", title="Shadow")),
    ])
    assert build_repo_map(data) == {"dup-1": "first"}
    assert [i.repository for i in tag_issues(data)] == ["first", "first"]


def test_tagged_issue_keeps_dependencies(data):
    tagged = tag_issues(data)[0]
    assert tagged.dependencies[0].depends_on_id == "al-2"
    assert tagged.model_dump(exclude_none=True)["repository"] == "alpha"


def test_fractional_priority_filter_is_ignored(data):
    # int() rejects "2.5" and "3abc", so they are treated as non-numeric
    assert len(filter_issues(data, IssueFilters(priority="2.5"))) == 5
    assert len(filter_issues(data, IssueFilters(priority="3abc"))) == 5
    assert IssueFilters(priority=" 1 ").priority_value() == 1


def test_tagging_keeps_unknown_fields():
    data = build_multi_repo_data([repo("alpha", make_issue("al-1", labels=["ui"], estimated_minutes=15))])

    tagged = tag_issues(data)[0]
    dumped = tagged.model_dump()
    assert dumped["labels"] == ["ui"]
    assert dumped["estimated_minutes"] == 15
    assert dumped["repository"] == "alpha"


def test_boolean_priority_does_not_match_numeric_filter():
    data = build_multi_repo_data([
        repo("alpha", make_issue("al-1", priority=True), make_issue("al-2", priority=1)),
    ])
    assert [i.id for i in filter_issues(data, IssueFilters(priority="1"))] == ["al-2"]
