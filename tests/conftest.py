"""Shared fixtures and builders for beadview tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from beadview.schemas import Issue


def make_issue(issue_id: str, status: str = "open", deps: list[tuple[str, str]] | None = None, **fields) -> dict:
    """Build a raw issue record. `deps` is a list of (depends_on_id, type)."""
    record = {
        "id": issue_id,
        "title": fields.pop("title", f"Issue {issue_id}"),
        "status": status,
        "priority": fields.pop("priority", 2),
        "issue_type": fields.pop("issue_type", "task"),
        "created_at": "2025-01-01T00:00:00Z",
        "updated_at": "2025-01-02T00:00:00Z",
    }
    if deps:
        record["dependencies"] = [
            {
                "issue_id": issue_id,
                "depends_on_id": target,
                "type": dep_type,
                "created_at": "2025-01-01T00:00:00Z",
                "created_by": "tester",
            }
            for target, dep_type in deps
        ]
    record.update(fields)
    return record


def issues(*records: dict) -> list[Issue]:
    return [Issue.model_validate(r) for r in records]


def write_beads_repo(repo_dir: Path, records: list[dict], db_name: str | None = None, extra_lines: list[str] | None = None) -> Path:
    """Create repo_dir/.beads/issues.jsonl and return the .beads path."""
    beads = repo_dir / ".beads"
    beads.mkdir(parents=True, exist_ok=True)
    lines = [json.dumps(r) for r in records] + list(extra_lines or [])
    (beads / "issues.jsonl").write_text("\n".join(lines) + "\n", encoding="utf-8")
    if db_name:
        (beads / db_name).write_bytes(b"")
    return beads


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Two tracked repositories and assorted noise under one root."""
    write_beads_repo(
        tmp_path / "alpha",
        [
            make_issue("al-1", "open", deps=[("al-2", "blocks")], priority=0, issue_type="feature"),
            make_issue("al-2", "in_progress", priority=1),
            make_issue("al-3", "closed", priority=2, issue_type="bug"),
        ],
        db_name="al.db",
    )
    write_beads_repo(
        tmp_path / "projects" / "beta",
        [
            make_issue("be-1", "open", deps=[("al-3", "blocks"), ("al-1", "related")], priority=1),
            make_issue("be-2", "open", deps=[("be-9", "blocks")], priority=3, issue_type="epic"),
        ],
    )
    # marker without an issue file
    (tmp_path / "gamma" / ".beads").mkdir(parents=True)
    # denylisted and hidden directories
    write_beads_repo(tmp_path / "node_modules" / "pkg", [make_issue("nm-1")])
    write_beads_repo(tmp_path / ".cache" / "hidden", [make_issue("hd-1")])
    return tmp_path
