"""Discover and load .beads repositories from local directory trees."""

import asyncio
import logging
import os
from typing import Iterable, Optional

from beadview.config import DEFAULT_MAX_DEPTH
from beadview.loaders.base import (
    ISSUES_FILE,
    MARKER_DIR,
    IssueLoader,
    LoadReport,
    RepositoryOutcome,
    SkippedSource,
    assemble_report,
    prefix_from_listing,
)
from beadview.parsing import parse_issue_lines
from beadview.schemas import Repository

logger = logging.getLogger(__name__)

SKIP_DIRS = {"node_modules"}


def _should_skip(name: str) -> bool:
    if name in SKIP_DIRS:
        return True
    return name.startswith(".") and name != MARKER_DIR


def find_beads_directories(
    root: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    skipped: Optional[list[SkippedSource]] = None,
) -> list[str]:
    """
    Find every .beads directory below `root`.

    The root is depth 0 and a directory is listed only while its depth is
    at most `max_depth`. node_modules and hidden directories (other than
    .beads) are skipped, and .beads directories are not descended into.
    Directories that cannot be read are recorded in `skipped` and ignored.

    Returns:
        Full paths of the discovered .beads directories, in sorted walk order
    """
    found: list[str] = []

    def scan(directory: str, depth: int) -> None:
        if depth > max_depth:
            return

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Cannot read {directory}: {e}")
            if skipped is not None:
                skipped.append(SkippedSource(directory, f"unreadable directory: {e.strerror or e}"))
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if not is_dir or _should_skip(entry.name):
                continue

            if entry.name == MARKER_DIR:
                found.append(entry.path)
                continue

            scan(entry.path, depth + 1)

    scan(root, 0)
    return found


def read_repo_info(beads_dir: str) -> tuple[str, str]:
    """Return (name, prefix) for a .beads directory."""
    name = os.path.basename(os.path.dirname(beads_dir))
    try:
        names = sorted(os.listdir(beads_dir))
    except OSError:
        return name, name
    return name, prefix_from_listing(names, default=name)


class FilesystemLoader(IssueLoader):
    """Loads repositories by scanning local root directories."""

    def __init__(self, roots: Iterable[str], max_depth: int = DEFAULT_MAX_DEPTH):
        self.roots = list(roots)
        self.max_depth = max_depth

    def inspect_repository(self, beads_dir: str) -> RepositoryOutcome:
        issues_path = os.path.join(beads_dir, ISSUES_FILE)

        if not os.path.isfile(issues_path):
            return RepositoryOutcome.skip(beads_dir, f"no {ISSUES_FILE}")

        try:
            with open(issues_path, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return RepositoryOutcome.skip(beads_dir, f"cannot read {ISSUES_FILE}: {e}")

        parsed = parse_issue_lines(content, source=issues_path)
        name, prefix = read_repo_info(beads_dir)

        repository = Repository(
            name=name,
            path=os.path.dirname(beads_dir),
            db_path=beads_dir,
            prefix=prefix,
            issues=parsed.issues,
        )
        return RepositoryOutcome(repository=repository, line_faults=tuple(parsed.faults))

    def load_repository(self, beads_dir: str) -> Optional[Repository]:
        """Load one repository, or None if it contributes nothing."""
        return self.inspect_repository(beads_dir).repository

    def scan(self) -> LoadReport:
        skipped: list[SkippedSource] = []
        outcomes = []

        for root in self.roots:
            if not os.path.isdir(root):
                logger.warning(f"Scan root {root} does not exist, skipping")
                skipped.append(SkippedSource(root, "scan root not found"))
                continue

            for beads_dir in find_beads_directories(root, self.max_depth, skipped):
                outcomes.append(self.inspect_repository(beads_dir))

        report = assemble_report(outcomes, skipped)
        logger.info(
            f"Loaded {len(report.data.repositories)} repositories from {len(self.roots)} roots",
            extra={
                "repositories": len(report.data.repositories),
                "issues": len(report.data.all_issues),
                "skipped": len(report.skipped),
            },
        )
        return report

    async def load_report(self) -> LoadReport:
        return await asyncio.to_thread(self.scan)
