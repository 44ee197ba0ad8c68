"""Parse beads issues.jsonl content into Issue models."""

import json
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from beadview.schemas import Issue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineFault:
    """A line that was dropped while parsing an issue file."""

    line_number: int
    reason: str


@dataclass
class ParsedIssues:
    issues: list[Issue] = field(default_factory=list)
    faults: list[LineFault] = field(default_factory=list)


def parse_issue_line(line: str) -> Issue:
    """
    Parse a single JSONL line.

    Field values are kept as written; only a JSON object with a string
    `id` is required.

    Raises:
        ValueError: If the line is not JSON, not an object, or has no id
            (pydantic's ValidationError is a ValueError subclass)
    """
    record = json.loads(line)
    if not isinstance(record, dict):
        raise ValueError(f"expected a JSON object, got {type(record).__name__}")
    return Issue.model_validate(record)


def parse_issue_lines(text: str, source: str = "<issues.jsonl>") -> ParsedIssues:
    """
    Parse every non-blank line of an issue file independently.

    A line that fails to parse is logged and recorded as a LineFault;
    the remaining lines are still parsed.

    Args:
        text: Decoded UTF-8 file content
        source: File path or URL, used only for log context

    Returns:
        ParsedIssues with issues in file order and any dropped lines
    """
    result = ParsedIssues()

    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            issue = parse_issue_line(line)
        except ValidationError as e:
            reason = f"invalid issue record: {e.error_count()} validation error(s)"
        except json.JSONDecodeError as e:
            reason = f"invalid JSON: {e}"
        except ValueError as e:
            reason = f"not an issue object: {e}"
        else:
            result.issues.append(issue)
            continue

        result.faults.append(LineFault(line_number, reason))
        logger.warning(
            f"Failed to parse line {line_number} in {source}: {reason}",
            extra={"source": source, "line_number": line_number},
        )

    return result


def dump_issue_line(issue: Issue) -> str:
    """Serialize an issue back to a single JSONL line, omitting absent fields."""
    return issue.model_dump_json(exclude_none=True)
