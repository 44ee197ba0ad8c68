from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IssueStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"

class IssueType(str, Enum):
    TASK = "task"
    FEATURE = "feature"
    EPIC = "epic"
    BUG = "bug"

class DependencyType(str, Enum):
    BLOCKS = "blocks"
    RELATED = "related"
    PARENT_CHILD = "parent-child"
    DISCOVERED_FROM = "discovered-from"


# Source records are passed through as written: enum-like fields hold any
# string, and the enums above are only the values the pipeline reacts to.
class Dependency(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    issue_id: str
    depends_on_id: str
    type: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None

class Issue(BaseModel):
    """One line of a .beads/issues.jsonl file. Unknown keys are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    priority: Any = None  # 0-4, 0 is highest; not range or type checked
    issue_type: Optional[str] = None
    assignee: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    closed_at: Optional[str] = None
    dependencies: Optional[list[Dependency]] = None
    acceptance_criteria: Optional[str] = None
    design: Optional[str] = None
    external_ref: Optional[str] = None

class IssueWithRepository(Issue):
    repository: str


class CamelModel(BaseModel):
    """Base for aggregate and response shapes serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

class Repository(CamelModel):
    name: str
    path: str
    db_path: str
    prefix: str
    issues: list[Issue] = Field(default_factory=list)

class MultiRepoData(CamelModel):
    repositories: list[Repository] = Field(default_factory=list)
    all_issues: list[Issue] = Field(default_factory=list)
    total_open: int = 0
    total_in_progress: int = 0
    total_closed: int = 0


class DependencyGraphNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: Optional[str] = None
    status: Optional[str] = None
    priority: Any = None
    type: Optional[str] = None
    repo: str
    assignee: Optional[str] = None

class DependencyGraphEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    type: Optional[str] = None

class DependencyGraph(BaseModel):
    nodes: list[DependencyGraphNode] = Field(default_factory=list)
    edges: list[DependencyGraphEdge] = Field(default_factory=list)


# Histogram keys match the source enum values, so no camelCase aliasing here.
class StatusCounts(BaseModel):
    open: int = 0
    in_progress: int = 0
    closed: int = 0

class PriorityCounts(BaseModel):
    p0: int = 0
    p1: int = 0
    p2: int = 0
    p3: int = 0
    p4: int = 0

class TypeCounts(BaseModel):
    task: int = 0
    feature: int = 0
    bug: int = 0
    epic: int = 0

class MetricsResult(CamelModel):
    total: int
    by_status: StatusCounts
    by_priority: PriorityCounts
    by_type: TypeCounts
    avg_deps_per_issue: float
    ready_count: int


class RepositorySummary(CamelModel):
    name: str
    path: str
    prefix: str
    issue_count: int
    open_count: int
    in_progress_count: int
    closed_count: int

class RepositoriesResponse(CamelModel):
    repositories: list[RepositorySummary]
    total_repos: int
    total_issues: int
    total_open: int
    total_in_progress: int
    total_closed: int

class IssuesResponse(BaseModel):
    issues: list[IssueWithRepository]
    count: int

class RepoMetrics(BaseModel):
    name: str
    metrics: MetricsResult

class MetricsResponse(CamelModel):
    overall: MetricsResult
    by_repo: list[RepoMetrics]
    repositories: int
