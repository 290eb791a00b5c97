"""Data model of policy reports and their results."""

from __future__ import annotations

from dataclasses import dataclass, field

STATUSES = ("pass", "warn", "fail", "error", "skip")
STATUS_PASS, STATUS_WARN, STATUS_FAIL, STATUS_ERROR, STATUS_SKIP = STATUSES

SEVERITY_HIGH = "high"
SEVERITY_MEDIUM = "medium"
SEVERITY_LOW = "low"


@dataclass(frozen=True)
class Resource:
    """Reference to the object a result was reported for."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    namespace: str = ""
    uid: str = ""


@dataclass
class Summary:
    """Counts of results per status."""

    pass_: int = 0
    skip: int = 0
    warn: int = 0
    fail: int = 0
    error: int = 0


@dataclass
class Result:
    """A single policy evaluation result."""

    message: str = ""
    policy: str = ""
    rule: str = ""
    result: str = ""
    id: str = ""
    priority: str = ""
    severity: str = ""
    category: str = ""
    source: str = ""
    scored: bool = False
    timestamp: int = 0
    resources: list[Resource] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class PolicyReport:
    """A namespaced policy report, or a cluster report when namespace is empty."""

    name: str
    namespace: str = ""
    summary: Summary = field(default_factory=Summary)
    results: list[Result] = field(default_factory=list)

    @property
    def is_cluster_scoped(self) -> bool:
        return not self.namespace

    @property
    def id(self) -> str:
        """Key that identifies the report among all reports."""
        if self.is_cluster_scoped:
            return self.name
        return f"{self.namespace}/{self.name}"

    @property
    def source(self) -> str:
        """Source of the first result, or an empty string without results."""
        return self.results[0].source if self.results else ""