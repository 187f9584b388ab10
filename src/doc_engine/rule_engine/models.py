"""Pydantic models and enums for the rule engine layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ProjectType(StrEnum):
    OPEN_SOURCE = "open_source"
    INTERNAL = "internal"


class ProjectScope(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def rank(self) -> int:
        return _SCOPE_RANK[self]

    def includes(self, other: ProjectScope) -> bool:
        """True when a rule tagged ``other`` runs under this scope (tiers are cumulative)."""
        return other.rank <= self.rank


_SCOPE_RANK = {ProjectScope.SMALL: 0, ProjectScope.MEDIUM: 1, ProjectScope.LARGE: 2}


class RuleKind(StrEnum):
    FILE_EXISTS = "file_exists"
    DIR_EXISTS = "dir_exists"
    DIR_NOT_EXISTS = "dir_not_exists"
    FILE_CONTENT_MATCHES = "file_content_matches"
    FILE_CONTENT_NOT_MATCHES = "file_content_not_matches"
    GLOB_CONTENT_MATCHES = "glob_content_matches"
    GLOB_CONTENT_NOT_MATCHES = "glob_content_not_matches"
    GLOB_NAMING_MATCHES = "glob_naming_matches"
    GLOB_NAMING_NOT_MATCHES = "glob_naming_not_matches"
    BUILTIN = "builtin"


# Fields each declarative kind cannot run without.
REQUIRED_FIELDS: dict[RuleKind, tuple[str, ...]] = {
    RuleKind.FILE_EXISTS: ("path",),
    RuleKind.DIR_EXISTS: ("path",),
    RuleKind.DIR_NOT_EXISTS: ("path",),
    RuleKind.FILE_CONTENT_MATCHES: ("path", "pattern"),
    RuleKind.FILE_CONTENT_NOT_MATCHES: ("path", "pattern"),
    RuleKind.GLOB_CONTENT_MATCHES: ("glob", "pattern"),
    RuleKind.GLOB_CONTENT_NOT_MATCHES: ("glob", "pattern"),
    RuleKind.GLOB_NAMING_MATCHES: ("glob", "pattern"),
    RuleKind.GLOB_NAMING_NOT_MATCHES: ("glob", "pattern"),
    RuleKind.BUILTIN: ("handler",),
}


class RuleDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    category: str
    description: str
    severity: Severity
    kind: RuleKind
    path: str | None = None
    pattern: str | None = None
    glob: str | None = None
    handler: str | None = None
    message: str | None = None
    exclude_pattern: str | None = None
    exclude_paths: list[str] = Field(default_factory=list)
    project_type: ProjectType | None = None
    scope: ProjectScope | None = None


class RuleSet(BaseModel):
    rules: list[RuleDef] = Field(default_factory=list)


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    check_id: int
    path: str | None = None
    message: str
    severity: Severity


class Pass(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["pass"] = "pass"


class Fail(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["fail"] = "fail"
    violations: list[Violation]


class Skip(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["skip"] = "skip"
    reason: str


CheckResult = Annotated[Pass | Fail | Skip, Field(discriminator="status")]


@dataclass(frozen=True)
class ScanContext:
    """Read-only snapshot shared by every check during one scan."""

    root: Path
    files: tuple[str, ...]
    project_type: ProjectType = ProjectType.INTERNAL
    project_scope: ProjectScope = ProjectScope.LARGE

    def files_under(self, prefix: str, suffix: str = "") -> list[str]:
        return [f for f in self.files if f.startswith(prefix) and f.endswith(suffix)]

    def read_text(self, rel_path: str) -> str | None:
        """Return file content, or None when it is missing or unreadable."""
        try:
            return (self.root / rel_path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None


class CheckEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    category: str
    description: str
    severity: Severity
    result: CheckResult


class ScanSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0


class ScanReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    tool: str
    version: str
    timestamp: str
    project_root: str
    project_type: ProjectType
    project_scope: ProjectScope
    results: list[CheckEntry] = Field(default_factory=list)
    summary: ScanSummary = Field(default_factory=ScanSummary)

    @property
    def exit_code(self) -> int:
        return 1 if self.summary.failed else 0
