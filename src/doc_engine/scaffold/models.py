"""Pydantic models for SRS extraction and scaffold results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class RequirementKind(StrEnum):
    FUNCTIONAL = "functional"
    NON_FUNCTIONAL = "non_functional"


class Phase(StrEnum):
    REQUIREMENTS = "requirements"
    DESIGN = "design"
    TESTING = "testing"
    DEPLOYMENT = "deployment"


class SrsRequirement(BaseModel):
    id: str
    title: str
    kind: RequirementKind
    priority: str | None = None
    state: str | None = None
    verification: str | None = None
    traces_to: str | None = None
    acceptance: str | None = None
    description: str = ""


class SrsDomain(BaseModel):
    section: str
    title: str
    slug: str
    requirements: list[SrsRequirement] = Field(default_factory=list)


@dataclass
class ScaffoldConfig:
    srs_path: Path
    output_dir: Path
    force: bool = False
    phases: list[Phase] = field(default_factory=list)

    def includes(self, phase: Phase) -> bool:
        return not self.phases or phase in self.phases


class ScaffoldResult(BaseModel):
    tool: str
    tool_version: str
    timestamp: str
    srs_source: str
    phases: list[Phase] = Field(default_factory=list)
    force: bool = False
    domain_count: int = 0
    requirement_count: int = 0
    created: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
