"""Traceability checks between SDLC phase documents."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, Pass, ScanContext, Skip, Violation

_DESIGN_REQ_RE = re.compile(r"requirements\.md|FR-\d|STK-\d|SRS|1-requirements", re.IGNORECASE)
_PLAN_ARCH_RE = re.compile(r"architecture\.md|3-design|architectural", re.IGNORECASE)
_BACKLOG_REQ_RE = re.compile(
    r"requirements\.md|requirements\b|FR-\d|STK-\d|SRS|1-requirements|BL-\d", re.IGNORECASE
)

# phase directory -> filename fragments, one of which must appear at its top level
PHASE_ARTIFACTS: dict[str, tuple[str, ...]] = {
    "docs/1-requirements": ("requirements", "srs"),
    "docs/2-planning": ("plan", "implementation"),
    "docs/3-design": ("architecture.md",),
}
BACKLOG_PATH = "docs/2-planning/backlog.md"


class PhaseArtifactPresence(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        present = {
            phase: fragments
            for phase, fragments in PHASE_ARTIFACTS.items()
            if (ctx.root / phase).is_dir()
        }
        if not present:
            return Skip(reason="No SDLC phase directories exist")

        violations: list[Violation] = []
        for phase, fragments in present.items():
            names = [entry.name.lower() for entry in (ctx.root / phase).iterdir()]
            if any(fragment in name for name in names for fragment in fragments):
                continue
            expected = "' or '".join(fragments)
            violations.append(
                self.violation(
                    phase,
                    f"Phase directory '{phase}' exists but is missing expected artifact "
                    f"containing '{expected}'",
                )
            )
        return self.verdict(violations)


class _DocumentsReference(BuiltinCheck):
    """Every qualifying markdown file in a phase directory mentions an upstream phase."""

    PHASE_DIR: str = ""
    EXCLUDED_PREFIXES: tuple[str, ...] = ()
    PATTERN: re.Pattern[str] = _DESIGN_REQ_RE
    MESSAGE: str = ""

    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / self.PHASE_DIR).is_dir():
            return Skip(reason=f"{self.PHASE_DIR}/ does not exist")
        readme = f"{self.PHASE_DIR}/README.md"
        files = [
            rel
            for rel in ctx.files_under(f"{self.PHASE_DIR}/", ".md")
            if rel != readme and not rel.startswith(self.EXCLUDED_PREFIXES)
        ]
        if not files:
            return Skip(reason=f"No qualifying .md files in {self.PHASE_DIR}/")

        violations: list[Violation] = []
        for rel in files:
            content = ctx.read_text(rel)
            if content is None or self.PATTERN.search(content):
                continue
            violations.append(self.violation(rel, self.MESSAGE.format(path=rel)))
        return self.verdict(violations)


class DesignTracesRequirements(_DocumentsReference):
    PHASE_DIR = "docs/3-design"
    EXCLUDED_PREFIXES = ("docs/3-design/adr/", "docs/3-design/compliance/")
    PATTERN = _DESIGN_REQ_RE
    MESSAGE = (
        "Design document '{path}' does not reference requirements "
        "(expected pattern: requirements.md, FR-N, STK-N, SRS, or 1-requirements)"
    )


class PlanTracesDesign(_DocumentsReference):
    PHASE_DIR = "docs/2-planning"
    PATTERN = _PLAN_ARCH_RE
    MESSAGE = (
        "Planning document '{path}' does not reference architecture "
        "(expected pattern: architecture.md, 3-design, or architectural)"
    )


class BacklogTracesRequirements(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / BACKLOG_PATH).is_file():
            return Skip(reason=f"{BACKLOG_PATH} does not exist")
        content = ctx.read_text(BACKLOG_PATH)
        if content is None:
            return Skip(reason="Cannot read backlog.md")
        if _BACKLOG_REQ_RE.search(content):
            return Pass()
        return self.verdict(
            [
                self.violation(
                    BACKLOG_PATH,
                    "Backlog does not reference requirements (expected: requirements.md, "
                    "FR-N, STK-N, SRS, 1-requirements, or BL-N)",
                )
            ]
        )
