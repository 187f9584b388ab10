"""Structural checks: documentation directory layout and required files."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, Pass, ScanContext, Skip, Violation

_PHASE_DIR_RE = re.compile(r"^(\d+)-")
_CHECKBOX_RE = re.compile(r"- \[[ xX]\]")
_MAX_PHASE = 7
_MIN_CHECKBOXES = 10
CHECKLIST_PATH = "docs/3-design/compliance/compliance_checklist.md"


def _phase_dirs(ctx: ScanContext) -> list[tuple[int, str]]:
    docs = ctx.root / "docs"
    phases: list[tuple[int, str]] = []
    for entry in docs.iterdir():
        if not entry.is_dir():
            continue
        match = _PHASE_DIR_RE.match(entry.name)
        if match:
            phases.append((int(match.group(1)), entry.name))
    return sorted(phases)


class ModuleDocsPlural(BuiltinCheck):
    """Modules keep documentation in ``docs/``, never ``doc/`` or both."""

    VARIANTS = {4: "singular", 5: "both"}
    DEFAULT_VARIANT = "singular"

    def run(self, ctx: ScanContext) -> CheckResult:
        doc_parents: set[str] = set()
        docs_parents: set[str] = set()
        for rel in ctx.files:
            parts = rel.split("/")[:-1]
            for i, part in enumerate(parts):
                if i == 0:
                    continue
                if part == "doc":
                    doc_parents.add("/".join(parts[:i]))
                elif part == "docs":
                    docs_parents.add("/".join(parts[:i]))

        if self.variant == "both":
            return self.verdict(
                [
                    self.violation(parent, f"Module '{parent}' has both doc/ and docs/")
                    for parent in sorted(doc_parents & docs_parents)
                ]
            )
        return self.verdict(
            [
                self.violation(
                    f"{parent}/doc",
                    f"Module '{parent}' uses doc/ (singular); should use docs/",
                )
                for parent in sorted(doc_parents)
            ]
        )


class SdlcPhaseNumbering(BuiltinCheck):
    """Phase directories under ``docs/`` are numbered 0-7 without collisions."""

    VARIANTS = {9: "range", 10: "order"}
    DEFAULT_VARIANT = "range"

    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / "docs").is_dir():
            return Skip(reason="docs/ directory does not exist")
        phases = _phase_dirs(ctx)

        violations: list[Violation] = []
        if self.variant == "order":
            for (prev_num, prev_name), (num, name) in zip(phases, phases[1:]):
                if num == prev_num:
                    violations.append(
                        self.violation(
                            f"docs/{name}",
                            f"Phase '{name}' reuses number {num} (also used by '{prev_name}')",
                        )
                    )
        else:
            for num, name in phases:
                if num > _MAX_PHASE:
                    violations.append(
                        self.violation(
                            f"docs/{name}",
                            f"Phase directory '{name}' has number > {_MAX_PHASE}",
                        )
                    )
        return self.verdict(violations)


class ChecklistCompleteness(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / CHECKLIST_PATH).is_file():
            return Skip(reason="Compliance checklist not found")
        content = ctx.read_text(CHECKLIST_PATH)
        if content is None:
            return Skip(reason="Cannot read compliance checklist")

        count = len(_CHECKBOX_RE.findall(content))
        if count >= _MIN_CHECKBOXES:
            return Pass()
        return self.verdict(
            [
                self.violation(
                    CHECKLIST_PATH,
                    f"Checklist has only {count} checkboxes; expected at least {_MIN_CHECKBOXES}",
                )
            ]
        )


class OpenSourceCommunityFiles(BuiltinCheck):
    REQUIRED = ("CODE_OF_CONDUCT.md", "SUPPORT.md")

    def run(self, ctx: ScanContext) -> CheckResult:
        return self.verdict(
            [
                self.violation(name, f"{name} does not exist")
                for name in self.REQUIRED
                if not (ctx.root / name).exists()
            ]
        )


class OpenSourceGithubTemplates(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        violations: list[Violation] = []
        if not (ctx.root / ".github/ISSUE_TEMPLATE").is_dir():
            violations.append(
                self.violation(
                    ".github/ISSUE_TEMPLATE", ".github/ISSUE_TEMPLATE/ directory does not exist"
                )
            )
        if not (ctx.root / ".github/PULL_REQUEST_TEMPLATE.md").exists():
            violations.append(
                self.violation(
                    ".github/PULL_REQUEST_TEMPLATE.md",
                    ".github/PULL_REQUEST_TEMPLATE.md does not exist",
                )
            )
        return self.verdict(violations)


class TemplatesPopulated(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / "docs/templates").is_dir():
            return Skip(reason="docs/templates/ does not exist")
        if ctx.files_under("docs/templates/", ".md"):
            return Pass()
        return self.verdict(
            [
                self.violation(
                    "docs/templates", "docs/templates/ exists but contains no template files"
                )
            ]
        )
