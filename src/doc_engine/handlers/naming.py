"""Naming convention checks for files under ``docs/``."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, ScanContext, Skip, Violation

_PHASE_PREFIX_RE = re.compile(r"^\d+-")
_GUIDE_RE = re.compile(r"^[a-z_]+_[a-z]+_guide\.md$")
_CONVENTION_FILES = frozenset({"README.md", "CHANGELOG.md", "CONTRIBUTING.md", "SECURITY.md"})
_ADR_PREFIX = "docs/3-design/adr/"


def _name(rel: str) -> str:
    return rel.rsplit("/", 1)[-1]


class SnakeLowerCase(BuiltinCheck):
    """Markdown filenames in ``docs/`` are lowercase snake_case without spaces."""

    VARIANTS = {21: "lowercase", 22: "underscores", 23: "no_spaces"}
    DEFAULT_VARIANT = "lowercase"

    def run(self, ctx: ScanContext) -> CheckResult:
        docs_files = ctx.files_under("docs/", ".md")
        if not docs_files:
            return Skip(reason="No .md files in docs/")

        violations: list[Violation] = []
        for rel in docs_files:
            if rel.startswith(_ADR_PREFIX):
                continue
            filename = _name(rel)
            if filename in _CONVENTION_FILES:
                continue
            stem = filename.removesuffix(".md")

            if self.variant == "lowercase" and stem != stem.lower():
                violations.append(
                    self.violation(rel, f"Filename '{filename}' contains uppercase characters")
                )
            elif (
                self.variant == "underscores"
                and "-" in stem
                and not _PHASE_PREFIX_RE.match(stem)
            ):
                violations.append(
                    self.violation(rel, f"Filename '{filename}' contains hyphens; use underscores")
                )
            elif self.variant == "no_spaces" and " " in filename:
                violations.append(self.violation(rel, f"Filename '{filename}' contains spaces"))
        return self.verdict(violations)


class GuideNaming(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        guides = [f for f in ctx.files if "guide/" in f and f.endswith(".md")]
        if not guides:
            return Skip(reason="No guide files found")
        return self.verdict(
            [
                self.violation(
                    rel,
                    f"Guide file '{_name(rel)}' doesn't follow name_{{phase}}_guide.md convention",
                )
                for rel in guides
                if _name(rel) != "README.md" and not _GUIDE_RE.match(_name(rel))
            ]
        )


class TestingFilePlacement(BuiltinCheck):
    """``*_testing_*`` documents live under ``5-testing/``."""

    __test__ = False

    def run(self, ctx: ScanContext) -> CheckResult:
        return self.verdict(
            [
                self.violation(rel, f"Testing file '{_name(rel)}' found outside 5-testing/")
                for rel in ctx.files_under("docs/")
                if "_testing_" in _name(rel) and "5-testing" not in rel
            ]
        )
