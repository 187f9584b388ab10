"""Architecture decision record checks."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, Pass, ScanContext, Skip

ADR_DIR = "docs/3-design/adr"
_ADR_NAME_RE = re.compile(r"^\d{3}-[a-z0-9_-]+\.md$")
_ADR_NUMBER_RE = re.compile(r"^\d{3}-")
_INDEX_NAMES = ("README.md", "index.md")


def _adr_files(ctx: ScanContext) -> list[str]:
    return ctx.files_under(f"{ADR_DIR}/", ".md")


class AdrNaming(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / ADR_DIR).is_dir():
            return Skip(reason="ADR directory does not exist")
        files = _adr_files(ctx)
        if not files:
            return Skip(reason="No ADR files found")

        violations = []
        for rel in files:
            name = rel.rsplit("/", 1)[-1]
            if name in _INDEX_NAMES or _ADR_NAME_RE.match(name):
                continue
            violations.append(
                self.violation(
                    rel, f"ADR file '{name}' doesn't follow NNN-title.md naming convention"
                )
            )
        return self.verdict(violations)


class AdrIndexCompleteness(BuiltinCheck):
    """Every numbered ADR is referenced from the ADR index."""

    def run(self, ctx: ScanContext) -> CheckResult:
        adr_dir = ctx.root / ADR_DIR
        if not adr_dir.is_dir():
            return Skip(reason="ADR directory does not exist")
        index = next((name for name in _INDEX_NAMES if (adr_dir / name).is_file()), None)
        if index is None:
            return Skip(reason="No ADR index file found")
        index_content = ctx.read_text(f"{ADR_DIR}/{index}")
        if index_content is None:
            return Skip(reason="Cannot read ADR index")

        numbered = [
            rel.rsplit("/", 1)[-1]
            for rel in _adr_files(ctx)
            if _ADR_NUMBER_RE.match(rel.rsplit("/", 1)[-1])
        ]
        if not numbered:
            return Pass()
        return self.verdict(
            [
                self.violation(ADR_DIR, f"ADR '{name}' not referenced in index")
                for name in numbered
                if name not in index_content
            ]
        )
