"""Markdown link resolution across ``docs/``."""

from __future__ import annotations

import posixpath
import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, ScanContext, Skip, Violation

_LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")
_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "#")


class LinkResolution(BuiltinCheck):
    """Internal links resolve on disk.

    The ``markdown`` variant only checks links to ``.md`` targets; the
    ``relative`` variant checks every relative link.
    """

    VARIANTS = {44: "markdown", 45: "relative"}
    DEFAULT_VARIANT = "markdown"

    def run(self, ctx: ScanContext) -> CheckResult:
        md_files = ctx.files_under("docs/", ".md")
        if not md_files:
            return Skip(reason="No .md files in docs/")

        violations: list[Violation] = []
        for rel in md_files:
            content = ctx.read_text(rel)
            if content is None:
                continue
            base = posixpath.dirname(rel)
            for match in _LINK_RE.finditer(content):
                target = match.group(2).strip()
                if target.startswith(_EXTERNAL_PREFIXES):
                    continue
                target_path = target.split("#", 1)[0]
                if not target_path:
                    continue
                absolute = target_path.startswith("/")
                resolved = (
                    ctx.root / target_path.lstrip("/")
                    if absolute
                    else ctx.root / base / target_path
                )
                if resolved.exists():
                    continue
                if self.variant == "relative" and not absolute:
                    violations.append(
                        self.violation(rel, f"Broken relative link: '{target}' does not exist")
                    )
                elif self.variant == "markdown" and target_path.endswith(".md"):
                    violations.append(
                        self.violation(rel, f"Broken link: '{target}' does not exist")
                    )
        return self.verdict(violations)
