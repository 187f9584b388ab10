"""Navigation checks for the documentation hub and root README."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, Pass, ScanContext, Skip

HUB_PATH = "docs/README.md"
_W3H_KEYWORDS = ("who", "what", "why", "how")
_PHASE_NAME_RE = re.compile(r"^\d+-[a-z_]+$")
_DEEP_LINK_RE = re.compile(r"\]\(docs/\d+-[^)]+\)")


def _read(ctx: ScanContext, rel: str) -> str | Skip:
    if not (ctx.root / rel).is_file():
        return Skip(reason=f"{rel} not found")
    content = ctx.read_text(rel)
    if content is None:
        return Skip(reason=f"Cannot read {rel}")
    return content


class W3hHub(BuiltinCheck):
    """The hub answers WHO/WHAT/WHY/HOW, as headings or bold labels."""

    def run(self, ctx: ScanContext) -> CheckResult:
        content = _read(ctx, HUB_PATH)
        if isinstance(content, Skip):
            return content
        lowered = content.lower()
        missing = [
            keyword
            for keyword in _W3H_KEYWORDS
            if not re.search(rf"(?im)^#{{1,3}}\s+.*{keyword}", content)
            and f"**{keyword}**" not in lowered
        ]
        if not missing:
            return Pass()
        return self.verdict(
            [
                self.violation(
                    HUB_PATH, f"Hub document missing W3H sections: {', '.join(missing)}"
                )
            ]
        )


class HubLinksPhases(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        content = _read(ctx, HUB_PATH)
        if isinstance(content, Skip):
            return content
        phases = sorted(
            entry.name
            for entry in (ctx.root / "docs").iterdir()
            if entry.is_dir() and _PHASE_NAME_RE.match(entry.name)
        )
        return self.verdict(
            [
                self.violation(HUB_PATH, f"Hub does not link to phase directory '{phase}'")
                for phase in phases
                if phase not in content
            ]
        )


class NoDeepLinks(BuiltinCheck):
    """Root README links the hub, not files inside phase directories."""

    def run(self, ctx: ScanContext) -> CheckResult:
        content = _read(ctx, "README.md")
        if isinstance(content, Skip):
            return content
        return self.verdict(
            [
                self.violation(
                    "README.md", f"Line {lineno}: Root README deep-links into docs/ subdirectory"
                )
                for lineno, line in enumerate(content.splitlines(), 1)
                if _DEEP_LINK_RE.search(line)
            ]
        )
