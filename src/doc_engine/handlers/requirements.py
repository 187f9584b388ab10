"""ISO/IEC/IEEE 29148 attribute coverage for SRS requirement blocks."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, ScanContext, Skip

SRS_PATH = "docs/1-requirements/requirements.md"
_REQ_HEADING_RE = re.compile(r"^####\s+((?:FR|NFR)-\d+):\s+.+$")
_ANY_HEADING_RE = re.compile(r"^#{1,4}\s+")

REQUIRED_ATTRIBUTES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Priority", re.compile(r"\*\*Priority\*\*")),
    ("State", re.compile(r"\*\*State\*\*")),
    ("Verification", re.compile(r"\*\*Verification\*\*")),
    ("Traces to", re.compile(r"\*\*Traces\s+to\*\*|\*\*Traceability\*\*")),
    ("Acceptance", re.compile(r"\*\*Acceptance\*\*")),
)


def requirement_blocks(content: str) -> list[tuple[str, str]]:
    """Split an SRS into (requirement id, body) pairs; a body ends at the next heading."""
    blocks: list[tuple[str, str]] = []
    current: str | None = None
    body: list[str] = []
    for line in content.splitlines():
        heading = _REQ_HEADING_RE.match(line)
        if heading or _ANY_HEADING_RE.match(line):
            if current is not None:
                blocks.append((current, "\n".join(body)))
            current = heading.group(1) if heading else None
            body = []
        elif current is not None:
            body.append(line)
    if current is not None:
        blocks.append((current, "\n".join(body)))
    return blocks


class Srs29148Attributes(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / SRS_PATH).is_file():
            return Skip(reason=f"{SRS_PATH} does not exist")
        content = ctx.read_text(SRS_PATH)
        if content is None:
            return Skip(reason="Cannot read requirements.md")
        blocks = requirement_blocks(content)
        if not blocks:
            return Skip(reason="No FR/NFR requirement blocks found in SRS")

        violations = []
        for req_id, block in blocks:
            missing = [name for name, pattern in REQUIRED_ATTRIBUTES if not pattern.search(block)]
            if missing:
                plural = "s" if len(missing) > 1 else ""
                violations.append(
                    self.violation(
                        SRS_PATH, f"{req_id} missing {', '.join(missing)} attribute{plural}"
                    )
                )
        return self.verdict(violations)
