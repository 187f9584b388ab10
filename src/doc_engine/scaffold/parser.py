"""Extract domains and FR/NFR requirement blocks from an SRS markdown document."""

from __future__ import annotations

import re

from doc_engine.scaffold.models import RequirementKind, SrsDomain, SrsRequirement

_SECTION_RE = re.compile(r"^###\s+(\d+\.\d+)\s+(.+)$")
_REQUIREMENT_RE = re.compile(r"^####\s+((?:FR|NFR)-\d+):\s+(.+)$")
_ANY_HEADING_RE = re.compile(r"^#{1,4}\s+")
_TABLE_LINE_RE = re.compile(r"^\s*\|")


def _attribute_re(label: str) -> re.Pattern[str]:
    return re.compile(rf"\|\s*\*\*{label}\*\*\s*\|\s*(.+?)\s*\|")


_ATTRIBUTES: dict[str, re.Pattern[str]] = {
    "priority": _attribute_re("Priority"),
    "state": _attribute_re("State"),
    "verification": _attribute_re("Verification"),
    "traces_to": _attribute_re(r"(?:Traces\s+to|Traceability)"),
    "acceptance": _attribute_re("Acceptance"),
}


def slugify(title: str) -> str:
    """Lowercase ASCII alphanumerics; every other run becomes one ``_``.

    >>> slugify("CI/CD & Deployment")
    'ci_cd_deployment'
    """
    parts: list[str] = []
    pending_sep = False
    for ch in title:
        if ch.isascii() and ch.isalnum():
            if pending_sep and parts:
                parts.append("_")
            parts.append(ch.lower())
            pending_sep = False
        else:
            pending_sep = True
    return "".join(parts)


def _parse_block(
    lines: list[str], start: int, req_id: str, title: str
) -> tuple[SrsRequirement, int]:
    attrs: dict[str, str] = {}
    narrative: list[str] = []
    past_table = False
    i = start
    while i < len(lines):
        line = lines[i]
        if _ANY_HEADING_RE.match(line):
            break
        if _TABLE_LINE_RE.match(line):
            for name, pattern in _ATTRIBUTES.items():
                if name not in attrs:
                    match = pattern.search(line)
                    if match:
                        attrs[name] = match.group(1).strip()
        else:
            if line.strip():
                past_table = True
            if past_table:
                narrative.append(line)
        i += 1

    kind = (
        RequirementKind.NON_FUNCTIONAL if req_id.startswith("NFR") else RequirementKind.FUNCTIONAL
    )
    requirement = SrsRequirement(
        id=req_id,
        title=title,
        kind=kind,
        description="\n".join(narrative).strip(),
        **attrs,
    )
    return requirement, i


def parse_srs(content: str) -> list[SrsDomain]:
    """Return domains in document order; sections without requirements are dropped."""
    lines = content.splitlines()
    domains: list[SrsDomain] = []
    current: SrsDomain | None = None

    i = 0
    while i < len(lines):
        line = lines[i]
        section = _SECTION_RE.match(line)
        if section:
            if current is not None and current.requirements:
                domains.append(current)
            title = section.group(2).strip()
            current = SrsDomain(section=section.group(1), title=title, slug=slugify(title))
            i += 1
            continue

        heading = _REQUIREMENT_RE.match(line)
        if heading:
            requirement, i = _parse_block(lines, i + 1, heading.group(1), heading.group(2).strip())
            if current is not None:
                current.requirements.append(requirement)
            continue
        i += 1

    if current is not None and current.requirements:
        domains.append(current)
    return domains
