"""Prose (Markdown) artifacts emitted per SRS domain.

Links are relative to the file that carries them: phase files live in
``docs/<phase>/<slug>/`` and the BRD in ``docs/1-requirements/``.
"""

from __future__ import annotations

import re

from doc_engine.scaffold.models import SrsDomain, SrsRequirement
from doc_engine.scaffold.yaml_gen import DEFAULT_PRIORITY, DEFAULT_VERIFICATION, req_id

TODO_STEP = "_TODO_"

_BACKTICK_RE = re.compile(r"(?<!`)`([^`]+)`(?!`)")


def escape_pipe(text: str) -> str:
    return text.replace("|", "\\|")


def extract_backtick_command(text: str) -> str | None:
    """First single-backtick code span; double and triple fences are ignored."""
    match = _BACKTICK_RE.search(text)
    return match.group(1) if match else None


def extract_trace_file(traces_to: str) -> str | None:
    """File path after ``->`` in a trace, e.g. ``STK-02 -> api/types.rs (RuleDef)``."""
    _, arrow, after = traces_to.partition("->")
    if not arrow:
        return None
    path = after.split("(", 1)[0].strip().strip("`")
    return path or None


def is_command_like(span: str) -> bool:
    """A runnable command starts with a letter, has arguments and is not a key/value pair."""
    if not span or not span[0].isascii() or not span[0].isalpha():
        return False
    if " " not in span:
        return False
    return ": " not in span and "= " not in span


def _command_step(req: SrsRequirement, template: str) -> str:
    if req.acceptance:
        command = extract_backtick_command(req.acceptance)
        if command and is_command_like(command):
            return template.format(command)
    return TODO_STEP


def _file_step(req: SrsRequirement, verb: str) -> str | None:
    if req.traces_to:
        file = extract_trace_file(req.traces_to)
        if file:
            return f"{verb} `{file}`"
    return None


def generate_steps(req: SrsRequirement) -> str:
    method = req.verification or DEFAULT_VERIFICATION
    if method == "Demonstration":
        return _command_step(req, "Execute `{}` and observe output")
    if method == "Inspection":
        return _file_step(req, "Review") or TODO_STEP
    if method == "Analysis":
        step = _file_step(req, "Analyze")
        if step:
            return step
        first_line = req.description.splitlines()[0] if req.description else ""
        return f"Analyze: {first_line}" if first_line else TODO_STEP
    return _command_step(req, "Run `{}`")


def clean_expected(acceptance: str, steps: str) -> str:
    """Drop a leading command from the expected outcome when the steps already run it."""
    if steps == TODO_STEP:
        return acceptance
    command = extract_backtick_command(steps)
    if command is None:
        return acceptance
    prefix = f"`{command}`"
    if not acceptance.startswith(prefix):
        return acceptance
    rest = acceptance[len(prefix) :].lstrip()
    if not rest:
        return acceptance
    return rest[0].upper() + rest[1:]


def _metadata(status: str = "Draft") -> list[str]:
    return ["**Version:** 1.0", f"**Status:** {status}"]


def _spec_link(slug: str) -> str:
    return f"**Spec:** [Feature Spec](../../1-requirements/{slug}/{slug}.spec)"


def _test_label(req: SrsRequirement) -> str:
    method = req.verification or DEFAULT_VERIFICATION
    return escape_pipe(f"{req.id}: {req.title} ({method})")


def feature_md(domain: SrsDomain) -> str:
    lines = [f"# Feature Spec: {domain.title}", "", *_metadata(), f"**Section:** {domain.section}"]
    lines += [
        "",
        "## Requirements",
        "",
        "| ID | Source | Title | Priority | Verification | Acceptance |",
        "|-----|--------|-------|----------|--------------|------------|",
    ]
    for n, req in enumerate(domain.requirements, start=1):
        lines.append(
            f"| {req_id(n)} | {req.id} | {escape_pipe(req.title)} "
            f"| {req.priority or DEFAULT_PRIORITY} | {req.verification or DEFAULT_VERIFICATION} "
            f"| {escape_pipe(req.acceptance or '-')} |"
        )
    lines += ["", "## Acceptance Criteria", ""]
    for n, req in enumerate(domain.requirements, start=1):
        lines.append(f"- **{req_id(n)}** ({req.id}): {req.acceptance or 'To be defined'}")
    return "\n".join(lines) + "\n"


def arch_md(domain: SrsDomain) -> str:
    slug = domain.slug
    lines = [f"# Architecture: {domain.title}", "", *_metadata(), _spec_link(slug)]
    lines += [
        "",
        "## Components",
        "",
        "| Component | Traces To | Description |",
        "|-----------|-----------|-------------|",
    ]
    for req in domain.requirements:
        if not req.traces_to:
            continue
        description = req.description.splitlines()[0] if req.description else req.title
        lines.append(
            f"| {req.id} handler | {escape_pipe(req.traces_to)} | {escape_pipe(description)} |"
        )
    lines += [
        "",
        "## Related Documents",
        "",
        f"- [Feature Spec](../../1-requirements/{slug}/{slug}.spec)",
        f"- [Test Plan](../../5-testing/{slug}/{slug}.test)",
        f"- [Deployment](../../6-deployment/{slug}/{slug}.deploy)",
    ]
    return "\n".join(lines) + "\n"


def test_plan_md(domain: SrsDomain) -> str:
    lines = [f"# Test Plan: {domain.title}", "", *_metadata(), _spec_link(domain.slug)]
    lines += [
        "",
        "## Test Cases",
        "",
        "| ID | Test | Verifies | Priority |",
        "|----|------|----------|----------|",
    ]
    for n, req in enumerate(domain.requirements, start=1):
        lines.append(
            f"| TC-{n:03} | {_test_label(req)} | {req_id(n)} "
            f"| {req.priority or DEFAULT_PRIORITY} |"
        )
    return "\n".join(lines) + "\n"


def _exec_header(heading: str, domain: SrsDomain, tldr: str) -> list[str]:
    return [
        f"# {heading}: {domain.title}",
        "",
        f"> **TLDR:** {tldr}",
        "",
        *_metadata("Pending"),
        f"**Test Plan:** [Test Plan]({domain.slug}.test)",
        "",
        "---",
        "",
        "## Test Cases",
        "",
    ]


def manual_exec_md(domain: SrsDomain) -> str:
    lines = _exec_header(
        "Manual Test Execution",
        domain,
        f"Manual test checklist for {domain.title}: step-by-step procedures "
        "with expected outcomes.",
    )
    lines += ["| TC | Test | Steps | Expected |", "|----|------|-------|----------|"]
    for n, req in enumerate(domain.requirements, start=1):
        steps = generate_steps(req)
        expected = clean_expected(req.acceptance or "To be defined", steps)
        lines.append(
            f"| TC-{n:03} | {_test_label(req)} | {escape_pipe(steps)} | {escape_pipe(expected)} |"
        )
    lines += [
        "",
        "---",
        "",
        "## Execution Log",
        "",
        "| TC | Tester | Date | Pass/Fail | Notes |",
        "|----|--------|------|-----------|-------|",
    ]
    lines += [f"| TC-{n:03} | | | | |" for n in range(1, len(domain.requirements) + 1)]
    return "\n".join(lines) + "\n"


def auto_exec_md(domain: SrsDomain) -> str:
    lines = _exec_header(
        "Automated Test Execution",
        domain,
        f"CI/automated test tracker for {domain.title}: maps each test case "
        "to a CI job and build.",
    )
    lines += [
        "| TC | Test | Verifies | CI Job | Build | Status | Last Run |",
        "|----|------|----------|--------|-------|--------|----------|",
    ]
    for n, req in enumerate(domain.requirements, start=1):
        lines.append(f"| TC-{n:03} | {_test_label(req)} | {req_id(n)} | | | Pending | |")
    return "\n".join(lines) + "\n"


def deploy_md(domain: SrsDomain) -> str:
    lines = [f"# Deployment: {domain.title}", "", *_metadata(), _spec_link(domain.slug)]
    lines += [
        "",
        "## Environments",
        "",
        "| Environment | Description |",
        "|-------------|-------------|",
        f"| staging | Staging environment for {escape_pipe(domain.title)} validation |",
        f"| production | Production environment for {escape_pipe(domain.title)} |",
        "",
        "## Build",
        "",
        "_Define build steps._",
        "",
        "## Rollback",
        "",
        "_Define rollback procedures._",
    ]
    return "\n".join(lines) + "\n"


def brd_md(domains: list[SrsDomain]) -> str:
    lines = ["# Business Requirements Document", "", *_metadata()]
    lines += [
        "",
        "## Domain Inventory",
        "",
        "| Section | Domain | Requirements | Spec | Arch | Test | Deploy |",
        "|---------|--------|--------------|------|------|------|--------|",
    ]
    for d in domains:
        s = d.slug
        lines.append(
            f"| {d.section} | {s} | {len(d.requirements)} | [spec]({s}/{s}.spec) "
            f"| [arch](../3-design/{s}/{s}.arch) | [test](../5-testing/{s}/{s}.test) "
            f"| [deploy](../6-deployment/{s}/{s}.deploy) |"
        )
    lines += ["", "## Domain Specifications", ""]
    for d in domains:
        s = d.slug
        lines += [
            f"### {d.section} {d.title} ({s})",
            "",
            f"- **Requirements:** {len(d.requirements)}",
            f"- **Spec:** `docs/1-requirements/{s}/{s}.spec.yaml`",
            f"- **Architecture:** `docs/3-design/{s}/{s}.arch.yaml`",
            f"- **Test Plan:** `docs/5-testing/{s}/{s}.test.yaml`",
            f"- **Deployment:** `docs/6-deployment/{s}/{s}.deploy.yaml`",
            "",
        ]
    return "\n".join(lines)
