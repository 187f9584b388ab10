"""Text and JSON rendering for scan, spec and scaffold results."""

from __future__ import annotations

from doc_engine.rule_engine.models import Fail, ScanReport, Skip
from doc_engine.scaffold.models import ScaffoldResult
from doc_engine.spec.models import CrossRefReport, SpecValidationReport

_STATUS_LABEL = {"pass": "PASS", "fail": "FAIL", "skip": "SKIP"}


def format_report_text(report: ScanReport) -> str:
    lines = [
        f"{report.tool} {report.version}: {report.project_root}",
        f"Project type: {report.project_type}  Scope: {report.project_scope}",
        "",
    ]
    category = None
    for entry in report.results:
        if entry.category != category:
            category = entry.category
            lines.append(f"[{category}]")
        label = _STATUS_LABEL[entry.result.status]
        lines.append(f"  {label} {entry.id:>3}  {entry.description}")
        if isinstance(entry.result, Fail):
            for v in entry.result.violations:
                where = f"{v.path}: " if v.path else ""
                lines.append(f"           [{v.severity}] {where}{v.message}")
        elif isinstance(entry.result, Skip):
            lines.append(f"           {entry.result.reason}")
    s = report.summary
    lines += [
        "",
        f"{s.total} checks: {s.passed} passed, {s.failed} failed, {s.skipped} skipped",
    ]
    return "\n".join(lines)


def format_report_json(report: ScanReport) -> str:
    return report.model_dump_json(indent=2)


def format_validation_text(report: SpecValidationReport) -> str:
    lines = [f"Specs found: {report.specs_found}"]
    for d in report.diagnostics:
        where = f"{d.file}:{d.line}" if d.line is not None else d.file
        lines.append(f"  [{d.kind}] {where}: {d.message}")
    if not report.diagnostics:
        lines.append("All spec documents are valid.")
    else:
        lines.append(f"{len(report.diagnostics)} problem(s) found.")
    return "\n".join(lines)


def format_cross_ref_text(report: CrossRefReport) -> str:
    if report.is_empty:
        return "No spec documents found; nothing to cross-reference."
    lines: list[str] = []
    for name, entries in report.categories().items():
        if not entries:
            continue
        lines.append(f"[{name}]")
        for e in entries:
            mark = "ok" if e.passed else "FAIL"
            lines.append(f"  {mark:<4} {e.file}: {e.message}")
    s = report.summary
    lines += ["", f"{s.total} checks: {s.passed} passed, {s.failed} failed"]
    return "\n".join(lines)


def format_scaffold_text(result: ScaffoldResult) -> str:
    lines = [
        f"Scaffolded {result.domain_count} domain(s), "
        f"{result.requirement_count} requirement(s) from {result.srs_source}",
    ]
    lines += [f"  + {path}" for path in result.created]
    lines += [f"  ~ {path}" for path in result.skipped]
    lines.append(f"{len(result.created)} created, {len(result.skipped)} skipped")
    return "\n".join(lines)
