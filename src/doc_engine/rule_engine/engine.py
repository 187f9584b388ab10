"""Compliance engine: load rules, snapshot the project, run every check in ID order."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from pathlib import Path

from doc_engine import TOOL_NAME, __version__
from doc_engine.errors import ConfigError, PathError
from doc_engine.rule_engine.config import CheckIdRanges, ScanConfig
from doc_engine.rule_engine.loader import build_registry, load_rules
from doc_engine.rule_engine.models import (
    CheckEntry,
    Fail,
    Pass,
    ProjectType,
    ScanContext,
    ScanReport,
    ScanSummary,
    Skip,
    Violation,
)
from doc_engine.rule_engine.scanner import scan_files

logger = logging.getLogger(__name__)

LICENSE_FILES = ("LICENSE", "LICENSE.md", "LICENSE.txt")

# Uppercased markers of well-known open-source licences.
OSS_LICENSE_MARKERS = (
    "MIT LICENSE",
    "APACHE LICENSE",
    "GNU GENERAL PUBLIC LICENSE",
    "GNU LESSER GENERAL PUBLIC",
    "BSD ",
    "MOZILLA PUBLIC LICENSE",
    "ISC LICENSE",
    "BOOST SOFTWARE LICENSE",
    "THE UNLICENSE",
    "CREATIVE COMMONS",
    "EUROPEAN UNION PUBLIC",
    "OPEN SOFTWARE LICENSE",
    "ARTISTIC LICENSE",
    "ZLIB LICENSE",
    "DO WHAT THE FUCK YOU WANT",
)

_RANGE_RE = re.compile(r"^(\d+)(?:-(\d+))?$")


def detect_project_type(root: Path) -> ProjectType:
    """Open source when a root LICENSE file names a well-known OSS licence."""
    for name in LICENSE_FILES:
        try:
            text = (root / name).read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        upper = text.upper()
        if any(marker in upper for marker in OSS_LICENSE_MARKERS):
            return ProjectType.OPEN_SOURCE
    return ProjectType.INTERNAL


def parse_check_ids(spec: str) -> CheckIdRanges:
    """Parse ``"1-13,20"`` into inclusive check-ID ranges.

    Raises:
        ConfigError: on empty parts, non-numeric values or reversed ranges.
    """
    ranges: list[tuple[int, int]] = []
    for part in spec.split(","):
        part = part.strip()
        match = _RANGE_RE.match(part)
        if match is None:
            raise ConfigError(f"Invalid check ID or range: '{part}'")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start
        if end < start:
            raise ConfigError(f"Invalid check range '{part}': start is greater than end")
        ranges.append((start, end))
    return CheckIdRanges(tuple(ranges))


def _summarize(results: list[CheckEntry]) -> ScanSummary:
    passed = sum(1 for r in results if isinstance(r.result, Pass))
    failed = sum(1 for r in results if isinstance(r.result, Fail))
    skipped = sum(1 for r in results if isinstance(r.result, Skip))
    return ScanSummary(total=len(results), passed=passed, failed=failed, skipped=skipped)


def scan(root: Path, config: ScanConfig | None = None) -> ScanReport:
    """Run the configured rule set against the project under root.

    Raises:
        PathError: root does not exist or is not a directory.
        ConfigError: the rule set cannot be read, parsed or resolved.
    """
    config = config or ScanConfig()
    if not root.exists():
        raise PathError(f"Path '{root}' does not exist")
    if not root.is_dir():
        raise PathError(f"Path '{root}' is not a directory")
    root = root.resolve()

    project_type = config.project_type or detect_project_type(root)
    checks = build_registry(load_rules(config.rules_path))
    ctx = ScanContext(
        root=root,
        files=tuple(scan_files(root)),
        project_type=project_type,
        project_scope=config.project_scope,
    )
    logger.debug(
        f"Scanning {root} ({len(ctx.files)} files, {project_type}, scope {config.project_scope})"
    )

    results: list[CheckEntry] = []
    for check in checks:
        rule = check.rule
        if config.checks is not None and rule.id not in config.checks:
            continue
        if rule.project_type is not None and rule.project_type != project_type:
            result = Skip(
                reason=f"Skipped: requires {rule.project_type} project (detected {project_type})"
            )
        elif rule.scope is not None and not config.project_scope.includes(rule.scope):
            result = Skip(
                reason=f"Skipped: requires {rule.scope} scope "
                f"(configured {config.project_scope})"
            )
        else:
            try:
                result = check.run(ctx)
            except Exception as e:
                logger.exception(f"Check {rule.id} ({rule.description}) raised")
                result = Fail(
                    violations=[
                        Violation(
                            check_id=rule.id,
                            message=f"Check raised {type(e).__name__}: {e}",
                            severity=rule.severity,
                        )
                    ]
                )
        logger.debug(f"Check {rule.id}: {result.status}")
        results.append(
            CheckEntry(
                id=rule.id,
                category=rule.category,
                description=rule.description,
                severity=rule.severity,
                result=result,
            )
        )

    return ScanReport(
        tool=TOOL_NAME,
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
        project_root=str(root),
        project_type=project_type,
        project_scope=config.project_scope,
        results=results,
        summary=_summarize(results),
    )

