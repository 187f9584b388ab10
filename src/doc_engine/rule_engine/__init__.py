"""Rule engine: models, file scanner, declarative checks and scan config.

The loader and engine modules import the handler registry and are imported
directly (``doc_engine.rule_engine.engine``).
"""

from doc_engine.rule_engine.config import ScanConfig, load_scan_config
from doc_engine.rule_engine.declarative import DeclarativeCheck, glob_to_regex
from doc_engine.rule_engine.models import (
    CheckEntry,
    CheckResult,
    Fail,
    Pass,
    ProjectScope,
    ProjectType,
    RuleDef,
    RuleKind,
    RuleSet,
    ScanContext,
    ScanReport,
    ScanSummary,
    Severity,
    Skip,
    Violation,
)
from doc_engine.rule_engine.scanner import scan_files

__all__ = [
    "CheckEntry",
    "CheckResult",
    "DeclarativeCheck",
    "Fail",
    "Pass",
    "ProjectScope",
    "ProjectType",
    "RuleDef",
    "RuleKind",
    "RuleSet",
    "ScanConfig",
    "ScanContext",
    "ScanReport",
    "ScanSummary",
    "Severity",
    "Skip",
    "Violation",
    "glob_to_regex",
    "load_scan_config",
    "scan_files",
]
