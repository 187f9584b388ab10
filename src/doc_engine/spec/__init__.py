"""Spec subsystem: discovery, parsing, validation and cross-referencing of spec documents."""

from doc_engine.spec.cross_ref import cross_reference, resolve_reference
from doc_engine.spec.discovery import classify, discover_in, discover_specs, feature_stem
from doc_engine.spec.markdown_gen import generate_markdown, write_markdown
from doc_engine.spec.models import (
    CrossRefEntry,
    CrossRefReport,
    DiscoveredSpec,
    ParsedSpec,
    SpecDiagnostic,
    SpecFormat,
    SpecKind,
    SpecValidationReport,
)
from doc_engine.spec.parser import parse_corpus, parse_markdown_spec, parse_spec, parse_yaml_spec
from doc_engine.spec.validator import find_duplicate_ids, validate_spec, validate_specs

__all__ = [
    "CrossRefEntry",
    "CrossRefReport",
    "DiscoveredSpec",
    "ParsedSpec",
    "SpecDiagnostic",
    "SpecFormat",
    "SpecKind",
    "SpecValidationReport",
    "classify",
    "cross_reference",
    "discover_in",
    "discover_specs",
    "feature_stem",
    "find_duplicate_ids",
    "generate_markdown",
    "parse_corpus",
    "parse_markdown_spec",
    "parse_spec",
    "parse_yaml_spec",
    "resolve_reference",
    "validate_spec",
    "validate_specs",
    "write_markdown",
]
