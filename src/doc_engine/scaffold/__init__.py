"""SRS-to-artifact scaffolding."""

from doc_engine.scaffold.generator import scaffold_from_srs
from doc_engine.scaffold.models import (
    Phase,
    RequirementKind,
    ScaffoldConfig,
    ScaffoldResult,
    SrsDomain,
    SrsRequirement,
)
from doc_engine.scaffold.parser import parse_srs, slugify

__all__ = [
    "Phase",
    "RequirementKind",
    "ScaffoldConfig",
    "ScaffoldResult",
    "SrsDomain",
    "SrsRequirement",
    "parse_srs",
    "scaffold_from_srs",
    "slugify",
]
