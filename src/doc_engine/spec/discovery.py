"""Find spec documents of both formats and tag them with kind and feature stem."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from doc_engine.rule_engine.scanner import scan_files
from doc_engine.spec.models import DiscoveredSpec, SpecFormat, SpecKind

BRD_STEM = "brd"

# Longest suffixes first so ``.spec.yaml`` wins over ``.spec``.
SUFFIXES: tuple[tuple[str, SpecFormat, SpecKind], ...] = (
    (".spec.yaml", SpecFormat.YAML, SpecKind.FEATURE_REQUEST),
    (".arch.yaml", SpecFormat.YAML, SpecKind.ARCHITECTURE),
    (".test.yaml", SpecFormat.YAML, SpecKind.TEST_PLAN),
    (".deploy.yaml", SpecFormat.YAML, SpecKind.DEPLOYMENT),
    (".spec", SpecFormat.MARKDOWN, SpecKind.FEATURE_REQUEST),
    (".arch", SpecFormat.MARKDOWN, SpecKind.ARCHITECTURE),
    (".test", SpecFormat.MARKDOWN, SpecKind.TEST_PLAN),
    (".deploy", SpecFormat.MARKDOWN, SpecKind.DEPLOYMENT),
)

# Lifecycle stage suffix per kind, without the format extension.
STAGE_SUFFIX: dict[SpecKind, str] = {
    SpecKind.FEATURE_REQUEST: ".spec",
    SpecKind.ARCHITECTURE: ".arch",
    SpecKind.TEST_PLAN: ".test",
    SpecKind.DEPLOYMENT: ".deploy",
}


def feature_stem(filename: str) -> str:
    """Filename with its lifecycle suffix removed; identical for both formats."""
    for suffix, _, _ in SUFFIXES:
        if filename.endswith(suffix) and len(filename) > len(suffix):
            return filename[: -len(suffix)]
    return filename


def classify(rel_path: str) -> DiscoveredSpec | None:
    filename = rel_path.rsplit("/", 1)[-1]
    for suffix, fmt, kind in SUFFIXES:
        if not filename.endswith(suffix) or len(filename) == len(suffix):
            continue
        stem = filename[: -len(suffix)]
        if kind is SpecKind.FEATURE_REQUEST and stem == BRD_STEM:
            kind = SpecKind.BRD
        return DiscoveredSpec(path=rel_path, format=fmt, kind=kind, stem=stem)
    return None


def discover_specs(files: Iterable[str]) -> list[DiscoveredSpec]:
    """Tag every spec document in a relative file list, in path order."""
    found = (classify(rel) for rel in sorted(files))
    return [spec for spec in found if spec is not None]


def discover_in(root: Path) -> list[DiscoveredSpec]:
    return discover_specs(scan_files(root))
