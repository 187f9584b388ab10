"""Shared fixtures for doc-engine tests."""

from pathlib import Path

import pytest

SAMPLE_SRS = """\
# Software Requirements Specification

## 4. Requirements

### 4.1 Rule Loading

#### FR-001: Parse rule documents

| Attribute | Value |
|-----------|-------|
| **Priority** | Must |
| **State** | Approved |
| **Verification** | Demonstration |
| **Traces to** | STK-01 -> core/loader.py (parse_rules) |
| **Acceptance** | `doc-engine scan .` reports every rule |

Rules are read from a TOML document.

#### NFR-002: Load quickly

| **Priority** | Should |
| **Verification** | Analysis |

Loading completes within one second.

### 4.2 CI/CD & Deployment

#### FR-010: Ship releases

| **Priority** | Could |
| **Verification** | Inspection |
| **Traces to** | STK-04 -> ci/release.yml |

### 4.3 Empty Section

Nothing to see here.
"""


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (and their parent directories) under root."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


def make_context(root: Path, **kwargs):
    from doc_engine.rule_engine.models import ScanContext
    from doc_engine.rule_engine.scanner import scan_files

    return ScanContext(root=root, files=tuple(scan_files(root)), **kwargs)


def make_rule(rule_id: int = 1, kind: str = "file_exists", **fields):
    from doc_engine.rule_engine.models import RuleDef, RuleKind

    return RuleDef(
        id=rule_id,
        category=fields.pop("category", "test"),
        description=fields.pop("description", f"rule {rule_id}"),
        severity=fields.pop("severity", "error"),
        kind=RuleKind(kind),
        **fields,
    )


def run_handler(name: str, rule_id: int, root: Path, **ctx_kwargs):
    """Instantiate the named builtin for rule_id and run it against root."""
    from doc_engine.handlers import get_handler

    handler = get_handler(name)
    assert handler is not None, name
    check = handler(make_rule(rule_id, "builtin", handler=name))
    return check.run(make_context(root, **ctx_kwargs))


@pytest.fixture
def srs_file(tmp_path: Path) -> Path:
    path = tmp_path / "requirements.md"
    path.write_text(SAMPLE_SRS, encoding="utf-8")
    return path


@pytest.fixture
def docs_project(tmp_path: Path) -> Path:
    """A small project that satisfies the common structural rules."""
    return write_tree(
        tmp_path / "project",
        {
            "README.md": "# Project\n\nOwner: docs team\n\nSee [docs](docs/README.md).\n",
            "CHANGELOG.md": "# Changelog\n",
            "docs/README.md": (
                "# Docs hub\n\n## Who\n\n## What\n\n## Why\n\n## How\n\n"
                "- [1-requirements](1-requirements/requirements.md)\n"
                "- [3-design](3-design/architecture.md)\n"
            ),
            "docs/1-requirements/requirements.md": "# Requirements\n\n- FR-001 load rules\n",
            "docs/3-design/architecture.md": "# Architecture\n\nImplements FR-001.\n",
        },
    )


TYPED_FEATURE = """\
kind: feature_request
schemaVersion: "1.0"
title: Authentication
id: AUTH-001
status: Draft
priority: Must
requirements:
  - id: REQ-001
    title: Login
  - id: REQ-002
    title: Logout
"""

TYPED_TEST = """\
kind: test_plan
schemaVersion: "1.0"
title: Authentication tests
spec: AUTH-001
testCases:
  - id: TC-001
    verifies: REQ-001
  - id: TC-002
    verifies: REQ-002
"""

PROSE_FEATURE = """\
# Feature Spec: Authentication

**ID:** AUTH-010
**Version:** 1.0
**Status:** Draft

## Requirements

| ID | Title |
|----|-------|
| REQ-101 | Login |
| REQ-102 | Logout |
"""


def prose_derived(title: str, spec_target: str, extra: str = "") -> str:
    return (
        f"# {title}\n\n**Version:** 1.0\n**Status:** Draft\n"
        f"**Spec:** [spec]({spec_target})\n{extra}"
    )
