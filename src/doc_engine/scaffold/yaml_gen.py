"""Typed (YAML) artifacts emitted per SRS domain."""

from __future__ import annotations

from typing import Any

import yaml

from doc_engine.scaffold.models import SrsDomain

SCHEMA_VERSION = "1.0"
DEFAULT_PRIORITY = "Must"
DEFAULT_VERIFICATION = "Test"


def spec_id(index: int) -> str:
    return f"SPEC-{index:03}"


def req_id(index: int) -> str:
    return f"REQ-{index:03}"


def spec_path(slug: str, yaml_suffix: bool = True) -> str:
    suffix = ".spec.yaml" if yaml_suffix else ".spec"
    return f"docs/1-requirements/{slug}/{slug}{suffix}"


def _dump(data: dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


def _domain_priority(domain: SrsDomain) -> str:
    for req in domain.requirements:
        if req.priority:
            return req.priority
    return DEFAULT_PRIORITY


def feature_yaml(domain: SrsDomain, index: int) -> str:
    requirements = []
    for n, req in enumerate(domain.requirements, start=1):
        entry: dict[str, Any] = {
            "id": req_id(n),
            "sourceId": req.id,
            "title": req.title,
            "priority": req.priority or DEFAULT_PRIORITY,
            "status": req.state or "Draft",
            "verification": req.verification or DEFAULT_VERIFICATION,
        }
        if req.acceptance:
            entry["acceptance"] = req.acceptance
        requirements.append(entry)
    return _dump(
        {
            "kind": "feature_request",
            "schemaVersion": SCHEMA_VERSION,
            "title": domain.title,
            "id": spec_id(index),
            "status": "Draft",
            "priority": _domain_priority(domain),
            "domain": domain.slug,
            "section": domain.section,
            "requirements": requirements,
        }
    )


def _derived(kind: str, domain: SrsDomain, index: int) -> dict[str, Any]:
    return {
        "kind": kind,
        "schemaVersion": SCHEMA_VERSION,
        "title": domain.title,
        "spec": spec_id(index),
        "specRef": spec_path(domain.slug),
    }


def arch_yaml(domain: SrsDomain, index: int) -> str:
    data = _derived("architecture", domain, index)
    data["components"] = [
        {
            "name": f"{req.id} handler",
            "tracesTo": req.traces_to,
            "description": req.description.splitlines()[0] if req.description else req.title,
        }
        for req in domain.requirements
        if req.traces_to
    ]
    return _dump(data)


def test_plan_yaml(domain: SrsDomain, index: int) -> str:
    data = _derived("test_plan", domain, index)
    data["testCases"] = [
        {
            "id": f"TC-{n:03}",
            "test": f"{req.id}: {req.title} ({req.verification or DEFAULT_VERIFICATION})",
            "verifies": req_id(n),
            "priority": req.priority or DEFAULT_PRIORITY,
        }
        for n, req in enumerate(domain.requirements, start=1)
    ]
    return _dump(data)


def deploy_yaml(domain: SrsDomain, index: int) -> str:
    data = _derived("deployment", domain, index)
    data["environments"] = [
        {"name": "staging", "description": f"Staging environment for {domain.title} validation"},
        {"name": "production", "description": f"Production environment for {domain.title}"},
    ]
    return _dump(data)


def brd_yaml(domains: list[SrsDomain]) -> str:
    return _dump(
        {
            "kind": "brd",
            "schemaVersion": SCHEMA_VERSION,
            "title": "Business Requirements Document",
            "domains": [
                {
                    "name": domain.title,
                    "slug": domain.slug,
                    "section": domain.section,
                    "specCount": 1,
                    "specs": [{"file": spec_path(domain.slug)}],
                }
                for domain in domains
            ],
        }
    )

