"""Spec-aware checks over the typed and prose spec corpus.

Every check here skips when the project has no spec documents of either
format, so projects that do not use specs are never penalised.
"""

from __future__ import annotations

import posixpath
import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, ScanContext, Skip, Violation
from doc_engine.scaffold.parser import slugify
from doc_engine.spec import cross_ref
from doc_engine.spec.discovery import BRD_STEM, discover_specs
from doc_engine.spec.models import (
    BrdSpec,
    CrossRefEntry,
    DiscoveredSpec,
    FeatureRequestSpec,
    MarkdownSpec,
    ParsedSpec,
    SpecFormat,
    SpecKind,
    TestSpec,
)
from doc_engine.spec.parser import parse_corpus
from doc_engine.spec.validator import FEATURE_ID_RE, find_duplicate_ids, validate_spec

NO_SPECS_REASON = "No spec documents found"
_STEM_RE = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


class SpecCheck(BuiltinCheck):
    """Base for corpus checks: discovers once per run and skips on an empty corpus."""

    def run(self, ctx: ScanContext) -> CheckResult:
        discovered = discover_specs(ctx.files)
        if not discovered:
            return Skip(reason=NO_SPECS_REASON)
        return self.check(ctx, discovered)

    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        raise NotImplementedError

    def parsed(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> list[ParsedSpec]:
        parsed, _ = parse_corpus(ctx.root, discovered)
        return parsed

    def from_entries(self, entries: list[CrossRefEntry]) -> CheckResult:
        return self.verdict(
            [self.violation(e.file, e.message) for e in entries if not e.passed]
        )


class SpecBrdExists(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        if any(spec.kind is SpecKind.BRD for spec in discovered):
            return self.verdict([])
        return self.verdict(
            [self.violation(None, "Spec documents exist but no brd.spec or brd.spec.yaml found")]
        )


def _brd_domains(parsed: list[ParsedSpec]) -> set[str] | None:
    """Domain slugs listed by any BRD, or None when the corpus has no parsable BRD."""
    slugs: set[str] = set()
    found = False
    for spec in parsed:
        doc = spec.document
        if isinstance(doc, BrdSpec):
            found = True
            for domain in doc.domains or []:
                if domain.slug:
                    slugs.add(domain.slug)
                if domain.name:
                    slugs.add(slugify(domain.name))
        elif isinstance(doc, MarkdownSpec) and doc.kind is SpecKind.BRD:
            found = True
            for target in doc.inventory_links:
                parts = target.split("/")[:-1]
                slugs.update(p for p in parts if p not in ("", ".", ".."))
    return slugs if found else None


class SpecDomainCoverage(SpecCheck):
    """Every feature spec's domain directory is listed in a BRD."""

    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        domains = _brd_domains(self.parsed(ctx, discovered))
        if domains is None:
            return Skip(reason="No parsable BRD to check domain coverage against")
        violations: list[Violation] = []
        for spec in discovered:
            if spec.kind is not SpecKind.FEATURE_REQUEST:
                continue
            domain = posixpath.basename(posixpath.dirname(spec.path)) or spec.stem
            if domain not in domains and spec.stem not in domains:
                violations.append(
                    self.violation(spec.path, f"Domain '{domain}' is not listed in the BRD")
                )
        return self.verdict(violations)


class SpecSchemaValid(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        parsed, diagnostics = parse_corpus(ctx.root, discovered)
        for spec in parsed:
            diagnostics.extend(validate_spec(spec))
        return self.verdict([self.violation(d.file, d.message) for d in diagnostics])


class SpecIdFormat(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        violations: list[Violation] = []
        for spec in self.parsed(ctx, discovered):
            spec_id = spec.top_level_id
            if spec_id and not FEATURE_ID_RE.match(spec_id):
                violations.append(
                    self.violation(
                        spec.path, f"Spec ID '{spec_id}' does not match format [A-Z]+-NNN"
                    )
                )
        return self.verdict(violations)


class SpecNoDuplicateIds(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        duplicates = find_duplicate_ids(self.parsed(ctx, discovered))
        return self.verdict([self.violation(d.file, d.message) for d in duplicates])


class SpecTestCoverage(SpecCheck):
    """Every requirement defined by a feature spec is verified by some test case of its format."""

    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        parsed = self.parsed(ctx, discovered)
        verified: dict[SpecFormat, set[str]] = {SpecFormat.YAML: set(), SpecFormat.MARKDOWN: set()}
        for spec in parsed:
            doc = spec.document
            if isinstance(doc, TestSpec):
                for case in doc.test_cases or []:
                    verified[SpecFormat.YAML].update(case.verified_ids())
            elif isinstance(doc, MarkdownSpec) and doc.kind is SpecKind.TEST_PLAN:
                verified[SpecFormat.MARKDOWN].update(doc.verifies)

        violations: list[Violation] = []
        for spec in parsed:
            doc = spec.document
            if isinstance(doc, FeatureRequestSpec):
                requirement_ids = [req.id for req in doc.requirements or [] if req.id]
            elif isinstance(doc, MarkdownSpec) and doc.kind is SpecKind.FEATURE_REQUEST:
                requirement_ids = list(doc.defined_ids)
            else:
                continue
            pool = verified[spec.source.format]
            violations.extend(
                self.violation(spec.path, f"Requirement {rid} is not verified by any test case")
                for rid in requirement_ids
                if rid not in pool
            )
        return self.verdict(violations)


class SpecDependenciesResolve(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        docs = self.parsed(ctx, discovered)
        return self.from_entries(cross_ref.check_dependencies(ctx.root, docs))


class SpecInventoryAccuracy(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        parsed = self.parsed(ctx, discovered)
        return self.from_entries(cross_ref.check_inventory(ctx.root, parsed, discovered))


class SpecLinksResolve(SpecCheck):
    """Spec back-references and related-document links resolve."""

    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        parsed = self.parsed(ctx, discovered)
        entries = cross_ref.check_arch_trace(ctx.root, parsed)
        entries += cross_ref.check_related(ctx.root, parsed)
        return self.from_entries(entries)


class SpecTestTraceability(SpecCheck):
    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        docs = self.parsed(ctx, discovered)
        return self.from_entries(cross_ref.check_test_trace(ctx.root, docs))


class SpecNamingConvention(SpecCheck):
    """Stems are snake_case and each document sits in a directory named after its stem."""

    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        violations: list[Violation] = []
        for spec in discovered:
            if not _STEM_RE.match(spec.stem):
                violations.append(
                    self.violation(spec.path, f"Spec stem '{spec.stem}' is not snake_case")
                )
            elif spec.kind is not SpecKind.BRD and spec.stem != BRD_STEM:
                parent = posixpath.basename(posixpath.dirname(spec.path))
                if parent != spec.stem:
                    violations.append(
                        self.violation(
                            spec.path,
                            f"Spec '{spec.stem}' should live in a directory named '{spec.stem}'",
                        )
                    )
        return self.verdict(violations)


class SpecStemConsistency(SpecCheck):
    """Architecture, test and deployment documents share the stem of an existing feature spec."""

    def check(self, ctx: ScanContext, discovered: list[DiscoveredSpec]) -> CheckResult:
        features = {spec.stem for spec in discovered if spec.kind is SpecKind.FEATURE_REQUEST}
        return self.verdict(
            [
                self.violation(
                    spec.path, f"No feature spec with stem '{spec.stem}' for this {spec.kind}"
                )
                for spec in discovered
                if spec.kind in cross_ref.CHAIN_STAGES and spec.stem not in features
            ]
        )
