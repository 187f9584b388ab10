"""Builtin check handlers, registered by the name rules refer to them with."""

from __future__ import annotations

from doc_engine.handlers.adr import AdrIndexCompleteness, AdrNaming
from doc_engine.handlers.base import BuiltinCheck
from doc_engine.handlers.content import (
    GlossaryAcronyms,
    GlossaryAlphabetized,
    GlossaryFormat,
    ReadmeLineCount,
    TldrConditional,
)
from doc_engine.handlers.cross_ref import LinkResolution
from doc_engine.handlers.naming import GuideNaming, SnakeLowerCase, TestingFilePlacement
from doc_engine.handlers.navigation import HubLinksPhases, NoDeepLinks, W3hHub
from doc_engine.handlers.requirements import Srs29148Attributes
from doc_engine.handlers.spec import (
    SpecBrdExists,
    SpecDependenciesResolve,
    SpecDomainCoverage,
    SpecIdFormat,
    SpecInventoryAccuracy,
    SpecLinksResolve,
    SpecNamingConvention,
    SpecNoDuplicateIds,
    SpecSchemaValid,
    SpecStemConsistency,
    SpecTestCoverage,
    SpecTestTraceability,
)
from doc_engine.handlers.structure import (
    ChecklistCompleteness,
    ModuleDocsPlural,
    OpenSourceCommunityFiles,
    OpenSourceGithubTemplates,
    SdlcPhaseNumbering,
    TemplatesPopulated,
)
from doc_engine.handlers.traceability import (
    BacklogTracesRequirements,
    DesignTracesRequirements,
    PhaseArtifactPresence,
    PlanTracesDesign,
)

HANDLERS: dict[str, type[BuiltinCheck]] = {
    # structure
    "module_docs_plural": ModuleDocsPlural,
    "sdlc_phase_numbering": SdlcPhaseNumbering,
    "checklist_completeness": ChecklistCompleteness,
    "open_source_community_files": OpenSourceCommunityFiles,
    "open_source_github_templates": OpenSourceGithubTemplates,
    "templates_populated": TemplatesPopulated,
    # naming
    "snake_lower_case": SnakeLowerCase,
    "guide_naming": GuideNaming,
    "testing_file_placement": TestingFilePlacement,
    # content
    "tldr_conditional": TldrConditional,
    "glossary_format": GlossaryFormat,
    "glossary_alphabetized": GlossaryAlphabetized,
    "glossary_acronyms": GlossaryAcronyms,
    "readme_line_count": ReadmeLineCount,
    # navigation
    "w3h_hub": W3hHub,
    "hub_links_phases": HubLinksPhases,
    "no_deep_links": NoDeepLinks,
    # cross-reference
    "link_resolution": LinkResolution,
    # adr
    "adr_naming": AdrNaming,
    "adr_index_completeness": AdrIndexCompleteness,
    # traceability
    "phase_artifact_presence": PhaseArtifactPresence,
    "design_traces_requirements": DesignTracesRequirements,
    "plan_traces_design": PlanTracesDesign,
    "backlog_traces_requirements": BacklogTracesRequirements,
    # requirements
    "srs_29148_attributes": Srs29148Attributes,
    # spec-aware
    "spec_brd_exists": SpecBrdExists,
    "spec_domain_coverage": SpecDomainCoverage,
    "spec_schema_valid": SpecSchemaValid,
    "spec_id_format": SpecIdFormat,
    "spec_no_duplicate_ids": SpecNoDuplicateIds,
    "spec_test_coverage": SpecTestCoverage,
    "spec_dependencies_resolve": SpecDependenciesResolve,
    "spec_inventory_accuracy": SpecInventoryAccuracy,
    "spec_links_resolve": SpecLinksResolve,
    "spec_test_traceability": SpecTestTraceability,
    "spec_naming_convention": SpecNamingConvention,
    "spec_stem_consistency": SpecStemConsistency,
}


def get_handler(name: str) -> type[BuiltinCheck] | None:
    return HANDLERS.get(name)


__all__ = ["HANDLERS", "BuiltinCheck", "get_handler"]
