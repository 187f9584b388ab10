"""Tests for spec discovery and the dual-format parser."""

from pathlib import Path

import pytest


class TestClassify:
    @pytest.mark.parametrize(
        ("path", "fmt", "kind", "stem"),
        [
            ("docs/a/auth.spec.yaml", "yaml", "feature_request", "auth"),
            ("docs/a/auth.arch.yaml", "yaml", "architecture", "auth"),
            ("docs/a/auth.test.yaml", "yaml", "test_plan", "auth"),
            ("docs/a/auth.deploy.yaml", "yaml", "deployment", "auth"),
            ("docs/a/auth.spec", "markdown", "feature_request", "auth"),
            ("docs/a/auth.test", "markdown", "test_plan", "auth"),
            ("docs/brd.spec.yaml", "yaml", "brd", "brd"),
            ("docs/brd.spec", "markdown", "brd", "brd"),
        ],
    )
    def test_suffix_table(self, path, fmt, kind, stem):
        from doc_engine.spec.discovery import classify

        spec = classify(path)
        assert spec is not None
        assert (spec.format, spec.kind, spec.stem) == (fmt, kind, stem)

    @pytest.mark.parametrize(
        "path", ["docs/a.md", "docs/a.yaml", "docs/.spec", "docs/a/a.manual.exec"]
    )
    def test_non_spec_files(self, path):
        from doc_engine.spec.discovery import classify

        assert classify(path) is None

    def test_feature_stem_is_format_independent(self):
        from doc_engine.spec.discovery import feature_stem

        assert feature_stem("auth.spec.yaml") == feature_stem("auth.spec") == "auth"
        assert feature_stem("notes.md") == "notes.md"

    def test_discover_specs_sorted(self):
        from doc_engine.spec.discovery import discover_specs

        found = discover_specs(["z/z.spec", "README.md", "a/a.test.yaml"])
        assert [s.path for s in found] == ["a/a.test.yaml", "z/z.spec"]


class TestParseYaml:
    def test_feature_request(self):
        from doc_engine.spec.models import FeatureRequestSpec, SpecKind
        from doc_engine.spec.parser import parse_yaml_spec
        from tests.conftest import TYPED_FEATURE

        doc = parse_yaml_spec(TYPED_FEATURE, "a.spec.yaml", SpecKind.FEATURE_REQUEST)
        assert isinstance(doc, FeatureRequestSpec)
        assert doc.id == "AUTH-001"
        assert doc.schema_version == "1.0"
        assert doc.defined_ids() == {"AUTH-001", "REQ-001", "REQ-002"}

    def test_unknown_fields_preserved(self):
        from doc_engine.spec.models import SpecKind
        from doc_engine.spec.parser import parse_yaml_spec
        from tests.conftest import TYPED_FEATURE

        text = TYPED_FEATURE + "owner: team-a\n"
        doc = parse_yaml_spec(text, "a.spec.yaml", SpecKind.FEATURE_REQUEST)
        assert doc.model_extra == {"owner": "team-a"}

    def test_verifies_list_or_comma_string(self):
        from doc_engine.spec.models import SpecKind, TestSpec
        from doc_engine.spec.parser import parse_yaml_spec

        text = (
            "kind: test_plan\nspec: X-001\ntestCases:\n"
            "  - id: TC-1\n    verifies: REQ-001, REQ-002\n"
            "  - id: TC-2\n    verifies: [REQ-003]\n"
        )
        doc = parse_yaml_spec(text, "x.test.yaml", SpecKind.TEST_PLAN)
        assert isinstance(doc, TestSpec)
        assert doc.test_cases[0].verified_ids() == ["REQ-001", "REQ-002"]
        assert doc.test_cases[1].verified_ids() == ["REQ-003"]

    def test_spec_ref_alias(self):
        from doc_engine.spec.models import ArchSpec, SpecKind
        from doc_engine.spec.parser import parse_yaml_spec

        text = "kind: architecture\nspecRef: a.spec.yaml\n"
        doc = parse_yaml_spec(text, "a.arch.yaml", SpecKind.ARCHITECTURE)
        assert isinstance(doc, ArchSpec)
        assert doc.spec_ref == "a.spec.yaml"

    @pytest.mark.parametrize(
        ("text", "fragment"),
        [
            ("kind: [oops\n", "YAML parse error"),
            ("- a\n- b\n", "must be a YAML mapping"),
            ("title: x\n", "Missing required field 'kind'"),
            ("kind: roadmap\n", "Unknown kind 'roadmap'"),
            ("kind: test_plan\n", "does not match file extension"),
            ("kind: feature_request\nrequirements: 3\n", "Invalid field 'requirements'"),
        ],
    )
    def test_diagnostics(self, text: str, fragment: str):
        from doc_engine.spec.models import SpecDiagnostic, SpecKind
        from doc_engine.spec.parser import parse_yaml_spec

        result = parse_yaml_spec(text, "a.spec.yaml", SpecKind.FEATURE_REQUEST)
        assert isinstance(result, SpecDiagnostic)
        assert result.file == "a.spec.yaml"
        assert fragment in result.message

    def test_yaml_error_carries_line(self):
        from doc_engine.spec.models import SpecKind
        from doc_engine.spec.parser import parse_yaml_spec

        result = parse_yaml_spec("kind: brd\ntitle: [x\n", "brd.spec.yaml", SpecKind.BRD)
        assert result.line is not None


class TestParseMarkdown:
    def test_feature_metadata_and_ids(self):
        from doc_engine.spec.models import SpecKind
        from doc_engine.spec.parser import parse_markdown_spec
        from tests.conftest import PROSE_FEATURE

        doc = parse_markdown_spec(PROSE_FEATURE, SpecKind.FEATURE_REQUEST)
        assert doc.title == "Feature Spec: Authentication"
        assert doc.id == "AUTH-010"
        assert doc.version == "1.0"
        assert doc.status == "Draft"
        assert doc.defined_ids == ["REQ-101", "REQ-102"]

    def test_spec_link_and_related(self):
        from doc_engine.spec.models import SpecKind
        from doc_engine.spec.parser import parse_markdown_spec
        from tests.conftest import prose_derived

        content = prose_derived(
            "Architecture",
            "../../1-requirements/a/a.spec",
            "\n## Related Documents\n\n- [Test](../../5-testing/a/a.test)\n\n## Other\n\n[x](y)\n",
        )
        doc = parse_markdown_spec(content, SpecKind.ARCHITECTURE)
        assert doc.spec_link.target == "../../1-requirements/a/a.spec"
        assert doc.related_documents == ["../../5-testing/a/a.test"]

    def test_test_plan_verifies_column(self):
        from doc_engine.spec.models import SpecKind
        from doc_engine.spec.parser import parse_markdown_spec

        content = (
            "# Tests\n\n| ID | Test | Verifies |\n|---|---|---|\n"
            "| TC-001 | a \\| b | REQ-101, REQ-102 |\n| TC-002 | c | REQ-103 |\n"
        )
        doc = parse_markdown_spec(content, SpecKind.TEST_PLAN)
        assert doc.verifies == ["REQ-101", "REQ-102", "REQ-103"]

    def test_brd_inventory_links(self):
        from doc_engine.spec.models import SpecKind
        from doc_engine.spec.parser import parse_markdown_spec

        content = "# BRD\n\n| Domain | Spec |\n|---|---|\n| auth | [spec](auth/auth.spec) |\n"
        doc = parse_markdown_spec(content, SpecKind.BRD)
        assert doc.inventory_links == ["auth/auth.spec"]

    def test_parse_tables_escaped_pipe(self):
        from doc_engine.spec.parser import parse_tables

        tables = parse_tables("## Heading\n| A | B |\n|---|---|\n| x \\| y | z |\n")
        assert tables[0].heading == "Heading"
        assert tables[0].rows == [["x | y", "z"]]


class TestParseSpec:
    def test_prose_missing_metadata_is_diagnostic(self, tmp_path: Path):
        from doc_engine.spec.discovery import classify
        from doc_engine.spec.models import SpecDiagnostic
        from doc_engine.spec.parser import parse_spec

        (tmp_path / "a.spec").write_text("# A\n\n**Version:** 1.0\n")
        result = parse_spec(classify("a.spec"), tmp_path)
        assert isinstance(result, SpecDiagnostic)
        assert "**Status:**" in result.message

    def test_brd_yaml_kind_retagged(self, tmp_path: Path):
        from doc_engine.spec.discovery import classify
        from doc_engine.spec.models import ParsedSpec, SpecKind
        from doc_engine.spec.parser import parse_spec

        (tmp_path / "overview.spec.yaml").write_text("kind: brd\ndomains: []\n")
        result = parse_spec(classify("overview.spec.yaml"), tmp_path)
        assert isinstance(result, ParsedSpec)
        assert result.source.kind is SpecKind.BRD

    def test_parse_corpus_splits_results(self, tmp_path: Path):
        from doc_engine.spec.discovery import discover_in
        from doc_engine.spec.parser import parse_corpus
        from tests.conftest import PROSE_FEATURE, TYPED_FEATURE, write_tree

        write_tree(
            tmp_path,
            {
                "a/a.spec.yaml": TYPED_FEATURE,
                "b/b.spec": PROSE_FEATURE,
                "c/c.spec.yaml": "kind: [broken",
            },
        )
        parsed, diagnostics = parse_corpus(tmp_path, discover_in(tmp_path))
        assert [p.path for p in parsed] == ["a/a.spec.yaml", "b/b.spec"]
        assert [d.file for d in diagnostics] == ["c/c.spec.yaml"]
