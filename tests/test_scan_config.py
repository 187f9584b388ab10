"""Tests for rule_engine/config.py: ScanConfig loading with env var overrides."""

from __future__ import annotations

import json
import logging

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DOC_ENGINE_SCOPE", "DOC_ENGINE_TYPE", "DOC_ENGINE_RULES"):
        monkeypatch.delenv(name, raising=False)


class TestScanConfigDefaults:
    def test_defaults(self):
        from doc_engine.rule_engine.config import ScanConfig
        from doc_engine.rule_engine.models import ProjectScope

        cfg = ScanConfig()
        assert cfg.project_type is None
        assert cfg.project_scope is ProjectScope.LARGE
        assert cfg.checks is None
        assert cfg.rules_path is None

    def test_is_dataclass(self):
        import dataclasses

        from doc_engine.rule_engine.config import ScanConfig

        assert dataclasses.is_dataclass(ScanConfig)


class TestLoadScanConfig:
    def test_returns_defaults_when_no_file(self, tmp_path):
        from doc_engine.rule_engine.config import load_scan_config

        cfg = load_scan_config(tmp_path / "nonexistent.json")
        assert cfg.project_type is None
        assert cfg.checks is None

    def test_returns_defaults_for_none_path(self):
        from doc_engine.rule_engine.config import load_scan_config
        from doc_engine.rule_engine.models import ProjectScope

        assert load_scan_config(None).project_scope is ProjectScope.LARGE

    def test_loads_from_scan_section(self, tmp_path):
        from doc_engine.rule_engine.config import load_scan_config
        from doc_engine.rule_engine.models import ProjectScope, ProjectType

        config_file = tmp_path / ".doc-engine.json"
        config_file.write_text(
            json.dumps(
                {
                    "scan": {
                        "scope": "Small",
                        "project_type": "open_source",
                        "rules": "config/rules.toml",
                        "checks": [1, 2, "x", 20],
                    }
                }
            )
        )
        cfg = load_scan_config(config_file)
        assert cfg.project_scope is ProjectScope.SMALL
        assert cfg.project_type is ProjectType.OPEN_SOURCE
        assert cfg.rules_path == tmp_path / "config" / "rules.toml"
        assert cfg.checks == frozenset({1, 2, 20})

    def test_absolute_rules_path_kept(self, tmp_path):
        from doc_engine.rule_engine.config import load_scan_config

        rules = tmp_path / "elsewhere" / "rules.toml"
        config_file = tmp_path / ".doc-engine.json"
        config_file.write_text(json.dumps({"scan": {"rules": str(rules)}}))
        assert load_scan_config(config_file).rules_path == rules

    def test_other_sections_ignored(self, tmp_path):
        from doc_engine.rule_engine.config import load_scan_config

        config_file = tmp_path / ".doc-engine.json"
        config_file.write_text(json.dumps({"scaffold": {"scope": "small"}}))
        cfg = load_scan_config(config_file)
        assert cfg.project_scope == "large"

    def test_invalid_value_warns_and_keeps_default(self, tmp_path, caplog):
        from doc_engine.rule_engine.config import load_scan_config

        config_file = tmp_path / ".doc-engine.json"
        config_file.write_text(json.dumps({"scan": {"scope": "huge"}}))
        with caplog.at_level(logging.WARNING, logger="doc_engine.rule_engine.config"):
            cfg = load_scan_config(config_file)
        assert cfg.project_scope == "large"
        assert "huge" in caplog.text

    def test_invalid_json_returns_defaults(self, tmp_path, caplog):
        from doc_engine.rule_engine.config import load_scan_config

        config_file = tmp_path / ".doc-engine.json"
        config_file.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="doc_engine.rule_engine.config"):
            cfg = load_scan_config(config_file)
        assert cfg.project_scope == "large"
        assert "Ignoring unreadable config" in caplog.text

    def test_empty_file_returns_defaults(self, tmp_path):
        from doc_engine.rule_engine.config import load_scan_config

        config_file = tmp_path / ".doc-engine.json"
        config_file.write_text("  \n")
        assert load_scan_config(config_file).checks is None


class TestEnvOverrides:
    def test_env_overrides_file(self, tmp_path, monkeypatch):
        from doc_engine.rule_engine.config import load_scan_config

        config_file = tmp_path / ".doc-engine.json"
        scan = {"scope": "small", "project_type": "internal"}
        config_file.write_text(json.dumps({"scan": scan}))
        monkeypatch.setenv("DOC_ENGINE_SCOPE", "medium")
        monkeypatch.setenv("DOC_ENGINE_TYPE", "OPEN_SOURCE")
        monkeypatch.setenv("DOC_ENGINE_RULES", "/tmp/custom.toml")
        cfg = load_scan_config(config_file)
        assert cfg.project_scope == "medium"
        assert cfg.project_type == "open_source"
        assert str(cfg.rules_path) == "/tmp/custom.toml"

    def test_invalid_env_value_ignored(self, monkeypatch):
        from doc_engine.rule_engine.config import load_scan_config

        monkeypatch.setenv("DOC_ENGINE_TYPE", "closed")
        assert load_scan_config(None).project_type is None


class TestEnumCoercion:
    def test_returns_member_of_requested_enum(self):
        from doc_engine.rule_engine.config import _enum
        from doc_engine.rule_engine.models import ProjectScope

        assert _enum(ProjectScope, "MEDIUM", ProjectScope.LARGE) is ProjectScope.MEDIUM

    def test_invalid_value_returns_default(self, caplog):
        from doc_engine.rule_engine.config import _enum
        from doc_engine.rule_engine.models import ProjectType

        with caplog.at_level(logging.WARNING):
            assert _enum(ProjectType, "closed", None) is None
        assert "Ignoring invalid ProjectType value 'closed'" in caplog.text
