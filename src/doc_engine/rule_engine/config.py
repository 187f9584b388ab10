"""ScanConfig dataclass and loader for scan settings."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Container
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TypeVar

from doc_engine.rule_engine.models import ProjectScope, ProjectType

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".doc-engine.json"

_E = TypeVar("_E", bound=StrEnum)
_D = TypeVar("_D")


@dataclass(frozen=True)
class CheckIdRanges:
    """Inclusive ``(start, end)`` check-ID ranges; membership never expands them."""

    ranges: tuple[tuple[int, int], ...]

    def __contains__(self, check_id: object) -> bool:
        if not isinstance(check_id, int):
            return False
        return any(start <= check_id <= end for start, end in self.ranges)


@dataclass
class ScanConfig:
    project_type: ProjectType | None = None
    project_scope: ProjectScope = ProjectScope.LARGE
    checks: Container[int] | None = None
    rules_path: Path | None = None


def load_scan_config(path: Path | None = None) -> ScanConfig:
    """Load scan config from the ``scan`` section of .doc-engine.json, then env overrides."""
    config = ScanConfig()
    if path and path.exists():
        try:
            text = path.read_text(encoding="utf-8")
            if text.strip():
                data = json.loads(text)
                section = data.get("scan", {}) if isinstance(data, dict) else {}
                if isinstance(section, dict):
                    _apply(config, section, base=path.parent)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")

    if env_val := os.environ.get("DOC_ENGINE_SCOPE"):
        config.project_scope = _enum(ProjectScope, env_val, config.project_scope)
    if env_val := os.environ.get("DOC_ENGINE_TYPE"):
        config.project_type = _enum(ProjectType, env_val, config.project_type)
    if env_val := os.environ.get("DOC_ENGINE_RULES"):
        config.rules_path = Path(env_val)
    return config


def _enum(enum_cls: type[_E], value: object, default: _D) -> _E | _D:
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        logger.warning(f"Ignoring invalid {enum_cls.__name__} value {value!r}")
        return default


def _apply(cfg: ScanConfig, data: dict[str, object], base: Path) -> None:
    if "scope" in data:
        cfg.project_scope = _enum(ProjectScope, data["scope"], cfg.project_scope)
    if "project_type" in data:
        cfg.project_type = _enum(ProjectType, data["project_type"], cfg.project_type)
    if "rules" in data and isinstance(data["rules"], str):
        rules = Path(data["rules"])
        cfg.rules_path = rules if rules.is_absolute() else base / rules
    if "checks" in data and isinstance(data["checks"], list):
        cfg.checks = frozenset(c for c in data["checks"] if isinstance(c, int))
