"""Rule document parsing and check registry construction."""

from __future__ import annotations

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import ValidationError

from doc_engine.errors import ConfigError
from doc_engine.handlers import HANDLERS, BuiltinCheck
from doc_engine.rule_engine.declarative import DeclarativeCheck
from doc_engine.rule_engine.models import REQUIRED_FIELDS, RuleDef, RuleKind, RuleSet

logger = logging.getLogger(__name__)

Check = DeclarativeCheck | BuiltinCheck

_BASE_FIELDS = ("id", "category", "description", "severity", "type")


@cache
def default_rules_text() -> str:
    """The embedded rule set, read once per process."""
    pkg = resources.files("doc_engine.rule_engine")
    return pkg.joinpath("rules.toml").read_text(encoding="utf-8")


def _rule_label(index: int, raw: dict[str, object]) -> str:
    rule_id = raw.get("id")
    return f"Rule {rule_id}" if rule_id is not None else f"Rule #{index + 1}"


def _parse_rule(index: int, raw: object) -> RuleDef:
    if not isinstance(raw, dict):
        raise ConfigError(f"Rule #{index + 1}: expected a table")
    label = _rule_label(index, raw)

    for name in _BASE_FIELDS:
        if name not in raw:
            raise ConfigError(f"{label}: missing required field '{name}'")

    try:
        kind = RuleKind(raw["type"])
    except ValueError:
        raise ConfigError(f"{label}: unknown type '{raw['type']}'") from None

    for name in REQUIRED_FIELDS[kind]:
        if not raw.get(name):
            raise ConfigError(f"{label}: {kind} requires '{name}'")

    data = {k: v for k, v in raw.items() if k != "type"}
    data["kind"] = kind
    try:
        return RuleDef.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first["loc"]) or "rule"
        raise ConfigError(f"{label}: invalid field '{loc}': {first['msg']}") from e


def parse_rules(text: str) -> RuleSet:
    """Parse a TOML rule document into a RuleSet.

    Raises:
        ConfigError: on TOML syntax errors (message carries tomllib's line and
            column), missing or mistyped fields, unknown kinds and duplicate IDs.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"TOML parse error: {e}") from e

    raw_rules = data.get("rules")
    if not isinstance(raw_rules, list):
        raise ConfigError("Rule document must contain a top-level [[rules]] array")

    rules: list[RuleDef] = []
    seen: set[int] = set()
    for index, raw in enumerate(raw_rules):
        rule = _parse_rule(index, raw)
        if rule.id in seen:
            raise ConfigError(f"Rule {rule.id}: duplicate id")
        seen.add(rule.id)
        rules.append(rule)
    return RuleSet(rules=rules)


def build_registry(rules: RuleSet) -> list[Check]:
    """One check instance per rule, ascending by ID.

    Every builtin handler name is resolved here so that an unknown name fails
    the whole load before any check runs.
    """
    checks: list[Check] = []
    for rule in sorted(rules.rules, key=lambda r: r.id):
        if rule.kind is RuleKind.BUILTIN:
            handler = HANDLERS.get(rule.handler or "")
            if handler is None:
                raise ConfigError(f"Rule {rule.id}: unknown builtin handler '{rule.handler}'")
            checks.append(handler(rule))
        else:
            checks.append(DeclarativeCheck(rule))
    return checks


def load_rules(path: Path | None = None) -> RuleSet:
    """Parse an external rule file, or the embedded defaults when path is None.

    An external file fully replaces the defaults.
    """
    if path is None:
        text = default_rules_text()
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read rules file '{path}': {e}") from e
    rules = parse_rules(text)
    logger.debug(f"Loaded {len(rules.rules)} rules from {path or 'embedded defaults'}")
    return rules
