"""Base class for name-registered builtin checks."""

from __future__ import annotations

from typing import ClassVar

from doc_engine.rule_engine.models import (
    CheckResult,
    Fail,
    Pass,
    RuleDef,
    ScanContext,
    Severity,
    Violation,
)


class BuiltinCheck:
    """A check whose logic lives in code; the RuleDef supplies its identity.

    Handlers that cover several related checks list them in ``VARIANTS``
    (rule id -> variant name). A rule id not in the table runs
    ``DEFAULT_VARIANT``.
    """

    VARIANTS: ClassVar[dict[int, str]] = {}
    DEFAULT_VARIANT: ClassVar[str] = ""

    def __init__(self, rule: RuleDef) -> None:
        self.rule = rule

    @property
    def id(self) -> int:
        return self.rule.id

    @property
    def category(self) -> str:
        return self.rule.category

    @property
    def description(self) -> str:
        return self.rule.description

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def variant(self) -> str:
        return self.VARIANTS.get(self.rule.id, self.DEFAULT_VARIANT)

    def run(self, ctx: ScanContext) -> CheckResult:
        raise NotImplementedError

    def violation(self, path: str | None, message: str) -> Violation:
        return Violation(
            check_id=self.rule.id, path=path, message=message, severity=self.rule.severity
        )

    @staticmethod
    def verdict(violations: list[Violation]) -> CheckResult:
        return Fail(violations=violations) if violations else Pass()
