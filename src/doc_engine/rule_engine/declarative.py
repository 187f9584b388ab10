"""Generic evaluator for the declarative rule kinds."""

from __future__ import annotations

import re
from collections.abc import Callable

from doc_engine.rule_engine.models import (
    CheckResult,
    Fail,
    Pass,
    RuleDef,
    RuleKind,
    ScanContext,
    Severity,
    Skip,
    Violation,
)


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Translate a path glob into an anchored regex.

    ``**/`` matches zero or more directories, ``**`` anything, ``*`` and ``?``
    stay within one path segment.
    """
    parts: list[str] = ["^"]
    i = 0
    while i < len(glob):
        if glob.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif glob.startswith("**", i):
            parts.append(".*")
            i += 2
        elif glob[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif glob[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(glob[i]))
            i += 1
    parts.append("$")
    return re.compile("".join(parts))


def _filename(rel_path: str) -> str:
    return rel_path.rsplit("/", 1)[-1]


class DeclarativeCheck:
    """A check fully described by its RuleDef."""

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

    def run(self, ctx: ScanContext) -> CheckResult:
        runner = _RUNNERS[self.rule.kind]
        try:
            return runner(self, ctx)
        except re.error as e:
            return Skip(reason=f"Invalid pattern in rule {self.rule.id}: {e}")

    def _violation(self, path: str | None, message: str) -> Violation:
        return Violation(
            check_id=self.rule.id, path=path, message=message, severity=self.rule.severity
        )

    def _verdict(self, violations: list[Violation]) -> CheckResult:
        return Fail(violations=violations) if violations else Pass()

    def _pattern(self) -> re.Pattern[str]:
        return re.compile(self.rule.pattern or "", re.MULTILINE)

    def _glob_matches(self, ctx: ScanContext) -> list[str]:
        matcher = glob_to_regex(self.rule.glob or "")
        return [f for f in ctx.files if matcher.match(f)]

    # --- existence ---

    def _file_exists(self, ctx: ScanContext) -> CheckResult:
        path = self.rule.path or ""
        if (ctx.root / path).is_file():
            return Pass()
        return Fail(violations=[self._violation(path, f"File '{path}' does not exist")])

    def _dir_exists(self, ctx: ScanContext) -> CheckResult:
        path = self.rule.path or ""
        if (ctx.root / path).is_dir():
            return Pass()
        return Fail(violations=[self._violation(path, f"Directory '{path}' does not exist")])

    def _dir_not_exists(self, ctx: ScanContext) -> CheckResult:
        path = self.rule.path or ""
        if not (ctx.root / path).is_dir():
            return Pass()
        message = self.rule.message or f"{path} should not exist"
        return Fail(violations=[self._violation(path, message)])

    # --- single file content ---

    def _read_target(self, ctx: ScanContext) -> str | Skip:
        path = self.rule.path or ""
        if not (ctx.root / path).is_file():
            return Skip(reason=f"File '{path}' does not exist")
        content = ctx.read_text(path)
        if content is None:
            return Skip(reason=f"Cannot read '{path}'")
        return content

    def _file_content_matches(self, ctx: ScanContext) -> CheckResult:
        pattern = self._pattern()
        content = self._read_target(ctx)
        if isinstance(content, Skip):
            return content
        if pattern.search(content):
            return Pass()
        path = self.rule.path
        return Fail(
            violations=[
                self._violation(
                    path, f"File '{path}' does not match pattern '{self.rule.pattern}'"
                )
            ]
        )

    def _file_content_not_matches(self, ctx: ScanContext) -> CheckResult:
        pattern = self._pattern()
        content = self._read_target(ctx)
        if isinstance(content, Skip):
            return content
        if not pattern.search(content):
            return Pass()
        path = self.rule.path
        return Fail(
            violations=[
                self._violation(
                    path, f"File '{path}' contains forbidden pattern '{self.rule.pattern}'"
                )
            ]
        )

    # --- glob content ---

    def _glob_content_matches(self, ctx: ScanContext) -> CheckResult:
        pattern = self._pattern()
        violations: list[Violation] = []
        for rel in self._glob_matches(ctx):
            content = ctx.read_text(rel)
            if content is None:
                continue
            if not pattern.search(content):
                violations.append(
                    self._violation(
                        rel, f"File '{rel}' does not contain pattern '{self.rule.pattern}'"
                    )
                )
        return self._verdict(violations)

    def _glob_content_not_matches(self, ctx: ScanContext) -> CheckResult:
        pattern = self._pattern()
        exclude = re.compile(self.rule.exclude_pattern) if self.rule.exclude_pattern else None
        violations: list[Violation] = []
        for rel in self._glob_matches(ctx):
            content = ctx.read_text(rel)
            if content is None:
                continue
            for lineno, line in enumerate(content.splitlines(), 1):
                if not pattern.search(line):
                    continue
                if exclude is not None and exclude.search(line):
                    continue
                violations.append(
                    self._violation(
                        rel,
                        f"File '{rel}' line {lineno} contains forbidden pattern "
                        f"'{self.rule.pattern}'",
                    )
                )
                break
        return self._verdict(violations)

    # --- glob naming ---

    def _glob_naming_matches(self, ctx: ScanContext) -> CheckResult:
        pattern = self._pattern()
        violations = [
            self._violation(
                rel,
                f"Filename '{_filename(rel)}' does not match naming pattern "
                f"'{self.rule.pattern}'",
            )
            for rel in self._glob_matches(ctx)
            if not pattern.search(_filename(rel))
        ]
        return self._verdict(violations)

    def _glob_naming_not_matches(self, ctx: ScanContext) -> CheckResult:
        pattern = self._pattern()
        excluded = tuple(self.rule.exclude_paths)
        violations = [
            self._violation(
                rel,
                f"Filename '{_filename(rel)}' matches forbidden naming pattern "
                f"'{self.rule.pattern}'",
            )
            for rel in self._glob_matches(ctx)
            if not (excluded and rel.startswith(excluded)) and pattern.search(_filename(rel))
        ]
        return self._verdict(violations)


_RUNNERS: dict[RuleKind, Callable[[DeclarativeCheck, ScanContext], CheckResult]] = {
    RuleKind.FILE_EXISTS: DeclarativeCheck._file_exists,
    RuleKind.DIR_EXISTS: DeclarativeCheck._dir_exists,
    RuleKind.DIR_NOT_EXISTS: DeclarativeCheck._dir_not_exists,
    RuleKind.FILE_CONTENT_MATCHES: DeclarativeCheck._file_content_matches,
    RuleKind.FILE_CONTENT_NOT_MATCHES: DeclarativeCheck._file_content_not_matches,
    RuleKind.GLOB_CONTENT_MATCHES: DeclarativeCheck._glob_content_matches,
    RuleKind.GLOB_CONTENT_NOT_MATCHES: DeclarativeCheck._glob_content_not_matches,
    RuleKind.GLOB_NAMING_MATCHES: DeclarativeCheck._glob_naming_matches,
    RuleKind.GLOB_NAMING_NOT_MATCHES: DeclarativeCheck._glob_naming_not_matches,
}
