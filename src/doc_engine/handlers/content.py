"""Content checks: TLDR placement, glossary format and README length."""

from __future__ import annotations

import re

from doc_engine.handlers.base import BuiltinCheck
from doc_engine.rule_engine.models import CheckResult, Pass, ScanContext, Skip, Violation

GLOSSARY_PATH = "docs/glossary.md"
_TLDR_RE = re.compile(r"\*\*TLDR\*\*|## TLDR|## TL;DR", re.IGNORECASE)
_TLDR_THRESHOLD = 200
_README_MAX_LINES = 100

_TERM_RE = re.compile(r"^\*\*([^*]+)\*\*")
_DEFINITION_RE = re.compile(r"^\*\*[^*]+\*\*\s*[-—–:]\s+\S")
_TERM_WITH_DEFINITION_RE = re.compile(r"^\*\*([^*]+)\*\*\s*[-—–:]\s*(.*)")
_ACRONYM_RE = re.compile(r"^[A-Z]{2,}$")


def _read_glossary(ctx: ScanContext) -> str | Skip:
    if not (ctx.root / GLOSSARY_PATH).is_file():
        return Skip(reason=f"{GLOSSARY_PATH} not found")
    content = ctx.read_text(GLOSSARY_PATH)
    if content is None:
        return Skip(reason="Cannot read glossary")
    return content


class TldrConditional(BuiltinCheck):
    """Long documents carry a TLDR; short ones don't need one."""

    VARIANTS = {35: "required", 36: "unnecessary"}
    DEFAULT_VARIANT = "required"

    def run(self, ctx: ScanContext) -> CheckResult:
        docs_files = ctx.files_under("docs/", ".md")
        if not docs_files:
            return Skip(reason="No .md files in docs/")

        violations: list[Violation] = []
        for rel in docs_files:
            content = ctx.read_text(rel)
            if content is None:
                continue
            lines = len(content.splitlines())
            has_tldr = bool(_TLDR_RE.search(content))
            if self.variant == "required" and lines >= _TLDR_THRESHOLD and not has_tldr:
                violations.append(
                    self.violation(rel, f"File has {lines} lines but no TLDR section")
                )
            elif self.variant == "unnecessary" and lines < _TLDR_THRESHOLD and has_tldr:
                violations.append(
                    self.violation(
                        rel, f"File has only {lines} lines but has a TLDR section (unnecessary)"
                    )
                )
        return self.verdict(violations)


class GlossaryFormat(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        content = _read_glossary(ctx)
        if isinstance(content, Skip):
            return content
        violations: list[Violation] = []
        for lineno, raw in enumerate(content.splitlines(), 1):
            line = raw.strip()
            if _TERM_RE.match(line) and not _DEFINITION_RE.match(line):
                violations.append(
                    self.violation(
                        GLOSSARY_PATH,
                        f"Line {lineno}: Term definition doesn't follow "
                        "'**Term** - Definition' format",
                    )
                )
        return self.verdict(violations)


class GlossaryAlphabetized(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        content = _read_glossary(ctx)
        if isinstance(content, Skip):
            return content
        terms = [
            m.group(1).lower()
            for m in (_TERM_RE.match(line.strip()) for line in content.splitlines())
            if m
        ]
        return self.verdict(
            [
                self.violation(GLOSSARY_PATH, f"Term '{term}' should come before '{prev}'")
                for prev, term in zip(terms, terms[1:])
                if term < prev
            ]
        )


class GlossaryAcronyms(BuiltinCheck):
    """Acronym entries must expand the acronym in their definition."""

    def run(self, ctx: ScanContext) -> CheckResult:
        content = _read_glossary(ctx)
        if isinstance(content, Skip):
            return content
        violations: list[Violation] = []
        for lineno, raw in enumerate(content.splitlines(), 1):
            match = _TERM_WITH_DEFINITION_RE.match(raw.strip())
            if not match:
                continue
            term, definition = match.group(1), match.group(2)
            if not _ACRONYM_RE.match(term):
                continue
            if not any(ch.islower() for ch in definition):
                violations.append(
                    self.violation(
                        GLOSSARY_PATH,
                        f"Line {lineno}: Acronym '{term}' lacks expansion in definition",
                    )
                )
        return self.verdict(violations)


class ReadmeLineCount(BuiltinCheck):
    def run(self, ctx: ScanContext) -> CheckResult:
        if not (ctx.root / "README.md").is_file():
            return Skip(reason="README.md not found")
        content = ctx.read_text("README.md")
        if content is None:
            return Skip(reason="Cannot read README.md")
        lines = len(content.splitlines())
        if lines <= _README_MAX_LINES:
            return Pass()
        return self.verdict(
            [
                self.violation(
                    "README.md",
                    f"README.md has {lines} lines; should be under {_README_MAX_LINES} lines",
                )
            ]
        )
