"""Turn an SRS document into per-domain SDLC artifact files."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from doc_engine import TOOL_NAME, __version__
from doc_engine.errors import ConfigError, PathError
from doc_engine.scaffold import markdown_gen, yaml_gen
from doc_engine.scaffold.models import Phase, ScaffoldConfig, ScaffoldResult, SrsDomain
from doc_engine.scaffold.parser import parse_srs

logger = logging.getLogger(__name__)

# (phase, directory, suffix, renderer) per domain artifact, in emission order.
_DomainRenderer = Callable[[SrsDomain, int], str]
_ARTIFACTS: tuple[tuple[Phase, str, str, _DomainRenderer], ...] = (
    (Phase.REQUIREMENTS, "1-requirements", ".spec.yaml", yaml_gen.feature_yaml),
    (Phase.REQUIREMENTS, "1-requirements", ".spec", lambda d, _: markdown_gen.feature_md(d)),
    (Phase.DESIGN, "3-design", ".arch.yaml", yaml_gen.arch_yaml),
    (Phase.DESIGN, "3-design", ".arch", lambda d, _: markdown_gen.arch_md(d)),
    (Phase.TESTING, "5-testing", ".test.yaml", yaml_gen.test_plan_yaml),
    (Phase.TESTING, "5-testing", ".test", lambda d, _: markdown_gen.test_plan_md(d)),
    (Phase.TESTING, "5-testing", ".manual.exec", lambda d, _: markdown_gen.manual_exec_md(d)),
    (Phase.TESTING, "5-testing", ".auto.exec", lambda d, _: markdown_gen.auto_exec_md(d)),
    (Phase.DEPLOYMENT, "6-deployment", ".deploy.yaml", yaml_gen.deploy_yaml),
    (Phase.DEPLOYMENT, "6-deployment", ".deploy", lambda d, _: markdown_gen.deploy_md(d)),
)


def write_file(output_dir: Path, rel_path: str, content: str, result: ScaffoldResult) -> None:
    """Write one artifact unless it exists and force is off; record the outcome."""
    target = output_dir / rel_path
    if target.exists() and not result.force:
        result.skipped.append(rel_path)
        return
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathError(f"cannot create directory '{target.parent}': {e}") from e
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise PathError(f"cannot write '{target}': {e}") from e
    result.created.append(rel_path)


def _check_unique_slugs(domains: list[SrsDomain]) -> None:
    """Each domain needs its own output directory name."""
    owners: dict[str, SrsDomain] = {}
    for domain in domains:
        if not domain.slug:
            raise ConfigError(
                f"section {domain.section} '{domain.title}' has no letters or digits "
                "to name its domain"
            )
        first = owners.setdefault(domain.slug, domain)
        if first is not domain:
            raise ConfigError(
                f"sections {first.section} and {domain.section} both map to domain "
                f"'{domain.slug}'"
            )


def scaffold_from_srs(config: ScaffoldConfig) -> ScaffoldResult:
    """Emit 10 files per SRS domain plus the BRD pair under ``config.output_dir``.

    Existing files are kept unless ``config.force`` is set. With a phase
    filter only the matching artifacts are emitted, and the BRD pair only
    when ``requirements`` is among them.

    Raises:
        PathError: the SRS cannot be read or an output path cannot be written.
        ConfigError: the SRS contains no domain with at least one requirement,
            or two domains share a slug.
    """
    try:
        content = config.srs_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PathError(f"cannot read SRS file '{config.srs_path}': {e}") from e

    domains = parse_srs(content)
    if not domains:
        raise ConfigError("no domains with requirements found in SRS")
    _check_unique_slugs(domains)

    result = ScaffoldResult(
        tool=TOOL_NAME,
        tool_version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
        srs_source=str(config.srs_path),
        phases=list(config.phases),
        force=config.force,
        domain_count=len(domains),
        requirement_count=sum(len(d.requirements) for d in domains),
    )
    logger.debug(
        f"Scaffolding {result.domain_count} domains ({result.requirement_count} requirements) "
        f"into {config.output_dir}"
    )

    config.output_dir.mkdir(parents=True, exist_ok=True)
    for index, domain in enumerate(domains, start=1):
        for phase, directory, suffix, render in _ARTIFACTS:
            if not config.includes(phase):
                continue
            rel_path = f"docs/{directory}/{domain.slug}/{domain.slug}{suffix}"
            write_file(config.output_dir, rel_path, render(domain, index), result)

    if config.includes(Phase.REQUIREMENTS):
        write_file(
            config.output_dir,
            "docs/1-requirements/brd.spec.yaml",
            yaml_gen.brd_yaml(domains),
            result,
        )
        write_file(
            config.output_dir, "docs/1-requirements/brd.spec", markdown_gen.brd_md(domains), result
        )
    return result
