"""CLI entry point for doc-engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import cast

from doc_engine import __version__
from doc_engine.errors import ConfigError, PathError, ScanError
from doc_engine.reporter import (
    format_cross_ref_text,
    format_report_json,
    format_report_text,
    format_scaffold_text,
    format_validation_text,
)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def _emit(text: str, output: Path | None = None) -> None:
    if output is None:
        print(text)
    else:
        _ = output.write_text(text + "\n", encoding="utf-8")


def _cmd_scan(args: argparse.Namespace) -> int:
    from doc_engine.rule_engine.config import CONFIG_FILENAME, load_scan_config
    from doc_engine.rule_engine.engine import parse_check_ids, scan
    from doc_engine.rule_engine.models import ProjectScope, ProjectType

    root = cast(Path, args.path)
    config = load_scan_config(root / CONFIG_FILENAME)
    if args.checks:
        config.checks = parse_check_ids(cast(str, args.checks))
    if args.project_type:
        config.project_type = ProjectType(cast(str, args.project_type))
    if args.scope:
        config.project_scope = ProjectScope(cast(str, args.scope))
    if args.rules:
        config.rules_path = cast(Path, args.rules)

    report = scan(root, config)
    text = format_report_json(report) if args.json else format_report_text(report)
    _emit(text, cast(Path | None, args.output))
    return report.exit_code


def _cmd_spec_validate(args: argparse.Namespace) -> int:
    from doc_engine.spec.validator import validate_specs

    root = cast(Path, args.path)
    _require_dir(root)
    report = validate_specs(root)
    if args.json:
        payload = report.model_dump(mode="json")
        payload["exit_code"] = report.exit_code
        print(json.dumps(payload, indent=2))
    else:
        print(format_validation_text(report))
    return report.exit_code


def _cmd_spec_cross_ref(args: argparse.Namespace) -> int:
    from doc_engine.spec.cross_ref import cross_reference

    root = cast(Path, args.path)
    _require_dir(root)
    report = cross_reference(root)
    if args.json:
        payload = report.model_dump(mode="json")
        payload["summary"] = report.summary.model_dump()
        print(json.dumps(payload, indent=2))
    else:
        print(format_cross_ref_text(report))
    return report.exit_code


def _cmd_spec_generate(args: argparse.Namespace) -> int:
    from doc_engine.spec.discovery import classify
    from doc_engine.spec.markdown_gen import write_markdown
    from doc_engine.spec.models import MarkdownSpec, SpecDiagnostic, SpecFormat
    from doc_engine.spec.parser import parse_spec

    source = cast(Path, args.file)
    if not source.is_file():
        raise PathError(f"Path '{source}' does not exist")
    discovered = classify(source.name)
    if discovered is None or discovered.format is not SpecFormat.YAML:
        raise ConfigError(f"'{source.name}' is not a typed spec file (*.spec.yaml etc.)")

    parsed = parse_spec(discovered, source.parent)
    if isinstance(parsed, SpecDiagnostic):
        print(f"{parsed.file}: {parsed.message}", file=sys.stderr)
        return EXIT_FAILED
    if isinstance(parsed.document, MarkdownSpec):
        raise ConfigError(f"'{source.name}' is not a typed spec file")

    output = cast(Path | None, args.output_dir) or source.parent
    stem = source.name.removesuffix(".yaml")
    written = write_markdown(parsed.document, output, stem)
    print(f"Wrote {written}")
    return EXIT_OK


def _cmd_spec(args: argparse.Namespace) -> int:
    dispatch = {
        "validate": _cmd_spec_validate,
        "cross-ref": _cmd_spec_cross_ref,
        "generate": _cmd_spec_generate,
    }
    action = cast(str | None, args.spec_action)
    handler = dispatch.get(action) if action is not None else None
    if handler is None:
        print("Usage: doc-engine spec {validate,cross-ref,generate} ...", file=sys.stderr)
        return EXIT_ERROR
    return handler(args)


def _cmd_scaffold(args: argparse.Namespace) -> int:
    from doc_engine.scaffold.generator import scaffold_from_srs
    from doc_engine.scaffold.models import Phase, ScaffoldConfig

    phases = [Phase(p) for p in cast(list[str], args.phases or [])]
    config = ScaffoldConfig(
        srs_path=cast(Path, args.srs),
        output_dir=cast(Path, args.output_dir),
        force=bool(args.force),
        phases=phases,
    )
    result = scaffold_from_srs(config)
    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_scaffold_text(result))
    return EXIT_OK


def _require_dir(root: Path) -> None:
    if not root.exists():
        raise PathError(f"Path '{root}' does not exist")
    if not root.is_dir():
        raise PathError(f"Path '{root}' is not a directory")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-engine",
        description="Documentation compliance scanner and spec toolkit",
    )
    _ = parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    _ = parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    # scan subcommand
    scan_p = subparsers.add_parser("scan", help="Run compliance checks against a project")
    _ = scan_p.add_argument("path", type=Path, help="Project root")
    _ = scan_p.add_argument("--json", action="store_true", help="Emit the report as JSON")
    _ = scan_p.add_argument("--checks", default=None, help="Check IDs to run, e.g. 1-13,20")
    _ = scan_p.add_argument(
        "--type",
        choices=["open_source", "internal"],
        default=None,
        dest="project_type",
        help="Project type (default: detected from LICENSE)",
    )
    _ = scan_p.add_argument(
        "--scope",
        choices=["small", "medium", "large"],
        default=None,
        help="Project scope tier (default: large)",
    )
    _ = scan_p.add_argument("--rules", type=Path, default=None, help="External rules TOML")
    _ = scan_p.add_argument(
        "-o", "--output", type=Path, default=None, help="Write the report to a file"
    )

    # spec subcommand
    spec_p = subparsers.add_parser("spec", help="Spec document operations")
    spec_sub = spec_p.add_subparsers(dest="spec_action")
    vl = spec_sub.add_parser("validate", help="Validate spec documents")
    _ = vl.add_argument("path", type=Path, help="Project root")
    _ = vl.add_argument("--json", action="store_true")
    xr = spec_sub.add_parser("cross-ref", help="Cross-reference spec documents")
    _ = xr.add_argument("path", type=Path, help="Project root")
    _ = xr.add_argument("--json", action="store_true")
    gn = spec_sub.add_parser("generate", help="Render a typed spec as markdown")
    _ = gn.add_argument("file", type=Path, help="Typed spec file (*.spec.yaml etc.)")
    _ = gn.add_argument(
        "--output", type=Path, default=None, dest="output_dir", help="Output directory"
    )

    # scaffold subcommand
    sc = subparsers.add_parser("scaffold", help="Generate spec files from an SRS")
    _ = sc.add_argument("srs", type=Path, help="SRS markdown file")
    _ = sc.add_argument(
        "--output", type=Path, default=Path("."), dest="output_dir", help="Output root"
    )
    _ = sc.add_argument("--force", action="store_true", help="Overwrite existing files")
    _ = sc.add_argument(
        "--phase",
        action="append",
        choices=["requirements", "design", "testing", "deployment"],
        dest="phases",
        help="Limit output to a phase (repeatable)",
    )
    _ = sc.add_argument("--json", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    dispatch = {
        "scan": _cmd_scan,
        "spec": _cmd_spec,
        "scaffold": _cmd_scaffold,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler is None:
        parser.print_help()
        sys.exit(EXIT_ERROR)
    try:
        code = handler(args)
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    sys.exit(code)


if __name__ == "__main__":
    main()
