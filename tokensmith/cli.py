"""CLI entrypoints for tokensmith commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .analysis import (
    detect_duplicate_values,
    detect_pairings,
    extract_semantic_colors,
    get_rule_set,
    lint_summary,
    lint_token_names,
    render_changelog,
    validate_palette,
)
from .config import DOCS_FORMATS, ContrastLintConfig, load_config, write_config_scaffold
from .conventions.classify import classify_reference_files
from .errors import ConfigError, TokenInputError
from .logging import configure_logging, get_logger
from .models import CATEGORIES, PLATFORMS, REFERENCE_ROLES, GenerateRequest, GenerationResult
from .orchestrator import Orchestrator, write_files
from .tokens import load_token_tree

LOGGER = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_dry_run_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be generated without writing them.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokensmith",
        description="Generate platform source files from Figma design-token exports.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records, with timestamps and logger names, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate source files from token export files.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_dry_run_option(generate_parser)
    generate_parser.add_argument("--light", type=Path, required=True, help="Light-mode colour export (JSON).")
    generate_parser.add_argument("--dark", type=Path, required=True, help="Dark-mode colour export (JSON).")
    generate_parser.add_argument("--values", type=Path, help="Numeric values export (spacing, shadows, ...).")
    generate_parser.add_argument("--typography", type=Path, help="Typography export (JSON).")
    generate_parser.add_argument("--primitives", type=Path, help="Dedicated primitives export (JSON).")
    generate_parser.add_argument(
        "--platform",
        dest="platforms",
        action="append",
        choices=PLATFORMS,
        help="Target platform; repeat for several (defaults to web).",
    )
    generate_parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        choices=CATEGORIES,
        help="Output category; repeat for several (defaults to all).",
    )
    generate_parser.add_argument(
        "--reference",
        dest="references",
        action="append",
        default=[],
        metavar="ROLE=PATH",
        help="Existing source file as ROLE=PATH (e.g. ios-colors-swift=Colors.swift) or a bare PATH to classify automatically.",
    )
    generate_parser.add_argument(
        "--match-existing",
        action="store_true",
        help="Mirror the conventions detected in reference files instead of best practices.",
    )
    generate_parser.add_argument("--kotlin-package", help="Package name for generated Kotlin files.")
    generate_parser.add_argument(
        "--out",
        type=Path,
        default=Path("tokens-out"),
        help="Output directory (defaults to ./tokens-out).",
    )
    generate_parser.add_argument(
        "--changelog",
        action="store_true",
        help="Also write CHANGELOG.md comparing output with the reference files.",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Generate using the settings in .tokensmith.yml.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_dry_run_option(build_parser)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Config file or directory containing .tokensmith.yml (defaults to current directory).",
    )

    lint_parser = subparsers.add_parser(
        "lint",
        help="Check token names against a platform naming convention.",
    )
    _add_verbose_option(lint_parser, suppress_default=True)
    lint_parser.add_argument("--tokens", type=Path, required=True, help="Token export to lint (JSON).")
    lint_parser.add_argument("--platform", choices=PLATFORMS, default="web", help="Rule set to apply.")
    lint_parser.add_argument(
        "--duplicates",
        action="store_true",
        help="Also report colour tokens that resolve to the same value.",
    )
    lint_parser.add_argument(
        "--contrast",
        action="store_true",
        help="Also check APCA contrast of text/icon tokens against background tokens.",
    )
    lint_parser.add_argument(
        "--config",
        type=Path,
        help="Config file or directory whose lint.contrast settings (pairings, min_lc) apply.",
    )

    docs_parser = subparsers.add_parser(
        "docs",
        help="Write token documentation (JSON manifest, optional HTML page).",
    )
    _add_verbose_option(docs_parser, suppress_default=True)
    _add_dry_run_option(docs_parser)
    docs_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Config file or directory containing .tokensmith.yml (defaults to current directory).",
    )
    docs_parser.add_argument("--format", dest="doc_format", choices=DOCS_FORMATS, help="Override docs.format.")
    docs_parser.add_argument("--out", type=Path, help="Override docs.directory.")

    init_parser = subparsers.add_parser(
        "init",
        help="Write a starter .tokensmith.yml.",
    )
    _add_verbose_option(init_parser, suppress_default=True)
    init_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to place .tokensmith.yml in (defaults to current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tokensmith commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        try:
            _run_generate(args)
        except (TokenInputError, ConfigError, FileNotFoundError) as exc:
            parser.exit(1, f"{exc}\n")
        except ValueError as exc:
            parser.exit(1, f"tokensmith generate failed: {exc}\n")
    elif args.command == "build":
        try:
            _run_build(args)
        except (TokenInputError, ConfigError, FileNotFoundError) as exc:
            parser.exit(1, f"{exc}\n")
    elif args.command == "lint":
        try:
            failed = _run_lint(args)
        except (TokenInputError, ConfigError, FileNotFoundError) as exc:
            parser.exit(1, f"{exc}\n")
        if failed:
            parser.exit(1, "Lint failed with errors.\n")
    elif args.command == "docs":
        try:
            _run_docs(args)
        except (TokenInputError, ConfigError, FileNotFoundError) as exc:
            parser.exit(1, f"{exc}\n")
    elif args.command == "init":
        try:
            config_file = write_config_scaffold(Path(args.path))
        except FileExistsError as exc:
            parser.exit(1, f"{exc}\n")
        print(f"Created {_relativize(config_file)}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(args: argparse.Namespace) -> None:
    references = _parse_references(args.references)
    request = GenerateRequest(
        light=_load(args.light),
        dark=_load(args.dark),
        values=_load(args.values) if args.values else {},
        typography=_load(args.typography) if args.typography else None,
        primitives=_load(args.primitives) if args.primitives else None,
        platforms=tuple(args.platforms or ("web",)),
        categories=tuple(args.categories or CATEGORIES),
        best_practices=not args.match_existing,
        references=references,
        kotlin_package=args.kotlin_package,
    )
    orchestrator = Orchestrator()
    result = orchestrator.generate(request)
    _print_warnings(result)

    if args.dry_run:
        print("Files (dry-run):")
        for file in result.files:
            print(f"  {file.platform}/{file.filename}")
        return

    written = write_files(result.files, args.out)
    for path in written:
        print(f"  ✓ {_relativize(path)}")
    if args.changelog:
        report = orchestrator.analyze(result, request.light, request.dark)
        changelog = args.out / "CHANGELOG.md"
        changelog.write_text(render_changelog(report, request.platforms), encoding="utf-8")
        print(f"  ✓ {_relativize(changelog)}")
    print(f"{len(written)} file(s) generated.")


def _run_build(args: argparse.Namespace) -> None:
    config_path = Path(args.path)
    orchestrator = Orchestrator.from_config(load_config(config_path))
    outcome = orchestrator.build(config_path, dry_run=bool(args.dry_run))
    _print_warnings(outcome.result)
    if args.dry_run:
        print("Files (dry-run):")
        for file in outcome.result.files:
            print(f"  {file.platform}/{file.filename}")
        return
    for path in outcome.written:
        print(f"  ✓ {_relativize(path)}")
    if outcome.changelog is not None:
        print(f"  ✓ {_relativize(outcome.changelog)}")
    print(f"{len(outcome.written)} file(s) generated.")


def _run_lint(args: argparse.Namespace) -> bool:
    tree = load_token_tree(_read(args.tokens), name=str(args.tokens))
    results = lint_token_names(tree, get_rule_set(args.platform))
    for result in results:
        icon = "✗" if result.severity == "error" else "⚠"
        print(f"  {icon} {result.message}")
    summary = lint_summary(results)
    print(f"{summary['errors']} error(s), {summary['warnings']} warning(s)")

    if args.duplicates:
        for group in detect_duplicate_values(tree):
            print(f"  = {group.value}: {', '.join(group.tokens)}")

    failed = summary["errors"] > 0
    contrast = load_config(args.config).contrast if args.config else None
    if args.contrast or (contrast is not None and contrast.enabled):
        failed = _run_contrast(tree, contrast) or failed
    return failed


def _run_contrast(tree: Dict[str, object], settings: Optional[ContrastLintConfig]) -> bool:
    pairs = detect_pairings(extract_semantic_colors(tree), settings.pairings if settings else None)
    summary = validate_palette(pairs, settings.min_lc if settings else None)
    print("APCA contrast")
    for result in summary.results:
        icon = "✗" if result.level == "fail" else "✓" if result.level == "pass" else "⚠"
        hint = f", min {result.min_font_size}" if result.min_font_size else ""
        print(f"  {icon} {result.pair.fg_name} / {result.pair.bg_name}: Lc {result.abs_lc} ({result.level}{hint})")
    print(
        f"{summary.count('pass')} pass, {summary.count('large')} large-only, "
        f"{summary.count('non-text')} non-text, {summary.count('fail')} fail"
    )
    return summary.failed


def _run_docs(args: argparse.Namespace) -> None:
    outcome = Orchestrator().docs(
        Path(args.path),
        doc_format=args.doc_format,
        output_dir=args.out,
        dry_run=bool(args.dry_run),
    )
    if args.dry_run:
        print(f"Documentation (dry-run): {_relativize(outcome.output_dir)}")
        return
    for path in outcome.written:
        print(f"  ✓ {_relativize(path)}")
    print("Documentation generated.")


def _parse_references(values: Sequence[str]) -> Dict[str, str]:
    """Read ``ROLE=PATH`` pairs; bare paths are classified by filename and content."""

    references: Dict[str, str] = {}
    unassigned: List[Tuple[str, str]] = []
    for value in values:
        role, sep, path = value.partition("=")
        if not sep:
            unassigned.append((Path(value).name, _read(Path(value))))
            continue
        if not path:
            raise ValueError(f"Reference must look like ROLE=PATH or PATH, got '{value}'")
        if role not in REFERENCE_ROLES:
            raise ValueError(f"Unknown reference role '{role}'")
        references[role] = _read(Path(path))
    if unassigned:
        classified, warnings = classify_reference_files(unassigned)
        for warning in warnings:
            LOGGER.warning(warning)
        for role, content in classified.items():
            references.setdefault(role, content)
    return references


def _print_warnings(result: GenerationResult) -> None:
    for warning in result.warnings:
        print(f"  ⚠ [{warning.kind}] {warning.message}", file=sys.stderr)


def _load(path: Path) -> Dict[str, object]:
    return load_token_tree(_read(path), name=str(path))


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
