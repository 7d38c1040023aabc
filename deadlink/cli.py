"""CLI entrypoints for deadlink commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, Sequence

from .config import ConfigError, LinkCheckConfig, find_config, load_config, merge_overrides
from .linter import LintMessage, Linter
from .logging import configure_logging, get_logger


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    """Logging flags are accepted before and after the subcommand."""
    verbose_default: object = argparse.SUPPRESS if suppress_default else False
    log_file_default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=log_file_default,
        metavar="PATH",
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deadlink",
        description="Report dead and redirected links in Markdown and text documents.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Check every link in the given documents.",
    )
    _add_logging_options(check_parser, suppress_default=True)
    check_parser.add_argument(
        "paths",
        nargs="+",
        help="Documents to check.",
    )
    check_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .deadlink.yml file (defaults to the nearest one).",
    )
    check_parser.add_argument(
        "--base-uri",
        default=None,
        help="Base URI used to resolve relative links instead of the file path.",
    )
    check_parser.add_argument(
        "--no-check-relative",
        dest="check_relative",
        action="store_false",
        default=None,
        help="Skip relative links entirely.",
    )
    check_parser.add_argument(
        "--ignore",
        action="append",
        default=None,
        metavar="GLOB",
        help="Skip URIs matching the glob (repeatable).",
    )
    check_parser.add_argument(
        "--prefer-get",
        action="append",
        default=None,
        metavar="ORIGIN",
        help="Probe URIs of this origin with GET instead of HEAD (repeatable).",
    )
    check_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request deadline in seconds.",
    )
    check_parser.add_argument(
        "--fix",
        action="store_true",
        help="Rewrite redirected links to their final destination.",
    )
    check_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="With --fix, print the diff instead of writing files.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing link checks.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _resolve_config(args: argparse.Namespace, path: str) -> LinkCheckConfig:
    """Config for ``path``: ``--config`` or the nearest .deadlink.yml, then CLI overrides."""
    if args.config is not None:
        if not args.config.exists():
            raise ConfigError(f"Config file not found: {args.config}")
        config = load_config(args.config)
    else:
        discovered = find_config(Path(path))
        config = load_config(discovered) if discovered is not None else LinkCheckConfig()
    return merge_overrides(
        config,
        check_relative=args.check_relative,
        base_uri=args.base_uri,
        ignore=args.ignore,
        prefer_get=args.prefer_get,
        timeout=args.timeout,
    )


def _format_message(path: Path | None, message: LintMessage) -> str:
    location = _relativize(path) if path is not None else "<text>"
    return f"{location}:{message.line}:{message.column}  {message.message}"


def _check_path(linter: Linter, path: str, *, fix: bool, dry_run: bool) -> int:
    if fix:
        outcome = linter.fix_file(path, dry_run=dry_run)
        if outcome.dry_run and outcome.diff:
            print(outcome.diff, end="")
        elif outcome.applied:
            print(f"{_relativize(outcome.path)}: fixed {outcome.applied} redirected link(s)")
        for message in outcome.remaining:
            print(_format_message(outcome.path, message))
        return len(outcome.remaining)

    problems = 0
    for result in linter.check_files([path]):
        for message in result.messages:
            print(_format_message(result.file_path, message))
        problems += len(result.messages)
    return problems


def _run_check(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.dry_run and not args.fix:
        parser.error("--dry-run requires --fix")

    linters: Dict[LinkCheckConfig, Linter] = {}
    problems = 0
    for path in args.paths:
        try:
            config = _resolve_config(args, path)
        except ConfigError as exc:
            parser.exit(2, f"deadlink: {exc}\n")
        if config not in linters:
            linters[config] = Linter(config)
        try:
            problems += _check_path(linters[config], path, fix=args.fix, dry_run=args.dry_run)
        except OSError as exc:
            parser.exit(2, f"deadlink: {exc}\n")

    get_logger("cli").debug("Found %d problem(s)", problems)
    if problems:
        print(f"\n{problems} problem(s) found")
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint for deadlink commands."""
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "check":
        status = _run_check(args, parser)
        if status:
            parser.exit(status)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(2, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
