"""CLI entry point: ``llmcheck check PATHS...``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from llmcheck import __version__
from llmcheck.adapters.base import ConfigurationError
from llmcheck.check import LlmStyleCheck
from llmcheck.config import Settings
from llmcheck.host.runner import collect_files, run_checks
from llmcheck.logging_config import set_level, setup_logging

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"llmcheck {__version__}")
        return EXIT_OK

    if args.command == "check":
        return _run_check(args)
    parser.print_help()
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="llmcheck",
        description=(
            "Style check backed by a language model, "
            "reported as located diagnostics."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    check = sub.add_parser(
        "check",
        help="Check source files or directories",
    )
    check.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or directories to check",
    )
    check.add_argument(
        "--no-warnings",
        action="store_true",
        help="Only report [ERROR] findings",
    )
    check.add_argument(
        "--tab-width",
        type=int,
        default=None,
        help="Tab width for column computation (default: 4)",
    )
    check.add_argument(
        "--column-offset",
        type=int,
        default=None,
        help="Added to every computed column (default: 0)",
    )
    check.add_argument(
        "--endpoint",
        default=None,
        help="LLM endpoint URL (default: from settings)",
    )
    check.add_argument(
        "--model",
        default=None,
        help="Model name (default: provider default)",
    )
    check.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.no_warnings:
        overrides["show_warnings"] = False
    for name in ("tab_width", "column_offset", "endpoint", "model"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return overrides


def _run_check(args: argparse.Namespace) -> int:
    try:
        settings = Settings(**_settings_overrides(args))
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(settings.log_level)
    if args.verbose:
        set_level("INFO")

    try:
        check = LlmStyleCheck(settings)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        files = collect_files(args.paths, settings)
        result = run_checks(files, check)
    finally:
        check.close()

    for diagnostic in result.diagnostics:
        print(diagnostic.format())
    if args.verbose:
        print(
            f"Checked {result.files_checked} file(s), "
            f"skipped {result.files_skipped}, "
            f"{len(result.diagnostics)} diagnostic(s).",
            file=sys.stderr,
        )
    return EXIT_VIOLATIONS if result.error_count else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
