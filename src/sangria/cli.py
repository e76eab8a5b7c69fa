"""Command line entry point.

Usage:
    sangria [PATHS...] [--spaces N] [--format text|json] [--workers N] [-v]

Exit status:
    0  every file checked, no problems
    1  problems found, or a file could not be checked
    2  invalid configuration

"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from sangria.driver import FileReport, check_files
from sangria.errors import ConfigurationError
from sangria.file_set import DEFAULT_GLOB, FileSet
from sangria.serialization import to_json
from sangria.utils.logger import configure_logging

EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sangria",
        description="Check the indentation of keyword-block source files.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help=f"Files, directories or globs to check (default: {DEFAULT_GLOB})",
    )
    parser.add_argument("--spaces", type=int, help="Spaces per indentation level (default: 2)")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format",
    )
    parser.add_argument("--workers", type=int, default=1, help="Check files on N threads")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log state transitions")
    return parser


def format_text(reports: Sequence[FileReport]) -> str:
    lines: list[str] = []
    for report in reports:
        if report.error is not None:
            lines.append(f"{report.file_path}: error: {report.error}")
        lines.extend(str(problem) for problem in report.problems)
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the checker and return the exit status."""
    args = build_parser().parse_args(argv)

    configure_logging(args.verbose)

    style = {} if args.spaces is None else {"spaces": args.spaces}
    try:
        file_set = FileSet(style, args.paths or None)
    except ConfigurationError as e:
        print(f"sangria: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    reports = check_files(file_set.file_list, file_set.config, max_workers=args.workers)

    output = to_json(reports, indent=2) if args.format == "json" else format_text(reports)
    if output:
        print(output)

    return EXIT_OK if all(report.ok for report in reports) else EXIT_PROBLEMS


if __name__ == "__main__":
    sys.exit(main())
