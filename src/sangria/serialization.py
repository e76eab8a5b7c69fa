"""JSON serialization of check results.

All output is deterministic (sorted keys) so that reports can be diffed.

Example:
    from sangria import check_files
    from sangria.serialization import to_json

    print(to_json(check_files(["lib/foo.rb"])))

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from dataclasses import fields
from typing import Any

from sangria.driver import FileReport
from sangria.problems import Problem


def to_dict(problem: Problem) -> dict[str, Any]:
    """Convert a Problem to a JSON-compatible dict."""
    return {f.name: getattr(problem, f.name) for f in fields(problem)}


def from_dict(data: dict[str, Any]) -> Problem:
    """Reconstruct a Problem from a dict produced by :func:`to_dict`.

    Raises:
        ValueError: If a field is missing or unknown.
    """
    names = {f.name for f in fields(Problem)}
    missing = names - data.keys()
    unknown = data.keys() - names
    if missing or unknown:
        msg = f"Invalid problem fields: missing {sorted(missing)}, unknown {sorted(unknown)}"
        raise ValueError(msg)
    return Problem(**data)


def report_to_dict(report: FileReport) -> dict[str, Any]:
    """Convert a FileReport to a JSON-compatible dict."""
    return {
        "file_path": report.file_path,
        "problems": [to_dict(p) for p in report.problems],
        "error": report.error,
    }


def to_json(reports: Iterable[FileReport], *, indent: int | None = None) -> str:
    """Serialize reports to a JSON array string.

    Args:
        reports: File reports, in output order.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps([report_to_dict(r) for r in reports], sort_keys=True, indent=indent)
