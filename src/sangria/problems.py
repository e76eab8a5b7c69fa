"""Problem records reported by the indentation checker.

Thread Safety:
Problem is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

INDENTATION = "indentation"


def indentation_message(actual: int, expected: int) -> str:
    """Format the human-readable mismatch message."""
    return f"Line is indented to column {actual}, but should be at {expected}."


@dataclass(frozen=True, slots=True)
class Problem:
    """One indentation mismatch.

    Attributes:
        file_path: Path of the checked file ("<string>" for in-memory source)
        line: Line number (1-indexed)
        kind: Problem category; always "indentation"
        expected: Expected indentation in spaces
        actual: Actual indentation in spaces
        message: Human-readable description

    """

    file_path: str
    line: int
    kind: str
    expected: int
    actual: int
    message: str

    @classmethod
    def indentation(cls, file_path: str, line: int, expected: int, actual: int) -> Problem:
        """Create an indentation Problem with the standard message."""
        return cls(
            file_path=file_path,
            line=line,
            kind=INDENTATION,
            expected=expected,
            actual=actual,
            message=indentation_message(actual, expected),
        )

    def __str__(self) -> str:
        """Format like a compiler diagnostic: ``path:line: message``."""
        return f"{self.file_path}:{self.line}: {self.message}"
