"""Exception classes for Sangria.

Provides standardized exceptions for error handling throughout Sangria.
Indentation mismatches are not errors; they are reported as
:class:`sangria.problems.Problem` records.
"""

from __future__ import annotations


class SangriaError(Exception):
    """Base exception for all Sangria errors.

    Subclass this for specific error categories.
    """

    pass


class LexError(SangriaError):
    """Error while tokenizing a source file.

    Raised when the source cannot be lexed at all (unterminated literal,
    invalid character). Fatal for the file being lexed only; the driver
    reports it and moves on to the next file.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lex error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (0-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ConfigurationError(SangriaError):
    """Invalid or unknown configuration.

    Raised at setup time, before any file is processed.
    """

    def __init__(self, key: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            key: The offending configuration key (e.g., "spaces")
            message: Description of the problem
        """
        self.key = key
        super().__init__(f"Configuration '{key}': {message}")
