"""Indentation style configuration for Sangria.

Configuration is explicit: an immutable IndentConfig is built once before
any file is processed and passed into every Lexer and IndentationManager.
No module-level mutable state is consulted while checking.

Usage:
    from sangria.config import IndentConfig

    config = IndentConfig(spaces=4)
    problems = check(source, config=config)

    # From a style dictionary (e.g., loaded from a project file)
    config = IndentConfig.from_dict({"spaces": 4})

Thread Safety:
    IndentConfig is frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from typing import Any

from sangria.errors import ConfigurationError

# Keywords that start an indented body.
DEFAULT_INDENT_KEYWORDS = frozenset(
    {
        "begin",
        "case",
        "class",
        "def",
        "do",
        "else",
        "elsif",
        "ensure",
        "for",
        "if",
        "module",
        "rescue",
        "unless",
        "until",
        "when",
        "while",
    }
)

# Keywords that outdent their own line but need no terminator of their own.
DEFAULT_CONTINUATION_KEYWORDS = frozenset({"elsif", "else", "when", "rescue", "ensure"})

DEFAULT_TERMINATOR_KEYWORD = "end"

DEFAULT_SPACES = 2


@dataclass(frozen=True, slots=True)
class IndentConfig:
    """Immutable indentation configuration.

    Attributes:
        spaces: Number of spaces per indentation level (> 0)
        indent_keywords: Keywords that open an indented block
        continuation_keywords: Keywords that dedent their own line and
            continue the enclosing block (elsif, else, ...)
        terminator_keyword: Keyword closing the innermost block

    """

    spaces: int = DEFAULT_SPACES
    indent_keywords: frozenset[str] = DEFAULT_INDENT_KEYWORDS
    continuation_keywords: frozenset[str] = DEFAULT_CONTINUATION_KEYWORDS
    terminator_keyword: str = DEFAULT_TERMINATOR_KEYWORD

    def __post_init__(self) -> None:
        if isinstance(self.spaces, bool) or not isinstance(self.spaces, int):
            raise ConfigurationError("spaces", f"expected an integer, got {self.spaces!r}")
        if self.spaces <= 0:
            raise ConfigurationError("spaces", f"must be greater than 0, got {self.spaces}")
        if not self.terminator_keyword:
            raise ConfigurationError("terminator_keyword", "must not be empty")

        # Accept any iterable of strings; store frozensets.
        object.__setattr__(self, "indent_keywords", frozenset(self.indent_keywords))
        object.__setattr__(
            self, "continuation_keywords", frozenset(self.continuation_keywords)
        )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "IndentConfig":
        """Create IndentConfig from a style dictionary.

        Unlike a permissive merge, unknown keys are rejected: asking for a
        style field this checker does not understand is a setup error.

        Args:
            config_dict: Dictionary with config values. Keys must match
                IndentConfig attribute names.

        Returns:
            New IndentConfig instance with values from dict.

        Raises:
            ConfigurationError: On unknown keys or invalid values.

        Example:
            >>> config = IndentConfig.from_dict({"spaces": 4})
            >>> config.spaces
            4

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        for key in config_dict:
            if key not in valid_fields:
                raise ConfigurationError(key, "unknown indentation option")
        return cls(**config_dict)

    def is_indent_keyword(self, token: str) -> bool:
        return token in self.indent_keywords

    def is_continuation_keyword(self, token: str) -> bool:
        return token in self.continuation_keywords

    def is_terminator(self, token: str) -> bool:
        return token == self.terminator_keyword


DEFAULT_CONFIG: IndentConfig = IndentConfig()


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONTINUATION_KEYWORDS",
    "DEFAULT_INDENT_KEYWORDS",
    "DEFAULT_SPACES",
    "DEFAULT_TERMINATOR_KEYWORD",
    "IndentConfig",
]
