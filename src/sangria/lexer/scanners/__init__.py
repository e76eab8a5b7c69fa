"""Mode-specific scanners for the Sangria lexer.

Each scanner is a mixin that provides scanning logic for a specific
lexer mode (CODE, HEREDOC) or token family (literals).
"""

from __future__ import annotations

from sangria.lexer.scanners.code import CodeScannerMixin
from sangria.lexer.scanners.heredoc import HeredocScannerMixin
from sangria.lexer.scanners.literal import LiteralScannerMixin

__all__ = [
    "CodeScannerMixin",
    "HeredocScannerMixin",
    "LiteralScannerMixin",
]
