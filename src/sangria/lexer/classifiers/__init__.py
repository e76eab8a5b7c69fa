"""Token classifiers for the Sangria lexer.

Each classifier is a mixin that provides classification logic for
one ambiguity of the language's surface syntax. Classifiers are pure:
they look at the source and the previous events but never move the
cursor.
"""

from sangria.lexer.classifiers.keyword import (
    KeywordClassifierMixin,
)
from sangria.lexer.classifiers.operand import (
    OperandClassifierMixin,
    ends_expression_early,
)

__all__ = [
    "KeywordClassifierMixin",
    "OperandClassifierMixin",
    "ends_expression_early",
]
