"""Indentation state machine for Sangria.

Architecture:
indentation/
├── __init__.py          # Re-exports IndentationManager and friends
├── reasons.py           # IndentReason, IndentReasonStack
└── manager.py           # IndentState, IndentationManager

"""

from sangria.indentation.manager import IndentationManager, IndentState
from sangria.indentation.reasons import IndentReason, IndentReasonStack

__all__ = ["IndentReason", "IndentReasonStack", "IndentState", "IndentationManager"]
