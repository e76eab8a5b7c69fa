"""Utility modules for Sangria.

Provides:
- logger: get_logger and configure_logging
"""

from sangria.utils.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
