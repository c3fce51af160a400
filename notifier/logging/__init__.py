"""Structured logging for the notifier.

Public API:
    - configure_logging(): Initialize logging for the embedding application
    - get_module_logger(): Get a logger bound to the calling module
"""

from notifier.logging.setup import configure_logging, get_module_logger

__all__ = ["configure_logging", "get_module_logger"]
