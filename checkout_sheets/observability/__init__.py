"""
Observability for checkout-sheets.

Logging setup (loguru) and Prometheus metric definitions.
"""

from .logging_setup import setup_logging, get_logger, with_context

__all__ = ["setup_logging", "get_logger", "with_context"]
