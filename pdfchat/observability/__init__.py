"""
Observability module.

Provides structured logging, correlation ID tracking and request logging middleware.
"""

from pdfchat.observability.correlation import get_correlation_id, set_correlation_id
from pdfchat.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
