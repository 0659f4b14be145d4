"""
Helpers for putting arbitrary values and exceptions into log records.

Log `extra` fields must stay short: document text, embedding vectors and
provider payloads are summarised rather than dumped.

Dependencies: logging (stdlib), pdfchat.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from pdfchat.core.exceptions import PdfChatException

MAX_LOG_VALUE_CHARS = 300


def summarize_for_log(value: Any, max_chars: int = MAX_LOG_VALUE_CHARS) -> str:
    """
    Short string form of a value for a log record.

    Sequences and mappings are reduced to their size (a 768-float vector
    becomes "list[768]"); long strings are cut with a length marker.
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)} keys]"

    text = value if isinstance(value, str) else repr(value)
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}...<{len(text)} chars>"


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log exc with its error kind and summarised context fields."""
    extra = {key: summarize_for_log(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = summarize_for_log(str(exc))
    if isinstance(exc, PdfChatException):
        extra["error_kind"] = exc.kind.value
    logger.error(message, exc_info=exc, extra=extra)
