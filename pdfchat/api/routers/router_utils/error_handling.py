"""
API error handling utilities.

A decorator that turns domain exceptions into JSON error responses with a
stable shape: {"error": CODE, "message": str, "kind": ErrorKind}.

Dependencies: fastapi, pdfchat.core.exceptions, pdfchat.core.retry
System role: Consistent error responses across routers
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from pdfchat.core.exceptions import ErrorKind, PdfChatException
from pdfchat.core.retry import classify_error

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def error_response(
    status_code: int,
    error: str,
    message: str | None = None,
    kind: ErrorKind | None = None,
) -> JSONResponse:
    """Build the standard JSON error body."""
    body: dict[str, Any] = {"error": error}
    if message is not None:
        body["message"] = message
    if kind is not None:
        body["kind"] = kind.value
    return JSONResponse(status_code=status_code, content=body)


def handle_api_errors(error_code: str = "INTERNAL_ERROR") -> Callable[[F], F]:
    """
    Decorator mapping exceptions raised by an endpoint to JSON errors.

    validation -> 400, not_found -> 404, anything else -> 500 with
    error_code as the "error" field.

    Args:
        error_code: Error code reported for 500 responses
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except PdfChatException as e:
                kind = classify_error(e)
                status_code = _STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
                if status_code >= 500:
                    logger.error(
                        f"{func.__name__} failed",
                        exc_info=e,
                        extra={"error_type": type(e).__name__, "details": e.details},
                    )
                    return error_response(status_code, error_code, e.message, kind)
                logger.warning(
                    f"{func.__name__} rejected request",
                    extra={"error_msg": e.message, "kind": kind.value},
                )
                return error_response(status_code, e.message, e.message, kind)

            except Exception as e:
                logger.exception(
                    f"Unexpected failure in {func.__name__}",
                    extra={"error_type": type(e).__name__, "error": str(e)},
                )
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    error_code,
                    str(e),
                    classify_error(e),
                )

        return wrapper  # type: ignore

    return decorator
