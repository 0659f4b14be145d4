"""
Retry policy for calls to external model and storage services.

Exponential backoff with +0..30% jitter and a hard attempt cap, built on
tenacity. Only transient failures (HTTP 5xx, 429, throttling codes,
connection and timeout errors) are retried; everything else surfaces on
the first attempt.

Dependencies: tenacity, botocore
System role: Shared retry/backoff behaviour and error classification
"""

import logging
import random
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
)
from tenacity.wait import wait_base

from pdfchat.core.exceptions import ErrorKind, PdfChatException

logger = logging.getLogger(__name__)

T = TypeVar("T")

THROTTLING_CODES = frozenset({
    "Throttling",
    "ThrottlingException",
    "ThrottledException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "SlowDown",
    "ServiceUnavailable",
    "ServiceUnavailableException",
    "InternalError",
    "RESOURCE_EXHAUSTED",
    "UNAVAILABLE",
})

NETWORK_ERRORS = (
    ConnectionError,
    TimeoutError,
    EndpointConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
    ConnectionClosedError,
)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff parameters for one class of call."""

    max_attempts: int = 5
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    multiplier: float = 2.0
    jitter: float = 0.3


DEFAULT_POLICY = RetryPolicy()
EMBEDDING_POLICY = RetryPolicy(max_attempts=3, initial_delay_ms=1000, max_delay_ms=10000)
CHAT_STREAM_POLICY = RetryPolicy(max_attempts=4, initial_delay_ms=2000, max_delay_ms=15000)
SUGGESTION_POLICY = RetryPolicy(max_attempts=3, initial_delay_ms=1500, max_delay_ms=8000)


class wait_jittered_exponential(wait_base):
    """Wait min(initial * multiplier^(n-1), max) scaled by 1 + U(0, jitter)."""

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def __call__(self, retry_state: RetryCallState) -> float:
        exponent = max(retry_state.attempt_number - 1, 0)
        base_ms = min(
            self.policy.initial_delay_ms * self.policy.multiplier ** exponent,
            self.policy.max_delay_ms,
        )
        return base_ms * (1 + random.random() * self.policy.jitter) / 1000


def extract_status_code(exc: BaseException) -> int | None:
    """Find an HTTP status code on a provider exception, if it carries one."""
    if isinstance(exc, ClientError):
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if isinstance(status, int):
            return status
    for attr in ("status_code", "status", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status
    return None


def _error_code(exc: BaseException) -> str | None:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        return code
    return None


def is_retryable_error(exc: BaseException) -> bool:
    """True for transient failures worth another attempt."""
    if isinstance(exc, PdfChatException):
        return False
    if isinstance(exc, NETWORK_ERRORS):
        return True
    if _error_code(exc) in THROTTLING_CODES:
        return True
    status = extract_status_code(exc)
    if status is not None:
        return status >= 500 or status == 429
    return False


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception onto the client-facing error category."""
    if isinstance(exc, PdfChatException) and exc.kind is not ErrorKind.INTERNAL:
        return exc.kind
    cause = exc.__cause__
    if isinstance(exc, PdfChatException) and cause is not None:
        return classify_error(cause)

    status = extract_status_code(exc)
    code = _error_code(exc) or ""
    if status == 429 or "throttl" in code.lower() or code == "RESOURCE_EXHAUSTED":
        return ErrorKind.RATE_LIMITED
    if status in (502, 503, 504) or code in ("ServiceUnavailable", "UNAVAILABLE"):
        return ErrorKind.OVERLOADED
    if isinstance(exc, NETWORK_ERRORS):
        return ErrorKind.NETWORK

    message = str(exc).lower()
    if "overloaded" in message or "unavailable" in message or "503" in message:
        return ErrorKind.OVERLOADED
    if "rate limit" in message or "too many requests" in message or "429" in message:
        return ErrorKind.RATE_LIMITED
    if "network" in message or "connection" in message:
        return ErrorKind.NETWORK
    return ErrorKind.INTERNAL


def _log_before_sleep(label: str, policy: RetryPolicy) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{label} - attempt {retry_state.attempt_number}/{policy.max_attempts} failed, retrying",
            extra={
                "operation": label,
                "attempt": retry_state.attempt_number,
                "sleep_s": round(retry_state.next_action.sleep, 3) if retry_state.next_action else None,
                "error_type": type(exc).__name__ if exc else None,
                "error_msg": str(exc) if exc else None,
            },
        )

    return before_sleep


def build_retrying(
    policy: RetryPolicy,
    label: str,
    sleep: Callable[[float], Awaitable[Any]] | None = None,
) -> AsyncRetrying:
    """Create a tenacity controller for the given policy."""
    kwargs: dict[str, Any] = {}
    if sleep is not None:
        kwargs["sleep"] = sleep
    return AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_jittered_exponential(policy),
        retry=retry_if_exception(is_retryable_error),
        before_sleep=_log_before_sleep(label, policy),
        reraise=True,
        **kwargs,
    )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_POLICY,
    label: str = "operation",
    sleep: Callable[[float], Awaitable[Any]] | None = None,
) -> T:
    """
    Run an async operation under the retry policy.

    Args:
        operation: Zero-argument coroutine factory, invoked once per attempt
        policy: Backoff parameters
        label: Operation name for logs
        sleep: Optional sleep override (tests pass a no-op)

    Returns:
        The operation's result

    Raises:
        The last error once attempts are exhausted, or the first
        non-retryable error immediately
    """
    async for attempt in build_retrying(policy, label, sleep):
        with attempt:
            return await operation()
    raise AssertionError("unreachable")  # pragma: no cover


async def open_stream_with_retry(
    stream_factory: Callable[[], AsyncIterator[T]],
    policy: RetryPolicy = CHAT_STREAM_POLICY,
    label: str = "stream",
    sleep: Callable[[float], Awaitable[Any]] | None = None,
) -> tuple[AsyncIterator[T], T | None]:
    """
    Open a stream, retrying only until its first item arrives.

    Failures after the first item belong to the caller.

    Returns:
        (iterator, first_item); first_item is None for an empty stream
    """

    async def establish() -> tuple[AsyncIterator[T], T | None]:
        stream = stream_factory()
        try:
            first = await stream.__anext__()
        except StopAsyncIteration:
            return stream, None
        except BaseException:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
            raise
        return stream, first

    return await with_retry(establish, policy, label, sleep)
