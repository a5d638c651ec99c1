"""
Retry-with-fallback policy for price history retrieval.

Retrieval walks an ordered list of locations (e.g. a fresh download
directory followed by an archive) until one yields a usable document.
The policy decides which errors are worth trying the next location for;
the attempt itself is supplied by the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from domain import ErrorCode

from .sources import AdapterError, DataError, FetchError, ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def classify_error(error: Exception) -> bool:
    """
    Decide whether an attempt failure should move on to the next location.

    Missing or unreadable documents, undecodable payloads, timeouts and
    dropped connections are retryable (another location may hold a good
    copy). Payloads that decode but hold no data are not: the provider
    answered, and another copy of the same answer says the same thing.
    """
    if isinstance(error, DataError):
        return False
    if isinstance(error, (FetchError, ParseError)):
        return True
    if isinstance(error, (TimeoutError, ConnectionError)):
        return True
    return False


class RetryExhaustedError(AdapterError):
    """Raised when every location failed or a non-retryable error stopped the walk."""

    def __init__(self, errors: list[tuple[str, Exception]], source: str | None = None):
        self.errors = errors
        last = errors[-1][1] if errors else None

        message = f"All {len(errors)} attempt(s) failed"
        if last is not None:
            message += f"; last error: {last}"

        super().__init__(
            message=message,
            code=ErrorCode.RETRY_EXHAUSTED,
            source=source,
            context={"endpoints": [endpoint for endpoint, _ in errors]},
            cause=last,
        )


@dataclass(frozen=True)
class RetryPolicy:
    """Ordered endpoints plus timeout and error classification.

    Attributes:
        endpoints: Locations to try, in order (directories, URLs)
        timeout_seconds: Per-attempt timeout handed to the attempt callable
        retryable: Predicate deciding whether to continue after an error
    """
    endpoints: tuple[str, ...]
    timeout_seconds: float = 30.0
    retryable: Callable[[Exception], bool] = field(default=classify_error)

    def __post_init__(self):
        if not self.endpoints:
            raise ValueError("RetryPolicy needs at least one location")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


def run_with_fallback(
    policy: RetryPolicy,
    attempt: Callable[[str, float], T],
    source: str | None = None,
) -> T:
    """
    Call attempt(endpoint, timeout) for each location until one succeeds.

    Args:
        policy: Endpoints, timeout and error classification
        attempt: Performs one retrieval against one location
        source: Source name for error messages

    Returns:
        The first successful attempt's result

    Raises:
        RetryExhaustedError: If all locations failed, or an error was not retryable
    """
    errors: list[tuple[str, Exception]] = []

    for endpoint in policy.endpoints:
        try:
            return attempt(endpoint, policy.timeout_seconds)
        except Exception as e:
            errors.append((endpoint, e))
            if not policy.retryable(e):
                logger.warning(f"{endpoint}: non-retryable error, giving up - {e}")
                break
            logger.warning(f"{endpoint}: attempt failed, trying next location - {e}")

    raise RetryExhaustedError(errors, source=source)
