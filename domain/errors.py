"""
Indicator engine error types.

Errors carry the stage that failed and how much data was available,
so callers can render a message without the engine formatting anything.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling, shared by engine and sources."""

    # Source errors (2xx)
    SOURCE_NOT_FOUND = "E201"
    SOURCE_UNREADABLE = "E202"

    # Parse errors (3xx)
    PARSE_JSON = "E301"
    PARSE_ENCODING = "E302"

    # Data errors (4xx)
    DATA_MISSING = "E401"
    DATA_INVALID = "E402"
    DATA_EMPTY = "E404"
    DATA_INSUFFICIENT = "E405"

    # Validation errors (5xx)
    VALIDATION_PERIOD = "E504"

    # Retry errors (6xx)
    RETRY_EXHAUSTED = "E601"

    UNKNOWN = "E999"


class IndicatorError(Exception):
    """
    Base exception for indicator engine failures.

    Provides structured error information for callers and logs.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        stage: str,
        context: dict[str, Any] | None = None,
    ):
        self.code = code
        self.stage = stage
        self.context = context or {}
        self.message = message
        super().__init__(f"[{code.value}] [{stage}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "stage": self.stage,
            "message": self.message,
            "context": self.context,
        }


class InsufficientDataError(IndicatorError):
    """Raised when fewer valid price points exist than the history policy requires."""

    def __init__(self, stage: str, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            message=(
                f"Insufficient price history: found {available} valid points, "
                f"need at least {required}"
            ),
            code=ErrorCode.DATA_INSUFFICIENT,
            stage=stage,
            context={"available": available, "required": required},
        )


class InvalidPeriodError(IndicatorError):
    """Raised when a required indicator's lookback exceeds the available samples."""

    def __init__(self, stage: str, period: int, available: int):
        self.period = period
        self.available = available
        super().__init__(
            message=f"Lookback period {period} exceeds the {available} available samples",
            code=ErrorCode.VALIDATION_PERIOD,
            stage=stage,
            context={"period": period, "available": available},
        )
