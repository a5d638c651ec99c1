"""
Price history source ports and error types.

This module defines the protocol for price history providers
and error types with context-rich messages. The engine only consumes
RawPriceHistory; where it came from is a source's business.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable, Any

from domain import ErrorCode, RawPriceHistory


# ============================================================================
# Error Classes
# ============================================================================

class AdapterError(Exception):
    """
    Base exception for price source failures.

    Provides structured error information for debugging and monitoring.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        source: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.source = source
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()

        parts = [f"[{code.value}]"]
        if source:
            parts.append(f"[{source}]")
        parts.append(message)

        self.message = message
        super().__init__(" ".join(parts))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "source": self.source,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


class FetchError(AdapterError):
    """Raised when a chart document cannot be read from a location."""

    def __init__(
        self,
        source: str,
        reason: str,
        code: ErrorCode = ErrorCode.SOURCE_UNREADABLE,
        location: str | None = None,
        cause: Exception | None = None,
    ):
        self.reason = reason
        self.location = location

        context = {"reason": reason}
        if location:
            context["location"] = location

        super().__init__(
            message=reason,
            code=code,
            source=source,
            context=context,
            cause=cause,
        )

    @classmethod
    def from_os_error(cls, source: str, error: OSError, location: str) -> "FetchError":
        """Create FetchError from a failed file read."""
        if isinstance(error, FileNotFoundError):
            return cls(
                source=source,
                reason=f"No chart document at {location}",
                code=ErrorCode.SOURCE_NOT_FOUND,
                location=location,
                cause=error,
            )
        return cls(
            source=source,
            reason=f"Cannot read {location}: {error.strerror or error}",
            code=ErrorCode.SOURCE_UNREADABLE,
            location=location,
            cause=error,
        )


class ParseError(AdapterError):
    """Raised when a chart document cannot be decoded."""

    def __init__(
        self,
        source: str,
        reason: str,
        raw_content: str | None = None,
        code: ErrorCode = ErrorCode.PARSE_JSON,
        cause: Exception | None = None,
    ):
        context = {}
        if raw_content:
            context["raw_preview"] = raw_content[:200]

        super().__init__(
            message=f"Failed to parse chart document: {reason}",
            code=code,
            source=source,
            context=context,
            cause=cause,
        )


class DataError(AdapterError):
    """Raised when a payload parses but holds no usable price data."""

    def __init__(
        self,
        source: str,
        reason: str,
        code: ErrorCode = ErrorCode.DATA_INVALID,
        field: str | None = None,
    ):
        context = {"reason": reason}
        if field:
            context["field"] = field

        super().__init__(
            message=reason,
            code=code,
            source=source,
            context=context,
        )

    @classmethod
    def missing(cls, source: str, field: str) -> "DataError":
        """Create error for missing required field."""
        return cls(
            source=source,
            reason=f"Missing required field: {field}",
            code=ErrorCode.DATA_MISSING,
            field=field,
        )

    @classmethod
    def empty(cls, source: str, description: str = "No data") -> "DataError":
        """Create error for empty result set."""
        return cls(
            source=source,
            reason=description,
            code=ErrorCode.DATA_EMPTY,
        )


@runtime_checkable
class PriceHistorySource(Protocol):
    """
    Protocol for daily price history providers.

    Implementations must:
    - Return arrays oldest first, with None for provider gaps
    - Fail explicitly with an AdapterError subclass
    """

    @property
    def source_name(self) -> str:
        """Unique identifier for this data source."""
        ...

    def fetch_history(self, symbol: str) -> RawPriceHistory:
        """
        Fetch daily close/high/low history for one symbol.

        Raises:
            AdapterError: If no location yields a usable document
        """
        ...
