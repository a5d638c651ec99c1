from .sources import (
    PriceHistorySource,
    AdapterError,
    FetchError,
    ParseError,
    DataError,
)
from .retry import RetryPolicy, RetryExhaustedError, classify_error, run_with_fallback

__all__ = [
    "PriceHistorySource",
    "AdapterError",
    "FetchError",
    "ParseError",
    "DataError",
    "RetryPolicy",
    "RetryExhaustedError",
    "classify_error",
    "run_with_fallback",
]
