from .enums import IndicatorKind, PolicyMode, Signal
from .errors import ErrorCode, IndicatorError, InsufficientDataError, InvalidPeriodError
from .history import MinimumHistoryPolicy, ResolvedPeriods
from .indicators import BandPoint, MACDResult, PriceHistory, PricePoint
from .models import (
    AnalysisResult,
    IndicatorReport,
    RawPriceHistory,
)
from .signals import classify

__all__ = [
    # Enums
    "IndicatorKind",
    "PolicyMode",
    "Signal",
    # Errors
    "ErrorCode",
    "IndicatorError",
    "InsufficientDataError",
    "InvalidPeriodError",
    # History policy
    "MinimumHistoryPolicy",
    "ResolvedPeriods",
    # Value types
    "BandPoint",
    "MACDResult",
    "PriceHistory",
    "PricePoint",
    # Domain models
    "AnalysisResult",
    "IndicatorReport",
    "RawPriceHistory",
    # Classification
    "classify",
]
