"""
JSON API response types.

Structured responses for web API consumption.
Can be used with FastAPI, Flask, or any web framework.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from domain import AnalysisResult, BandPoint, IndicatorReport, Signal


# ============================================================================
# Response Models
# ============================================================================

class IndicatorResponse(BaseModel):
    """API response for one indicator."""
    kind: str
    label: str
    value: float | dict[str, float]
    signal: str
    period: int | None = None
    as_of: datetime | None = None
    historical: list[float] | None = None
    timestamps: list[int] | None = None
    prices: list[float] | None = None
    series: dict[str, list[float]] | None = None


class SignalSummaryResponse(BaseModel):
    """Signal counts across all indicators."""
    buy: int
    sell: int
    neutral: int


class AnalysisResponse(BaseModel):
    """Full analysis API response."""
    symbol: str
    display_name: str
    current_price: float
    currency: str
    summary: SignalSummaryResponse
    indicators: dict[str, IndicatorResponse]


# ============================================================================
# Conversion Functions
# ============================================================================

def _value_to_response(value: float | BandPoint) -> float | dict[str, float]:
    if isinstance(value, BandPoint):
        return {"upper": value.upper, "middle": value.middle, "lower": value.lower}
    return value


def _indicator_to_response(report: IndicatorReport, include_series: bool) -> IndicatorResponse:
    """Convert IndicatorReport to API response."""
    as_of = None
    if report.timestamps:
        as_of = datetime.fromtimestamp(report.timestamps[-1], tz=timezone.utc)

    response = IndicatorResponse(
        kind=report.kind.value,
        label=report.label,
        value=_value_to_response(report.value),
        signal=report.signal.value,
        period=report.period,
        as_of=as_of,
    )
    if include_series:
        response = response.model_copy(update={
            "historical": report.historical,
            "timestamps": report.timestamps,
            "prices": report.prices,
            "series": report.series or None,
        })
    return response


def to_api_response(result: AnalysisResult, include_series: bool = True) -> AnalysisResponse:
    """
    Convert AnalysisResult to API response.

    Args:
        result: Engine output
        include_series: Include historical series (large) or only current values

    Returns:
        Structured API response
    """
    counts = result.signal_counts()

    return AnalysisResponse(
        symbol=result.symbol,
        display_name=result.display_name,
        current_price=round(result.current_price, 2),
        currency=result.currency,
        summary=SignalSummaryResponse(
            buy=counts[Signal.BUY],
            sell=counts[Signal.SELL],
            neutral=counts[Signal.NEUTRAL],
        ),
        indicators={
            kind.value: _indicator_to_response(report, include_series)
            for kind, report in result.indicators.items()
        },
    )


def to_json(result: AnalysisResult, include_series: bool = True) -> dict[str, Any]:
    """
    Convert AnalysisResult to JSON-serializable dict.

    Args:
        result: Engine output
        include_series: Include historical series

    Returns:
        JSON-serializable dictionary
    """
    response = to_api_response(result, include_series=include_series)
    return response.model_dump(mode="json", exclude_none=True)
