"""
Domain models - pure data structures with validation.

These are immutable data carriers with no business logic.
All models are JSON-serializable and self-validating.
"""

from typing import Annotated

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.functional_validators import AfterValidator

from domain.enums import IndicatorKind, Signal
from domain.indicators.base import BandPoint


# ============================================================================
# Custom validators
# ============================================================================

def _validate_symbol(v: str) -> str:
    """Validate instrument symbol format."""
    v = v.upper().strip()
    if not v:
        raise ValueError("symbol cannot be empty")
    if len(v) > 20:
        raise ValueError("symbol too long (max 20 chars)")
    # Index (^GSPC), FX (EURUSD=X) and exchange-suffixed (VOLV-B.ST) symbols
    if not v.translate(str.maketrans("", "", "-.^=")).isalnum():
        raise ValueError("symbol must be alphanumeric (with - . ^ or =)")
    return v


def _validate_currency(v: str) -> str:
    v = v.upper().strip()
    if not v:
        raise ValueError("currency cannot be empty")
    return v


Symbol = Annotated[str, AfterValidator(_validate_symbol)]
Currency = Annotated[str, AfterValidator(_validate_currency)]


# ============================================================================
# Domain Models
# ============================================================================

class RawPriceHistory(BaseModel):
    """
    Unvalidated daily price arrays as delivered by a data provider.

    Entries may be None where the provider has gaps. Arrays are oldest first
    and nominally equal length.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    symbol: Symbol = Field(description="Instrument symbol (e.g., AAPL)")
    display_name: str | None = Field(default=None, description="Long or short instrument name")
    currency: Currency = Field(default="USD", description="Quote currency")
    closes: list[float | None] = Field(default_factory=list)
    highs: list[float | None] = Field(default_factory=list)
    lows: list[float | None] = Field(default_factory=list)
    timestamps: list[int | None] = Field(default_factory=list)


class IndicatorReport(BaseModel):
    """
    Externally visible result for one indicator.

    `historical` is the indicator's primary series; `timestamps` holds the
    last len(historical) timestamps of the validated history.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    kind: IndicatorKind
    value: float | BandPoint = Field(description="Current value, rounded for display")
    signal: Signal
    label: str = Field(min_length=1, max_length=50)
    historical: list[float] = Field(default_factory=list)
    timestamps: list[int] = Field(default_factory=list)
    period: int | None = Field(default=None, ge=1)
    prices: list[float] | None = Field(
        default=None,
        description="Closing prices aligned to the series (moving averages, Bollinger)"
    )
    series: dict[str, list[float]] = Field(
        default_factory=dict,
        description="Named secondary series (MACD lines, Bollinger bands)"
    )

    @model_validator(mode="after")
    def _validate_alignment(self) -> "IndicatorReport":
        """Every reported series must line up with the timestamps."""
        n = len(self.timestamps)
        if len(self.historical) != n:
            raise ValueError(
                f"historical has {len(self.historical)} points but {n} timestamps"
            )
        if self.prices is not None and len(self.prices) != n:
            raise ValueError(f"prices has {len(self.prices)} points but {n} timestamps")
        for name, values in self.series.items():
            if len(values) != n:
                raise ValueError(f"series '{name}' has {len(values)} points but {n} timestamps")
        return self


class AnalysisResult(BaseModel):
    """
    Final output of one engine run for one instrument.

    Produced once per computation and never mutated.
    """
    model_config = {"frozen": True, "extra": "forbid"}

    symbol: Symbol
    display_name: str
    current_price: float
    currency: Currency = "USD"
    indicators: dict[IndicatorKind, IndicatorReport]

    @field_validator("indicators")
    @classmethod
    def _validate_keys(cls, v: dict[IndicatorKind, IndicatorReport]) -> dict[IndicatorKind, IndicatorReport]:
        """Reports must be filed under their own kind."""
        for kind, report in v.items():
            if report.kind != kind:
                raise ValueError(f"report for {report.kind.value} filed under {kind.value}")
        return v

    def signal_counts(self) -> dict[Signal, int]:
        """Number of indicators per signal."""
        counts = {signal: 0 for signal in Signal}
        for report in self.indicators.values():
            counts[report.signal] += 1
        return counts
