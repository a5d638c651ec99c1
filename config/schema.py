"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from pydantic import BaseModel, Field, field_validator

from domain import MinimumHistoryPolicy, PolicyMode


class IndicatorPeriodsConfig(BaseModel):
    """Lookback periods for the oscillator, trend and volatility indicators."""

    rsi: int = Field(default=14, ge=2, le=100)
    stochastic: int = Field(default=14, ge=2, le=100)
    macd_fast: int = Field(default=12, ge=2, le=100)
    macd_slow: int = Field(default=26, ge=3, le=200)
    macd_signal: int = Field(default=9, ge=1, le=100)
    bollinger: int = Field(default=20, ge=2, le=200)
    bollinger_std_dev: float = Field(default=2.0, gt=0.0, le=5.0)

    @field_validator("macd_slow")
    @classmethod
    def slow_gt_fast(cls, v: int, info) -> int:
        fast = info.data.get("macd_fast", 12)
        if v <= fast:
            raise ValueError("macd_slow must be greater than macd_fast")
        return v


class HistoryPolicyConfig(BaseModel):
    """Minimum history policy selection."""

    mode: PolicyMode = Field(default=PolicyMode.ADAPTIVE)
    min_points: int | None = Field(
        default=None,
        ge=1,
        le=5000,
        description="Required valid points (adaptive never goes below 50)",
    )


class SourceConfig(BaseModel):
    """Saved chart document locations, tried in order."""

    directories: list[str] = Field(default_factory=lambda: ["charts"], min_length=1)

    @field_validator("directories")
    @classmethod
    def validate_directories(cls, v: list[str]) -> list[str]:
        cleaned = [d.strip() for d in v]
        if not all(cleaned):
            raise ValueError("chart directory cannot be empty")
        return cleaned


class OutputConfig(BaseModel):
    """Output preferences."""

    format: str = Field(default="markdown", pattern="^(markdown|json)$")
    date_format: str = Field(default="%Y-%m-%d")
    json_indent: int = Field(default=2, ge=0, le=8)


class TechsignalConfig(BaseModel):
    """
    Root configuration model.

    All settings are validated on load.
    """

    default_currency: str = Field(default="USD", min_length=3, max_length=3)

    # Subsections
    periods: IndicatorPeriodsConfig = Field(default_factory=IndicatorPeriodsConfig)
    history: HistoryPolicyConfig = Field(default_factory=HistoryPolicyConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("default_currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    def history_policy(self, mode: PolicyMode | None = None) -> MinimumHistoryPolicy:
        """Build the engine's history policy, optionally overriding the mode."""
        return MinimumHistoryPolicy(
            mode=mode or self.history.mode,
            min_points=self.history.min_points,
            rsi_period=self.periods.rsi,
            stochastic_period=self.periods.stochastic,
            macd_fast=self.periods.macd_fast,
            macd_slow=self.periods.macd_slow,
            macd_signal=self.periods.macd_signal,
            bollinger_period=self.periods.bollinger,
            bollinger_std_dev=self.periods.bollinger_std_dev,
        )
