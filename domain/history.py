"""
Minimum history policy.

Decides how many validated price points a computation requires and which
moving-average lookbacks to use for a given history length. Two variants:

- fixed: requires 200 points and always uses the 50/200-day averages
- adaptive: requires 50 points and shortens the averages when history is short
"""

from dataclasses import dataclass

from domain.enums import PolicyMode

FIXED_MIN_POINTS = 200
ADAPTIVE_MIN_POINTS = 50

MA_LONG_PERIOD = 200
MA_MEDIUM_PERIOD = 50
MA_LONG_FALLBACK_PERIOD = 100


@dataclass(frozen=True)
class ResolvedPeriods:
    """Moving-average lookbacks chosen for one history length."""
    ma_long: int
    ma_medium: int
    ema: int


@dataclass(frozen=True)
class MinimumHistoryPolicy:
    """Required history and lookback periods for one engine run.

    Attributes:
        mode: FIXED or ADAPTIVE
        min_points: Override for the required point count (adaptive never goes below 50)
        rsi_period: RSI lookback
        stochastic_period: Stochastic %K lookback
        macd_fast: MACD fast EMA period
        macd_slow: MACD slow EMA period
        macd_signal: MACD signal line period
        bollinger_period: Bollinger SMA/stddev window
        bollinger_std_dev: Band width in standard deviations
    """
    mode: PolicyMode = PolicyMode.ADAPTIVE
    min_points: int | None = None
    rsi_period: int = 14
    stochastic_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0

    def __post_init__(self):
        if self.min_points is not None and self.min_points < 1:
            raise ValueError(f"min_points must be >= 1, got {self.min_points}")

    @classmethod
    def fixed(cls, **kwargs) -> "MinimumHistoryPolicy":
        return cls(mode=PolicyMode.FIXED, **kwargs)

    @classmethod
    def adaptive(cls, **kwargs) -> "MinimumHistoryPolicy":
        return cls(mode=PolicyMode.ADAPTIVE, **kwargs)

    @property
    def required_points(self) -> int:
        """Minimum number of valid points the aligner must produce."""
        if self.mode == PolicyMode.FIXED:
            return self.min_points if self.min_points is not None else FIXED_MIN_POINTS
        if self.min_points is None:
            return ADAPTIVE_MIN_POINTS
        return max(self.min_points, ADAPTIVE_MIN_POINTS)

    def resolve(self, available: int) -> ResolvedPeriods:
        """Choose moving-average lookbacks for a history of `available` points.

        Example:
            >>> MinimumHistoryPolicy.adaptive().resolve(120)
            ResolvedPeriods(ma_long=100, ma_medium=50, ema=50)
        """
        if self.mode == PolicyMode.FIXED:
            return ResolvedPeriods(
                ma_long=MA_LONG_PERIOD,
                ma_medium=MA_MEDIUM_PERIOD,
                ema=MA_MEDIUM_PERIOD,
            )

        if available >= MA_MEDIUM_PERIOD:
            medium = MA_MEDIUM_PERIOD
        else:
            medium = max(1, int(available * 0.5))

        if available >= MA_LONG_PERIOD:
            long = MA_LONG_PERIOD
        elif available >= MA_LONG_FALLBACK_PERIOD:
            long = MA_LONG_FALLBACK_PERIOD
        else:
            long = max(1, int(available * 0.8))

        return ResolvedPeriods(ma_long=long, ma_medium=medium, ema=medium)
