from enum import Enum


class Signal(str, Enum):
    """Trading signal derived from an indicator's current state."""
    BUY = "buy"
    SELL = "sell"
    NEUTRAL = "neutral"


class IndicatorKind(str, Enum):
    """Indicators reported by the engine (closed set)."""
    LONG_MOVING_AVERAGE = "long-moving-average"
    EXPONENTIAL_MOVING_AVERAGE = "exponential-moving-average"
    RSI = "rsi"
    MACD = "macd"
    BOLLINGER = "bollinger"
    STOCHASTIC = "stochastic"


class PolicyMode(str, Enum):
    """How the required history length and MA lookbacks are chosen."""
    FIXED = "fixed"        # hard 200-point requirement
    ADAPTIVE = "adaptive"  # shrink lookbacks when history is short
