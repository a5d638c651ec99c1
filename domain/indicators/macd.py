"""MACD (Moving Average Convergence Divergence) indicator."""

from domain.indicators.base import MACDResult
from domain.indicators.moving_averages import ema


def macd(
    closes: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9
) -> MACDResult:
    """Calculate MACD indicator.

    MACD Line = EMA(fast) - EMA(slow)
    Signal Line = EMA(MACD Line, signal periods)
    Histogram = MACD Line - Signal Line

    Args:
        closes: List of closing prices
        fast: Fast EMA period (default: 12)
        slow: Slow EMA period (default: 26)
        signal: Signal line EMA period (default: 9)

    Returns:
        MACDResult whose three series have equal length and share one
        timestamp alignment. All three are empty when closes is too short.

    Example:
        >>> prices = [float(p) for p in range(10, 50)]
        >>> result = macd(prices)
        >>> len(result.histogram) == len(result.signal_line) == len(result.macd_line)
        True

    Notes:
        - EMA output shrinks with its period, so the fast EMA leads the slow
          EMA by (slow - fast) elements; the MACD line pairs them by offset.
        - The MACD line is (signal - 1) elements longer than the signal line;
          its first (signal - 1) elements are dropped from the result.
    """
    if fast >= slow:
        raise ValueError(f"fast period ({fast}) must be shorter than slow period ({slow})")
    if signal < 1:
        raise ValueError(f"signal period must be >= 1, got {signal}")

    if len(closes) < slow:
        return MACDResult.empty()

    fast_ema = ema(closes, fast)
    slow_ema = ema(closes, slow)

    offset = slow - fast
    macd_line = [fast_ema[i + offset] - slow_ema[i] for i in range(len(slow_ema))]

    signal_line = ema(macd_line, signal)
    if not signal_line:
        return MACDResult.empty()

    signal_offset = signal - 1
    histogram = [
        macd_line[i + signal_offset] - signal_line[i]
        for i in range(len(signal_line))
    ]

    return MACDResult(
        macd_line=macd_line[signal_offset:],
        signal_line=signal_line,
        histogram=histogram,
    )
