"""Relative Strength Index (RSI) indicator."""


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    # WHY: no losses in the window means maximum strength, not a division error
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi(closes: list[float], period: int = 14) -> list[float]:
    """Calculate RSI using Wilder's smoothing method.

    Returns values on 0-100 scale.

    Args:
        closes: List of closing prices
        period: RSI period (default: 14)

    Returns:
        List of RSI values (0-100), length len(closes) - period,
        empty if len(closes) <= period

    Example:
        >>> prices = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
        ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
        >>> result = rsi(prices, 14)
        >>> len(result)
        2

    Notes:
        - Wilder's smoothing: New avg = (prev_avg * (period-1) + current) / period
        - First RSI value corresponds to closes[period]
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")
    if len(closes) <= period:
        return []

    gains = []
    losses = []
    for i in range(1, len(closes)):
        change = closes[i] - closes[i - 1]
        gains.append(change if change > 0 else 0.0)
        losses.append(-change if change < 0 else 0.0)

    # WHY: First average is simple average
    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result = [_rsi_value(avg_gain, avg_loss)]

    for i in range(period, len(gains)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result
