"""Moving average indicators."""


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def sma(values: list[float], period: int) -> list[float]:
    """Calculate Simple Moving Average.

    Args:
        values: List of values to calculate SMA over
        period: Number of periods for the moving average

    Returns:
        List of SMA values, one per complete window
        (length = len(values) - period + 1), empty if there is no complete window

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> sma(prices, 3)
        [11.0, 12.0, 13.0, 14.0]
    """
    _check_period(period)
    if len(values) < period:
        return []

    result = []
    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def ema(values: list[float], period: int) -> list[float]:
    """Calculate Exponential Moving Average.

    Seeded with the SMA of the first 'period' values, then smoothed with
    multiplier k = 2/(period+1). The seed is the first output element, so
    the result has the same length as sma(values, period).

    Args:
        values: List of values to calculate EMA over
        period: Number of periods for the moving average

    Returns:
        List of EMA values, empty if len(values) < period

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> ema(prices, 3)
        [11.0, 12.0, 13.0, 14.0]
    """
    _check_period(period)
    if len(values) < period:
        return []

    multiplier = 2.0 / (period + 1)
    result = [sum(values[:period]) / period]

    for i in range(period, len(values)):
        prev_ema = result[-1]
        result.append((values[i] - prev_ema) * multiplier + prev_ema)

    return result
