"""Stochastic Oscillator indicator."""


def stochastic(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14
) -> list[float]:
    """Calculate the Stochastic Oscillator %K.

    %K = 100 * (Close - Lowest Low) / (Highest High - Lowest Low)

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: Lookback period for %K (default: 14)

    Returns:
        List of %K values, length len(closes) - period + 1,
        empty if there is no complete window

    Example:
        >>> highs = [50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64]
        >>> lows = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62]
        >>> closes = [49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63]
        >>> round(stochastic(highs, lows, closes, 14)[-1], 2)
        93.33

    Notes:
        - Returns values on 0-100 scale
        - A window with no high-low range yields exactly 50.0
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")

    if len(highs) != len(lows) or len(highs) != len(closes):
        raise ValueError("highs, lows, and closes must have same length")

    if len(closes) < period:
        return []

    k_values = []
    for i in range(period - 1, len(closes)):
        highest_high = max(highs[i - period + 1:i + 1])
        lowest_low = min(lows[i - period + 1:i + 1])

        # WHY: Prevent division by zero in flat markets
        if highest_high == lowest_low:
            k_values.append(50.0)
        else:
            k_values.append(100.0 * (closes[i] - lowest_low) / (highest_high - lowest_low))

    return k_values
