"""Bollinger Bands indicator."""

from domain.indicators.base import BandPoint
from domain.indicators.moving_averages import sma


def bollinger_bands(
    closes: list[float],
    period: int = 20,
    std_dev: float = 2.0
) -> list[BandPoint]:
    """Calculate Bollinger Bands.

    Upper Band = SMA + (std_dev * standard_deviation)
    Middle Band = SMA
    Lower Band = SMA - (std_dev * standard_deviation)

    The standard deviation is the population estimator (divides by period).

    Args:
        closes: List of closing prices
        period: Period for SMA and standard deviation (default: 20)
        std_dev: Number of standard deviations for bands (default: 2.0)

    Returns:
        List of BandPoint, same length as sma(closes, period)

    Example:
        >>> prices = [20, 21, 22, 23, 24, 25, 24, 23, 22, 21,
        ...           20, 21, 22, 23, 24, 25, 26, 27, 28, 29,
        ...           30, 29, 28, 27, 26]
        >>> bands = bollinger_bands(prices, period=20)
        >>> bands[-1].middle
        25.0
    """
    middle_band = sma(closes, period)

    bands = []
    for i, mean in enumerate(middle_band):
        window = closes[i:i + period]
        variance = sum((x - mean) ** 2 for x in window) / period
        std = variance ** 0.5

        bands.append(BandPoint(
            upper=mean + (std_dev * std),
            middle=mean,
            lower=mean - (std_dev * std),
        ))

    return bands
