"""
Signal classification.

Maps an indicator's current state to buy/sell/neutral. Thresholds are fixed
constants. Classification never raises: missing inputs classify as neutral.
"""

from domain.enums import IndicatorKind, Signal
from domain.indicators.base import BandPoint

RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0
STOCHASTIC_OVERSOLD = 20.0
STOCHASTIC_OVERBOUGHT = 80.0
BOLLINGER_LOWER_ZONE = 0.2
BOLLINGER_UPPER_ZONE = 0.8


def _price_vs_average(price: float | None, average: float | None) -> Signal:
    if price is None or average is None:
        return Signal.NEUTRAL
    if price > average:
        return Signal.BUY
    if price < average:
        return Signal.SELL
    return Signal.NEUTRAL


def _oscillator(value: float | None, oversold: float, overbought: float) -> Signal:
    if value is None:
        return Signal.NEUTRAL
    if value < oversold:
        return Signal.BUY
    if value > overbought:
        return Signal.SELL
    return Signal.NEUTRAL


def band_position(price: float, bands: BandPoint) -> float | None:
    """Relative position of price within the bands (0 = lower, 1 = upper).

    Returns None for a zero-width band.
    """
    if bands.width == 0:
        return None
    return (price - bands.lower) / bands.width


def _bollinger(price: float | None, bands: BandPoint | None) -> Signal:
    if price is None or bands is None:
        return Signal.NEUTRAL
    position = band_position(price, bands)
    if position is None:
        return Signal.NEUTRAL
    if position < BOLLINGER_LOWER_ZONE:
        return Signal.BUY
    if position > BOLLINGER_UPPER_ZONE:
        return Signal.SELL
    return Signal.NEUTRAL


def classify(
    kind: IndicatorKind,
    value: float | None,
    current_price: float | None,
    ma50: float | None = None,
    ma200: float | None = None,
    bollinger: BandPoint | None = None,
) -> Signal:
    """Classify an indicator's current state.

    Args:
        kind: Which indicator the value belongs to
        value: Current indicator value (RSI, MACD histogram, %K); unused for
            the moving-average and Bollinger rules
        current_price: Most recent close
        ma50: Current medium (50-period) simple moving average
        ma200: Current long (200-period) simple moving average
        bollinger: Current Bollinger observation

    Returns:
        Signal.BUY, Signal.SELL or Signal.NEUTRAL

    Example:
        >>> classify(IndicatorKind.RSI, 25.0, 100.0)
        <Signal.BUY: 'buy'>
    """
    if kind == IndicatorKind.LONG_MOVING_AVERAGE:
        return _price_vs_average(current_price, ma200)
    if kind == IndicatorKind.EXPONENTIAL_MOVING_AVERAGE:
        # compared against the 50-period SMA, not the EMA itself
        return _price_vs_average(current_price, ma50)
    if kind == IndicatorKind.RSI:
        return _oscillator(value, RSI_OVERSOLD, RSI_OVERBOUGHT)
    if kind == IndicatorKind.MACD:
        # histogram above zero is bullish
        return _price_vs_average(value, 0.0)
    if kind == IndicatorKind.BOLLINGER:
        return _bollinger(current_price, bollinger)
    if kind == IndicatorKind.STOCHASTIC:
        return _oscillator(value, STOCHASTIC_OVERSOLD, STOCHASTIC_OVERBOUGHT)
    return Signal.NEUTRAL
