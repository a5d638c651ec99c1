"""Technical indicators library.

Pure Python implementations of the indicators the engine reports. Every
function consumes oldest-first lists and returns a derived series that only
covers complete lookback windows, so a derived series is shorter than its
input: element i of a series of length m over an input of length n
corresponds to input index i + (n - m).

Indicators:
    - Alignment: drop provider gaps, keep complete close/high/low points
    - Moving Averages: SMA, EMA (SMA-seeded)
    - RSI: Relative Strength Index using Wilder's smoothing
    - MACD: Moving Average Convergence Divergence
    - Bollinger Bands: Volatility bands using population standard deviation
    - Stochastic: Stochastic Oscillator %K

Example:
    >>> from domain.indicators import rsi, macd, bollinger_bands, stochastic
    >>>
    >>> closes = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
    ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
    >>>
    >>> rsi_values = rsi(closes, period=14)
    >>> result = macd(closes)
    >>> bands = bollinger_bands(closes, period=10)
"""

from domain.indicators.alignment import align_prices
from domain.indicators.base import BandPoint, MACDResult, PriceHistory, PricePoint
from domain.indicators.bollinger import bollinger_bands
from domain.indicators.macd import macd
from domain.indicators.moving_averages import ema, sma
from domain.indicators.rsi import rsi
from domain.indicators.stochastic import stochastic

__all__ = [
    # Base types
    "PricePoint",
    "PriceHistory",
    "BandPoint",
    "MACDResult",
    # Alignment
    "align_prices",
    # Moving averages
    "sma",
    "ema",
    # Oscillators
    "rsi",
    "stochastic",
    # Trend and volatility
    "macd",
    "bollinger_bands",
]
