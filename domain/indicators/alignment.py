"""Alignment and validation of raw provider price arrays."""

import math
from typing import Sequence

from domain.errors import InsufficientDataError
from domain.indicators.base import PricePoint


def _value_at(values: Sequence[float | None], i: int) -> float | None:
    """Value at index i, or None when absent, NaN or out of range."""
    if i >= len(values):
        return None
    value = values[i]
    if value is None:
        return None
    # WHY: pandas-backed providers mark gaps with NaN instead of null
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def align_prices(
    closes: Sequence[float | None],
    highs: Sequence[float | None],
    lows: Sequence[float | None],
    timestamps: Sequence[int | None],
    min_points: int = 0,
) -> list[PricePoint]:
    """Keep only the indices where close, high and low are all present.

    Missing entries are dropped, never interpolated. Sequences of unequal
    length treat indices past their end as missing.

    Args:
        closes: Raw closing prices, oldest first
        highs: Raw high prices
        lows: Raw low prices
        timestamps: Raw session timestamps
        min_points: Minimum number of valid points required

    Returns:
        List of PricePoint in original order

    Raises:
        InsufficientDataError: If fewer than min_points valid points remain

    Example:
        >>> points = align_prices([1.0, None, 3.0], [1.5, 2.5, 3.5],
        ...                       [0.5, 1.5, 2.5], [10, 20, 30])
        >>> [p.timestamp for p in points]
        [10, 30]
    """
    points = []
    for i in range(len(closes)):
        close = _value_at(closes, i)
        high = _value_at(highs, i)
        low = _value_at(lows, i)
        timestamp = _value_at(timestamps, i)
        if close is None or high is None or low is None or timestamp is None:
            continue
        points.append(PricePoint(
            close=float(close),
            high=float(high),
            low=float(low),
            timestamp=int(timestamp),
        ))

    if len(points) < min_points:
        raise InsufficientDataError(
            stage="alignment",
            available=len(points),
            required=min_points,
        )

    return points
