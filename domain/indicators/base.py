"""Base value types shared by the indicator functions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PricePoint:
    """One validated daily observation.

    Attributes:
        close: Closing price
        high: Session high
        low: Session low
        timestamp: Unix timestamp (seconds) of the session
    """
    close: float
    high: float
    low: float
    timestamp: int


@dataclass(frozen=True)
class PriceHistory:
    """Aligned parallel price sequences, oldest first.

    Example:
        >>> points = [PricePoint(101.0, 102.0, 100.0, 1700000000)]
        >>> history = PriceHistory.from_points(points)
        >>> history.closes
        [101.0]
    """
    closes: list[float]
    highs: list[float]
    lows: list[float]
    timestamps: list[int]

    @classmethod
    def from_points(cls, points: list[PricePoint]) -> "PriceHistory":
        return cls(
            closes=[p.close for p in points],
            highs=[p.high for p in points],
            lows=[p.low for p in points],
            timestamps=[p.timestamp for p in points],
        )

    def __len__(self) -> int:
        return len(self.closes)

    @property
    def current_price(self) -> float:
        """Most recent close."""
        return self.closes[-1]


@dataclass(frozen=True)
class BandPoint:
    """One Bollinger Bands observation."""
    upper: float
    middle: float
    lower: float

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class MACDResult:
    """MACD output with all three series sharing one timestamp alignment.

    Attributes:
        macd_line: Fast EMA minus slow EMA, truncated to the histogram length
        signal_line: EMA of the untruncated MACD line
        histogram: macd_line[i] - signal_line[i]
    """
    macd_line: list[float]
    signal_line: list[float]
    histogram: list[float]

    @classmethod
    def empty(cls) -> "MACDResult":
        return cls(macd_line=[], signal_line=[], histogram=[])

    def __len__(self) -> int:
        return len(self.histogram)
