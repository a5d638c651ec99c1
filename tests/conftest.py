"""Shared fixtures."""

import pytest

from domain import RawPriceHistory
from orchestration.pipeline import analyze


def _wave(n: int) -> list[float]:
    """Deterministic zig-zag uptrend so every oscillator has gains and losses."""
    return [100.0 + i * 0.5 + (3.0 if i % 4 in (1, 2) else -3.0) for i in range(n)]


@pytest.fixture
def chart_document() -> dict:
    """A 120-session chart payload as the provider returns it."""
    n = 120
    closes = _wave(n)
    closes[7] = None
    return {
        "chart": {
            "result": [{
                "meta": {"symbol": "ERIC-B.ST", "currency": "SEK", "shortName": "Ericsson B"},
                "timestamp": [1_700_000_000 + i * 86_400 for i in range(n)],
                "indicators": {"quote": [{
                    "close": closes,
                    "high": [c + 2.0 if c is not None else None for c in closes],
                    "low": [c - 2.0 if c is not None else None for c in closes],
                }]},
            }],
            "error": None,
        }
    }


@pytest.fixture
def wave_result():
    closes = _wave(120)
    raw = RawPriceHistory(
        symbol="WAVE",
        display_name="Wave Inc",
        currency="EUR",
        closes=closes,
        highs=[c + 2.0 for c in closes],
        lows=[c - 2.0 for c in closes],
        timestamps=[1_700_000_000 + i * 86_400 for i in range(120)],
    )
    return analyze(raw)
