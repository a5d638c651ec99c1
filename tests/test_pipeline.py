"""
Integration tests for the indicator pipeline.

Runs the full engine over synthetic price histories.
"""

import logging

import pytest

from domain import (
    AnalysisResult,
    BandPoint,
    IndicatorKind,
    InsufficientDataError,
    InvalidPeriodError,
    MinimumHistoryPolicy,
    RawPriceHistory,
    Signal,
)
from domain.indicators import sma
from orchestration.pipeline import analyze, compute_indicators
from domain.indicators import PriceHistory, align_prices


START_TS = 1_700_000_000
DAY = 86_400


# ============================================================================
# Fixtures
# ============================================================================

def make_raw(closes, spread=1.0, symbol="TEST", **kwargs) -> RawPriceHistory:
    return RawPriceHistory(
        symbol=symbol,
        closes=closes,
        highs=[c + spread if c is not None else None for c in closes],
        lows=[c - spread if c is not None else None for c in closes],
        timestamps=[START_TS + i * DAY for i in range(len(closes))],
        **kwargs,
    )


@pytest.fixture
def rising_60() -> RawPriceHistory:
    """Monotonically increasing closes 100..159, highs +1, lows -1."""
    return make_raw([float(p) for p in range(100, 160)], display_name="Rising Corp")


@pytest.fixture
def rising_result(rising_60) -> AnalysisResult:
    return analyze(rising_60)


# ============================================================================
# End-to-end scenario
# ============================================================================

class TestRisingScenario:

    def test_reports_every_indicator_kind(self, rising_result):
        assert set(rising_result.indicators) == set(IndicatorKind)

    def test_metadata(self, rising_result):
        assert rising_result.symbol == "TEST"
        assert rising_result.display_name == "Rising Corp"
        assert rising_result.current_price == 159.0
        assert rising_result.currency == "USD"

    def test_rsi_is_100_everywhere(self, rising_result):
        report = rising_result.indicators[IndicatorKind.RSI]
        assert len(report.historical) == 60 - 14
        assert all(v == 100.0 for v in report.historical)
        assert report.value == 100.0
        assert report.signal == Signal.SELL
        assert report.label == "RSI (14)"

    def test_stochastic_is_constant_near_top(self, rising_result):
        # close sits 14 above the window low and 1 below the window high
        report = rising_result.indicators[IndicatorKind.STOCHASTIC]
        assert len(report.historical) == 60 - 14 + 1
        for value in report.historical:
            assert value == pytest.approx(100.0 * 14 / 15)
        assert report.value == 93.3
        assert report.signal == Signal.SELL

    def test_stochastic_is_100_when_close_is_the_high(self):
        closes = [float(p) for p in range(100, 160)]
        raw = RawPriceHistory(
            symbol="TEST",
            closes=closes,
            highs=closes,
            lows=[c - 1 for c in closes],
            timestamps=list(range(60)),
        )
        report = analyze(raw).indicators[IndicatorKind.STOCHASTIC]
        assert all(v == pytest.approx(100.0) for v in report.historical)

    def test_moving_average_signals_are_buy(self, rising_result):
        ma = rising_result.indicators[IndicatorKind.LONG_MOVING_AVERAGE]
        ema = rising_result.indicators[IndicatorKind.EXPONENTIAL_MOVING_AVERAGE]
        assert ma.signal == Signal.BUY
        assert ema.signal == Signal.BUY

    def test_adaptive_periods_and_labels(self, rising_result):
        ma = rising_result.indicators[IndicatorKind.LONG_MOVING_AVERAGE]
        ema = rising_result.indicators[IndicatorKind.EXPONENTIAL_MOVING_AVERAGE]
        assert ma.period == 48
        assert ma.label == "48-day MA"
        assert ema.period == 50
        assert ema.label == "50-day EMA"

    def test_moving_average_value_is_rounded_last_sma(self, rising_60, rising_result):
        ma = rising_result.indicators[IndicatorKind.LONG_MOVING_AVERAGE]
        expected = sma(rising_60.closes, 48)
        assert ma.historical == expected
        assert ma.value == round(expected[-1], 2)
        assert ma.prices == rising_60.closes[-len(expected):]

    def test_bollinger_near_upper_band_is_sell(self, rising_result):
        report = rising_result.indicators[IndicatorKind.BOLLINGER]
        assert isinstance(report.value, BandPoint)
        assert report.value.middle == 149.5
        assert report.signal == Signal.SELL
        assert set(report.series) == {"upper", "middle", "lower"}
        assert report.historical == report.series["middle"]

    def test_macd_series_share_alignment(self, rising_result):
        report = rising_result.indicators[IndicatorKind.MACD]
        line = report.series["macd_line"]
        signal = report.series["signal_line"]
        histogram = report.series["histogram"]
        assert len(line) == len(signal) == len(histogram) == len(report.timestamps)
        for i in range(len(histogram)):
            assert histogram[i] == line[i] - signal[i]
        assert report.value == round(histogram[-1], 2)

    def test_timestamps_are_tail_of_history(self, rising_60, rising_result):
        for report in rising_result.indicators.values():
            n = len(report.historical)
            assert report.timestamps == rising_60.timestamps[-n:]
            assert report.timestamps[-1] == rising_60.timestamps[-1]

    def test_signal_counts(self, rising_result):
        counts = rising_result.signal_counts()
        assert sum(counts.values()) == len(IndicatorKind)
        assert counts[Signal.BUY] >= 2


# ============================================================================
# Validation
# ============================================================================

class TestValidation:

    def test_adaptive_rejects_short_history(self):
        raw = make_raw([float(p) for p in range(40)])
        with pytest.raises(InsufficientDataError) as exc_info:
            analyze(raw)
        assert exc_info.value.available == 40
        assert exc_info.value.required == 50

    def test_fixed_requires_200_points(self, rising_60):
        with pytest.raises(InsufficientDataError) as exc_info:
            analyze(rising_60, MinimumHistoryPolicy.fixed())
        assert exc_info.value.required == 200

    def test_fixed_policy_with_enough_history(self):
        raw = make_raw([100.0 + (i % 7) for i in range(250)])
        result = analyze(raw, MinimumHistoryPolicy.fixed())
        ma = result.indicators[IndicatorKind.LONG_MOVING_AVERAGE]
        assert ma.label == "200-day MA"
        assert len(ma.historical) == 51

    def test_gaps_are_dropped_before_counting(self):
        closes = [float(p) for p in range(100, 160)]
        closes[10] = None
        closes[20] = None
        result = analyze(make_raw(closes))
        rsi = result.indicators[IndicatorKind.RSI]
        assert len(rsi.historical) == 58 - 14
        assert START_TS + 10 * DAY not in rsi.timestamps

    def test_lookback_beyond_history_is_fatal(self, rising_60):
        policy = MinimumHistoryPolicy(rsi_period=80)
        with pytest.raises(InvalidPeriodError) as exc_info:
            analyze(rising_60, policy)
        assert exc_info.value.stage == "rsi"
        assert exc_info.value.available == 60

    def test_fixed_override_without_long_average_is_fatal(self, rising_60):
        policy = MinimumHistoryPolicy.fixed(min_points=50)
        with pytest.raises(InvalidPeriodError) as exc_info:
            analyze(rising_60, policy)
        assert exc_info.value.stage == "long-moving-average"

    def test_validation_failure_is_logged(self, caplog):
        raw = make_raw([float(p) for p in range(10)])
        with caplog.at_level(logging.WARNING, logger="orchestration.pipeline"):
            with pytest.raises(InsufficientDataError):
                analyze(raw)
        assert "Insufficient price history" in caplog.text


class TestComputeIndicators:

    def test_series_lengths(self, rising_60):
        points = align_prices(
            rising_60.closes, rising_60.highs, rising_60.lows, rising_60.timestamps
        )
        computed = compute_indicators(PriceHistory.from_points(points), MinimumHistoryPolicy())
        assert len(computed.ma_long) == 60 - 48 + 1
        assert len(computed.ma_medium) == 60 - 50 + 1
        assert len(computed.ema) == 60 - 50 + 1
        assert len(computed.rsi) == 60 - 14
        assert len(computed.bollinger) == 60 - 20 + 1
        assert len(computed.stochastic) == 60 - 14 + 1
        assert len(computed.macd) == 60 - 26 + 1 - 9 + 1

    def test_pure_function(self, rising_60):
        assert analyze(rising_60) == analyze(rising_60)
