"""
Indicator pipeline.

Runs the engine over one instrument's price history:
1. Alignment (raw provider arrays → validated points)
2. Period resolution (minimum history policy)
3. Indicator computation, in dependency order
4. Classification and report assembly

Validation failures abort the whole run; no partial result is returned.
"""

import logging
from dataclasses import dataclass

from domain import (
    AnalysisResult,
    BandPoint,
    IndicatorKind,
    IndicatorReport,
    InsufficientDataError,
    InvalidPeriodError,
    MACDResult,
    MinimumHistoryPolicy,
    PriceHistory,
    RawPriceHistory,
    ResolvedPeriods,
    classify,
)
from domain.indicators import (
    align_prices,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
    stochastic,
)

logger = logging.getLogger(__name__)

PRICE_DECIMALS = 2
OSCILLATOR_DECIMALS = 1


# ============================================================================
# Indicator Computation
# ============================================================================

@dataclass(frozen=True)
class IndicatorSeries:
    """Every derived series for one history, before report assembly."""
    periods: ResolvedPeriods
    ma_long: list[float]
    ma_medium: list[float]
    ema: list[float]
    rsi: list[float]
    macd: MACDResult
    bollinger: list[BandPoint]
    stochastic: list[float]


def compute_indicators(
    history: PriceHistory,
    policy: MinimumHistoryPolicy,
) -> IndicatorSeries:
    """Run every indicator over a validated history.

    Too-short inputs produce empty series here; deciding whether an empty
    series is fatal is left to the report assembly.
    """
    periods = policy.resolve(len(history))
    closes = history.closes
    logger.debug(
        f"Resolved periods for {len(history)} points: "
        f"MA {periods.ma_long}/{periods.ma_medium}, EMA {periods.ema}"
    )

    return IndicatorSeries(
        periods=periods,
        ma_long=sma(closes, periods.ma_long),
        ma_medium=sma(closes, periods.ma_medium),
        ema=ema(closes, periods.ema),
        rsi=rsi(closes, policy.rsi_period),
        macd=macd(closes, policy.macd_fast, policy.macd_slow, policy.macd_signal),
        bollinger=bollinger_bands(closes, policy.bollinger_period, policy.bollinger_std_dev),
        stochastic=stochastic(history.highs, history.lows, closes, policy.stochastic_period),
    )


# ============================================================================
# Report Assembly
# ============================================================================

def _tail(values: list, n: int) -> list:
    """Last n entries of values."""
    return values[len(values) - n:]


def _require(kind: IndicatorKind, series: list, period: int, available: int) -> None:
    """A reported indicator needs at least one value."""
    if not series:
        raise InvalidPeriodError(stage=kind.value, period=period, available=available)


def _last(values: list[float]) -> float | None:
    return values[-1] if values else None


def build_reports(
    history: PriceHistory,
    computed: IndicatorSeries,
    policy: MinimumHistoryPolicy,
) -> dict[IndicatorKind, IndicatorReport]:
    """Classify current values and package one report per indicator kind.

    Raises:
        InvalidPeriodError: If a reported indicator has no values
    """
    n = len(history)
    price = history.current_price
    periods = computed.periods

    _require(IndicatorKind.LONG_MOVING_AVERAGE, computed.ma_long, periods.ma_long, n)
    _require(IndicatorKind.EXPONENTIAL_MOVING_AVERAGE, computed.ema, periods.ema, n)
    _require(IndicatorKind.RSI, computed.rsi, policy.rsi_period, n)
    _require(
        IndicatorKind.MACD,
        computed.macd.histogram,
        policy.macd_slow + policy.macd_signal - 1,
        n,
    )
    _require(IndicatorKind.BOLLINGER, computed.bollinger, policy.bollinger_period, n)
    _require(IndicatorKind.STOCHASTIC, computed.stochastic, policy.stochastic_period, n)

    # WHY: the medium average only feeds classification, so it may be missing
    ma50 = _last(computed.ma_medium)
    ma200 = computed.ma_long[-1]
    current_ema = computed.ema[-1]
    current_rsi = computed.rsi[-1]
    current_hist = computed.macd.histogram[-1]
    current_band = computed.bollinger[-1]
    current_stoch = computed.stochastic[-1]

    def timestamps_for(series: list) -> list[int]:
        return _tail(history.timestamps, len(series))

    def prices_for(series: list) -> list[float]:
        return _tail(history.closes, len(series))

    reports = {}

    reports[IndicatorKind.LONG_MOVING_AVERAGE] = IndicatorReport(
        kind=IndicatorKind.LONG_MOVING_AVERAGE,
        value=round(ma200, PRICE_DECIMALS),
        signal=classify(IndicatorKind.LONG_MOVING_AVERAGE, None, price, ma50=ma50, ma200=ma200),
        label=f"{periods.ma_long}-day MA",
        historical=computed.ma_long,
        prices=prices_for(computed.ma_long),
        timestamps=timestamps_for(computed.ma_long),
        period=periods.ma_long,
    )

    reports[IndicatorKind.EXPONENTIAL_MOVING_AVERAGE] = IndicatorReport(
        kind=IndicatorKind.EXPONENTIAL_MOVING_AVERAGE,
        value=round(current_ema, PRICE_DECIMALS),
        signal=classify(
            IndicatorKind.EXPONENTIAL_MOVING_AVERAGE, None, price, ma50=ma50, ma200=ma200
        ),
        label=f"{periods.ema}-day EMA",
        historical=computed.ema,
        prices=prices_for(computed.ema),
        timestamps=timestamps_for(computed.ema),
        period=periods.ema,
    )

    reports[IndicatorKind.RSI] = IndicatorReport(
        kind=IndicatorKind.RSI,
        value=round(current_rsi, OSCILLATOR_DECIMALS),
        signal=classify(IndicatorKind.RSI, current_rsi, price),
        label=f"RSI ({policy.rsi_period})",
        historical=computed.rsi,
        timestamps=timestamps_for(computed.rsi),
        period=policy.rsi_period,
    )

    reports[IndicatorKind.MACD] = IndicatorReport(
        kind=IndicatorKind.MACD,
        value=round(current_hist, PRICE_DECIMALS),
        signal=classify(IndicatorKind.MACD, current_hist, price),
        label="MACD",
        historical=computed.macd.histogram,
        timestamps=timestamps_for(computed.macd.histogram),
        series={
            "macd_line": computed.macd.macd_line,
            "signal_line": computed.macd.signal_line,
            "histogram": computed.macd.histogram,
        },
    )

    middle = [b.middle for b in computed.bollinger]
    reports[IndicatorKind.BOLLINGER] = IndicatorReport(
        kind=IndicatorKind.BOLLINGER,
        value=BandPoint(
            upper=round(current_band.upper, PRICE_DECIMALS),
            middle=round(current_band.middle, PRICE_DECIMALS),
            lower=round(current_band.lower, PRICE_DECIMALS),
        ),
        signal=classify(IndicatorKind.BOLLINGER, None, price, bollinger=current_band),
        label="Bollinger Bands",
        historical=middle,
        prices=prices_for(computed.bollinger),
        timestamps=timestamps_for(computed.bollinger),
        period=policy.bollinger_period,
        series={
            "upper": [b.upper for b in computed.bollinger],
            "middle": middle,
            "lower": [b.lower for b in computed.bollinger],
        },
    )

    reports[IndicatorKind.STOCHASTIC] = IndicatorReport(
        kind=IndicatorKind.STOCHASTIC,
        value=round(current_stoch, OSCILLATOR_DECIMALS),
        signal=classify(IndicatorKind.STOCHASTIC, current_stoch, price),
        label=f"Stochastic ({policy.stochastic_period})",
        historical=computed.stochastic,
        timestamps=timestamps_for(computed.stochastic),
        period=policy.stochastic_period,
    )

    return reports


# ============================================================================
# Entry Point
# ============================================================================

def analyze(
    raw: RawPriceHistory,
    policy: MinimumHistoryPolicy | None = None,
) -> AnalysisResult:
    """
    Run the full indicator pipeline for one instrument.

    Args:
        raw: Provider price arrays and instrument metadata
        policy: Minimum history policy (default: adaptive)

    Returns:
        AnalysisResult with one report per indicator kind

    Raises:
        InsufficientDataError: If alignment leaves too few valid points
        InvalidPeriodError: If a reported indicator cannot produce a value
    """
    policy = policy or MinimumHistoryPolicy()

    try:
        points = align_prices(
            raw.closes,
            raw.highs,
            raw.lows,
            raw.timestamps,
            min_points=policy.required_points,
        )
    except InsufficientDataError as e:
        logger.warning(f"{raw.symbol}: {e}")
        raise

    dropped = len(raw.closes) - len(points)
    if dropped:
        logger.debug(f"{raw.symbol}: dropped {dropped} incomplete points")

    history = PriceHistory.from_points(points)
    computed = compute_indicators(history, policy)

    try:
        reports = build_reports(history, computed, policy)
    except InvalidPeriodError as e:
        logger.warning(f"{raw.symbol}: {e}")
        raise

    result = AnalysisResult(
        symbol=raw.symbol,
        display_name=raw.display_name or raw.symbol,
        current_price=history.current_price,
        currency=raw.currency,
        indicators=reports,
    )
    logger.info(
        f"{raw.symbol}: analyzed {len(history)} points with {policy.mode.value} policy"
    )
    return result
