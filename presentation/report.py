"""
Markdown report generator.

Transforms an AnalysisResult into a formatted markdown summary.
Pure formatting logic - no I/O except final file writing.
"""

from datetime import datetime, timezone
from typing import TextIO
import sys

from domain import AnalysisResult, BandPoint, IndicatorKind, IndicatorReport, Signal
from domain.signals import band_position

REPORT_ORDER = [
    IndicatorKind.LONG_MOVING_AVERAGE,
    IndicatorKind.EXPONENTIAL_MOVING_AVERAGE,
    IndicatorKind.RSI,
    IndicatorKind.MACD,
    IndicatorKind.BOLLINGER,
    IndicatorKind.STOCHASTIC,
]


def _signal_emoji(signal: Signal) -> str:
    """Get emoji for a signal."""
    return {
        Signal.BUY: "🟢",
        Signal.SELL: "🔴",
        Signal.NEUTRAL: "🟡",
    }.get(signal, "⚪")


def _format_timestamp(ts: int, date_format: str) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime(date_format)


def _current_band(report: IndicatorReport) -> BandPoint | None:
    """Latest unrounded band, falling back to the rounded display value."""
    series = report.series
    if all(series.get(name) for name in ("upper", "middle", "lower")):
        return BandPoint(
            upper=series["upper"][-1],
            middle=series["middle"][-1],
            lower=series["lower"][-1],
        )
    if isinstance(report.value, BandPoint):
        return report.value
    return None


def _format_value(report: IndicatorReport) -> str:
    """Format the current value for the table."""
    if isinstance(report.value, BandPoint):
        band = report.value
        return f"{band.upper:.2f} / {band.middle:.2f} / {band.lower:.2f}"
    if report.kind in (IndicatorKind.RSI, IndicatorKind.STOCHASTIC):
        return f"{report.value:.1f}"
    return f"{report.value:.2f}"


# ============================================================================
# Section Generators
# ============================================================================

def generate_header(result: AnalysisResult, date_format: str = "%Y-%m-%d") -> str:
    """Generate report header."""
    lines = [
        f"# {result.display_name} ({result.symbol})",
        "",
        f"**Price:** {result.current_price:.2f} {result.currency}",
    ]

    timestamps = [r.timestamps[-1] for r in result.indicators.values() if r.timestamps]
    if timestamps:
        lines.append(f"**As of:** {_format_timestamp(max(timestamps), date_format)}")

    lines.append("")
    return "\n".join(lines)


def generate_summary(result: AnalysisResult) -> str:
    """Generate buy/sell/neutral counts."""
    counts = result.signal_counts()
    lines = [
        "## Summary",
        "",
        f"{_signal_emoji(Signal.BUY)} Buy: {counts[Signal.BUY]}  "
        f"{_signal_emoji(Signal.SELL)} Sell: {counts[Signal.SELL]}  "
        f"{_signal_emoji(Signal.NEUTRAL)} Neutral: {counts[Signal.NEUTRAL]}",
        "",
    ]
    return "\n".join(lines)


def generate_indicator_table(result: AnalysisResult) -> str:
    """Generate the per-indicator table."""
    lines = [
        "## Indicators",
        "",
        "| Indicator | Value | Signal |",
        "|-----------|-------|--------|",
    ]

    for kind in REPORT_ORDER:
        report = result.indicators.get(kind)
        if report is None:
            continue
        signal = f"{_signal_emoji(report.signal)} {report.signal.value}"
        lines.append(f"| {report.label} | {_format_value(report)} | {signal} |")

    bollinger = result.indicators.get(IndicatorKind.BOLLINGER)
    band = _current_band(bollinger) if bollinger is not None else None
    if band is not None:
        position = band_position(result.current_price, band)
        if position is not None:
            lines.append("")
            lines.append(f"*Price sits at {position:.0%} of the Bollinger range.*")

    lines.append("")
    return "\n".join(lines)


def generate_footer() -> str:
    return "---\n*Technical indicators only. Not investment advice.*\n"


def generate_markdown_report(result: AnalysisResult, date_format: str = "%Y-%m-%d") -> str:
    """
    Generate full markdown report.

    Args:
        result: Engine output
        date_format: strftime format for dates

    Returns:
        Formatted markdown string
    """
    parts = [
        generate_header(result, date_format),
        generate_summary(result),
        generate_indicator_table(result),
        generate_footer(),
    ]
    return "\n".join(parts)


def write_report(
    result: AnalysisResult,
    output: TextIO | None = None,
    filepath: str | None = None,
    date_format: str = "%Y-%m-%d",
) -> str:
    """
    Generate and write report.

    Args:
        result: Engine output
        output: File-like object to write to (default: stdout)
        filepath: Optional file path to write to

    Returns:
        Generated markdown content
    """
    content = generate_markdown_report(result, date_format)

    if filepath:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    elif output:
        output.write(content)
    else:
        sys.stdout.write(content)

    return content
