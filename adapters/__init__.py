from .yahoo import ChartFileSource, parse_chart, parse_chart_text

__all__ = [
    "ChartFileSource",
    "parse_chart",
    "parse_chart_text",
]
