from .report import (
    generate_markdown_report,
    write_report,
)
from .json_api import (
    AnalysisResponse,
    IndicatorResponse,
    SignalSummaryResponse,
    to_api_response,
    to_json,
)

__all__ = [
    # Report generation
    "generate_markdown_report",
    "write_report",
    # JSON API
    "AnalysisResponse",
    "IndicatorResponse",
    "SignalSummaryResponse",
    "to_api_response",
    "to_json",
]
