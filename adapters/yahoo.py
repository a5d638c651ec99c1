"""
Yahoo Finance chart payload adapter.

Parses the `v8/finance/chart` JSON document (interval=1d) into a
RawPriceHistory, and serves saved documents from an ordered list of
directories. Works on payloads that were already retrieved; downloading
them belongs to the caller.
"""

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from domain import ErrorCode, RawPriceHistory
from ports import DataError, FetchError, ParseError, RetryPolicy, run_with_fallback

logger = logging.getLogger(__name__)

SOURCE_NAME = "yahoo"


def _quote_series(quote: dict[str, Any], key: str) -> list[float | None]:
    values = quote.get(key) or []
    if not isinstance(values, list):
        raise DataError(SOURCE_NAME, f"quote.{key} is not a list", field=f"quote.{key}")
    return values


def parse_chart(
    payload: dict[str, Any],
    symbol: str | None = None,
    default_currency: str = "USD",
) -> RawPriceHistory:
    """
    Convert a chart payload into raw price arrays plus metadata.

    Args:
        payload: Decoded chart JSON document
        symbol: Requested symbol (falls back to meta.symbol)
        default_currency: Currency when meta has none

    Returns:
        RawPriceHistory with provider gaps kept as None

    Raises:
        DataError: If the payload reports an error or holds no result
    """
    chart = payload.get("chart")
    if not isinstance(chart, dict):
        raise DataError.missing(SOURCE_NAME, "chart")

    error = chart.get("error")
    if error:
        description = error.get("description") if isinstance(error, dict) else str(error)
        raise DataError(
            SOURCE_NAME,
            f"Provider error: {description}",
            code=ErrorCode.DATA_EMPTY,
        )

    results = chart.get("result") or []
    if not isinstance(results, list):
        raise DataError(SOURCE_NAME, "chart.result is not a list", field="chart.result")
    if not results:
        raise DataError.empty(SOURCE_NAME, "No data found for this symbol")

    result = results[0]
    if not isinstance(result, dict):
        raise DataError(SOURCE_NAME, "chart.result[0] is not an object", field="chart.result")
    meta = result.get("meta") or {}
    quotes = (result.get("indicators") or {}).get("quote") or [{}]
    quote = quotes[0] or {}

    resolved_symbol = symbol or meta.get("symbol")
    if not resolved_symbol:
        raise DataError.missing(SOURCE_NAME, "meta.symbol")

    closes = _quote_series(quote, "close")
    highs = _quote_series(quote, "high")
    lows = _quote_series(quote, "low")
    timestamps = result.get("timestamp") or []

    logger.debug(f"{resolved_symbol}: parsed {len(closes)} raw data points")

    return RawPriceHistory(
        symbol=resolved_symbol,
        display_name=meta.get("longName") or meta.get("shortName") or resolved_symbol,
        currency=meta.get("currency") or default_currency,
        closes=closes,
        highs=highs,
        lows=lows,
        timestamps=timestamps,
    )


def parse_chart_text(
    text: str,
    symbol: str | None = None,
    default_currency: str = "USD",
) -> RawPriceHistory:
    """Parse a chart payload from its JSON text.

    Raises:
        ParseError: If the text is not valid JSON
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(SOURCE_NAME, str(e), raw_content=text, cause=e)

    if not isinstance(payload, dict):
        raise ParseError(SOURCE_NAME, "top-level value is not an object", raw_content=text)

    return parse_chart(payload, symbol=symbol, default_currency=default_currency)


class ChartFileSource:
    """
    Price history source backed by saved chart documents.

    Looks for `<directory>/<SYMBOL>.json` in each directory in order and
    returns the first document that parses. Satisfies the PriceHistorySource
    port.
    """

    def __init__(
        self,
        directories: Path | str | Sequence[Path | str],
        default_currency: str = "USD",
    ):
        if isinstance(directories, (str, Path)):
            directories = [directories]
        self.directories = [Path(d) for d in directories]
        self.default_currency = default_currency
        self.policy = RetryPolicy(endpoints=tuple(str(d) for d in self.directories))

    @property
    def source_name(self) -> str:
        return SOURCE_NAME

    def path_for(self, symbol: str, directory: Path | str | None = None) -> Path:
        base = Path(directory) if directory is not None else self.directories[0]
        return base / f"{symbol.upper()}.json"

    def read_document(self, path: Path, symbol: str | None = None) -> RawPriceHistory:
        """Read and parse one saved chart document.

        Raises:
            FetchError: If the file is missing or unreadable
            ParseError: If the file is not UTF-8 JSON
            DataError: If the document holds no usable price data
        """
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(
                SOURCE_NAME,
                f"{path} is not valid UTF-8",
                code=ErrorCode.PARSE_ENCODING,
                cause=e,
            )
        except OSError as e:
            raise FetchError.from_os_error(SOURCE_NAME, e, str(path))

        return parse_chart_text(text, symbol=symbol, default_currency=self.default_currency)

    def fetch_history(self, symbol: str) -> RawPriceHistory:
        """
        Load a symbol's history from the first directory holding a good copy.

        Raises:
            RetryExhaustedError: If no directory yields a usable document
        """
        def attempt(directory: str, timeout: float) -> RawPriceHistory:
            return self.read_document(self.path_for(symbol, directory), symbol=symbol)

        raw = run_with_fallback(self.policy, attempt, source=SOURCE_NAME)
        logger.debug(f"{raw.symbol}: loaded {len(raw.closes)} raw data points")
        return raw
