"""Tests for JSON and Markdown presentation."""

import io
import json

from domain import AnalysisResult, BandPoint, IndicatorKind, IndicatorReport, Signal
from presentation import generate_markdown_report, to_api_response, to_json, write_report
from presentation.report import generate_indicator_table


class TestJsonApi:

    def test_top_level_fields(self, wave_result):
        data = to_json(wave_result)
        assert data["symbol"] == "WAVE"
        assert data["display_name"] == "Wave Inc"
        assert data["currency"] == "EUR"
        assert set(data["indicators"]) == {k.value for k in IndicatorKind}

    def test_summary_matches_signal_counts(self, wave_result):
        response = to_api_response(wave_result)
        counts = wave_result.signal_counts()
        assert response.summary.buy == counts[Signal.BUY]
        assert response.summary.sell == counts[Signal.SELL]
        assert response.summary.neutral == counts[Signal.NEUTRAL]

    def test_bollinger_value_is_object(self, wave_result):
        bollinger = to_json(wave_result)["indicators"]["bollinger"]
        assert set(bollinger["value"]) == {"upper", "middle", "lower"}
        assert set(bollinger["series"]) == {"upper", "middle", "lower"}

    def test_without_series(self, wave_result):
        rsi = to_json(wave_result, include_series=False)["indicators"]["rsi"]
        assert "historical" not in rsi
        assert "timestamps" not in rsi
        assert rsi["label"] == "RSI (14)"
        assert rsi["as_of"].startswith("2024-")

    def test_serializable(self, wave_result):
        text = json.dumps(to_json(wave_result))
        assert json.loads(text)["indicators"]["macd"]["label"] == "MACD"


class TestMarkdownReport:

    def test_header_and_table(self, wave_result):
        content = generate_markdown_report(wave_result)
        assert content.startswith("# Wave Inc (WAVE)")
        assert "| Indicator | Value | Signal |" in content
        for report in wave_result.indicators.values():
            assert report.label in content

    def test_summary_counts(self, wave_result):
        content = generate_markdown_report(wave_result)
        counts = wave_result.signal_counts()
        assert f"Buy: {counts[Signal.BUY]}" in content
        assert f"Neutral: {counts[Signal.NEUTRAL]}" in content

    def test_write_report_to_stream(self, wave_result):
        buffer = io.StringIO()
        content = write_report(wave_result, output=buffer)
        assert buffer.getvalue() == content

    def test_write_report_to_file(self, wave_result, tmp_path):
        path = tmp_path / "report.md"
        content = write_report(wave_result, filepath=str(path))
        assert path.read_text(encoding="utf-8") == content

    def test_band_position_uses_unrounded_band(self):
        # Rounded to cents this band collapses to zero width
        report = IndicatorReport(
            kind=IndicatorKind.BOLLINGER,
            value=BandPoint(upper=10.0, middle=10.0, lower=10.0),
            signal=Signal.NEUTRAL,
            label="Bollinger Bands",
            historical=[10.002],
            timestamps=[1_700_000_000],
            period=20,
            series={"upper": [10.004], "middle": [10.002], "lower": [10.0]},
        )
        result = AnalysisResult(
            symbol="TIGHT",
            display_name="Tight Range Co",
            current_price=10.003,
            indicators={IndicatorKind.BOLLINGER: report},
        )
        assert "75% of the Bollinger range" in generate_indicator_table(result)
