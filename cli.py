"""
Techsignal CLI - technical indicator signals for one instrument.

Usage:
    techsignal analyze PATH [--symbol SYMBOL] [--policy fixed|adaptive]
                            [--format markdown|json] [--output FILE]
    techsignal lookup SYMBOL [--policy fixed|adaptive] [--format markdown|json]
    techsignal policy LENGTH [--policy fixed|adaptive]

PATH is a saved Yahoo Finance chart document (interval=1d), or '-' for stdin.
`lookup` reads <SYMBOL>.json from the configured chart directories, in order.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from adapters import ChartFileSource, parse_chart_text
from config import ConfigError, TechsignalConfig, get_config, load_config
from domain import AnalysisResult, IndicatorError, PolicyMode
from orchestration.pipeline import analyze
from ports import AdapterError
from presentation.json_api import to_json
from presentation.report import generate_markdown_report


def _load_config(args: argparse.Namespace) -> TechsignalConfig:
    if args.config:
        return load_config(args.config)
    return get_config()


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _emit(result: AnalysisResult, args: argparse.Namespace, config: TechsignalConfig) -> None:
    """Render a result in the requested format to stdout or a file."""
    output_format = args.format or config.output.format
    if output_format == "json":
        content = json.dumps(
            to_json(result, include_series=not args.no_series),
            indent=config.output.json_indent or None,
            ensure_ascii=False,
        )
    else:
        content = generate_markdown_report(result, config.output.date_format)

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        print(f"Report written to {args.output}", file=sys.stderr)
    else:
        print(content)


def cmd_analyze(args: argparse.Namespace) -> int:
    """Analyze a saved chart document."""
    config = _load_config(args)
    mode = PolicyMode(args.policy) if args.policy else None
    policy = config.history_policy(mode)

    try:
        text = _read_input(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    raw = parse_chart_text(text, symbol=args.symbol, default_currency=config.default_currency)
    _emit(analyze(raw, policy), args, config)
    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    """Analyze a symbol from the configured chart directories."""
    config = _load_config(args)
    mode = PolicyMode(args.policy) if args.policy else None
    policy = config.history_policy(mode)

    source = ChartFileSource(config.source.directories, default_currency=config.default_currency)
    raw = source.fetch_history(args.symbol)
    _emit(analyze(raw, policy), args, config)
    return 0


def cmd_policy(args: argparse.Namespace) -> int:
    """Show required history and resolved lookbacks for a history length."""
    config = _load_config(args)
    mode = PolicyMode(args.policy) if args.policy else None
    policy = config.history_policy(mode)

    resolved = policy.resolve(args.length)
    print(f"Policy: {policy.mode.value}")
    print(f"  Required points: {policy.required_points}")
    if args.length < policy.required_points:
        print(f"  {args.length} points is not enough history")
    print(f"  Long MA: {resolved.ma_long}")
    print(f"  Medium MA: {resolved.ma_medium}")
    print(f"  EMA: {resolved.ema}")
    print(f"  RSI: {policy.rsi_period}  Stochastic: {policy.stochastic_period}")
    print(f"  MACD: {policy.macd_fast}/{policy.macd_slow}/{policy.macd_signal}")
    print(f"  Bollinger: {policy.bollinger_period} x {policy.bollinger_std_dev}")
    return 0


def _add_report_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "-p", "--policy",
        choices=[m.value for m in PolicyMode],
        help="Minimum history policy",
    )
    subparser.add_argument(
        "-f", "--format",
        choices=["markdown", "json"],
        help="Output format",
    )
    subparser.add_argument("-o", "--output", help="Output file path")
    subparser.add_argument(
        "--no-series", action="store_true", help="Omit historical series from JSON"
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="techsignal",
        description="Technical indicator signals",
    )
    parser.add_argument("-c", "--config", help="Path to TOML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a saved chart document")
    analyze_parser.add_argument("path", help="Chart JSON file, or '-' for stdin")
    analyze_parser.add_argument("-s", "--symbol", help="Symbol (default: from the document)")
    _add_report_options(analyze_parser)
    analyze_parser.set_defaults(func=cmd_analyze)

    # Lookup command
    lookup_parser = subparsers.add_parser(
        "lookup", help="Analyze a symbol from the configured chart directories"
    )
    lookup_parser.add_argument("symbol", help="Symbol, stored as <SYMBOL>.json")
    _add_report_options(lookup_parser)
    lookup_parser.set_defaults(func=cmd_lookup)

    # Policy command
    policy_parser = subparsers.add_parser("policy", help="Show lookbacks for a history length")
    policy_parser.add_argument("length", type=int, help="Number of valid price points")
    policy_parser.add_argument(
        "-p", "--policy",
        choices=[m.value for m in PolicyMode],
        help="Minimum history policy",
    )
    policy_parser.set_defaults(func=cmd_policy)

    args = parser.parse_args(argv)

    # TECHSIGNAL_* overrides may live in a local .env file
    load_dotenv(Path.cwd() / ".env")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        return args.func(args)
    except (IndicatorError, AdapterError, ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
