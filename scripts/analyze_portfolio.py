"""Analyze the annual fees of a portfolio CSV or a generated sample portfolio."""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from clearvest.config_loader import load_settings
from clearvest.errors import FormatError
from clearvest.generator import generate_sample_portfolio
from clearvest.pipeline import analyze_portfolio, load_holdings_from_csv
from clearvest.sources.export import export_filename, export_priced_holdings_to_csv


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv", type=Path, help="Portfolio CSV with Asset, Amount and Broker columns.")
    source.add_argument("--sample", action="store_true", help="Analyze a randomly generated portfolio.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --sample.")
    parser.add_argument("--config", type=Path, default=None, help="Settings YAML file.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory to write the dated CSV export to.",
    )
    parser.add_argument("--market-data", action="store_true", help="Enrich holdings with live prices.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = load_settings(args.config)
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger('clearvest').setLevel(settings.log_level.upper())

    if args.sample:
        raw = generate_sample_portfolio(random.Random(args.seed))
    else:
        try:
            raw = load_holdings_from_csv(args.csv)
        except FormatError as exc:
            print(f"Could not read {args.csv}: {exc}", file=sys.stderr)
            return 1

    report = analyze_portfolio(raw, settings, market_data=args.market_data)

    print(f"{'Asset':<10} {'Broker':<22} {'Amount':>10} {'Cost':>9} {'Cost %':>7}  Suggestion")
    for holding in report.holdings:
        print(
            f"{holding.symbol:<10} {holding.broker_name:<22} {holding.amount:>10.0f} "
            f"{holding.total_annual_cost:>9.2f} {holding.cost_percent:>6.2f}%  {holding.suggestion}"
        )

    summary = report.summary
    print(
        f"\nTotal value EUR {summary.total_value:,.2f} | annual fees EUR {summary.total_cost:,.2f} "
        f"({summary.average_cost_percent:.2f}%) | potential savings EUR {summary.potential_savings:,.2f}"
    )

    if args.output:
        args.output.mkdir(parents=True, exist_ok=True)
        target = args.output / export_filename(settings.export_basename)
        export_priced_holdings_to_csv(report.holdings, target)
        print(f"Wrote {len(report.holdings)} rows to {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
