"""Terminal report for a saved portfolio or a share link.

Usage:
    python -m propcalc.cli portfolio.json
    python -m propcalc.cli "https://example.com/?s=NCwwLjUsMy41O0ZsYXR8NTB8MjAwfDB8MjB8Ni41fDIw"
    python -m propcalc.cli portfolio.json --horizon 10 --series 20 --inflation 2
"""

import argparse
import logging
import sys
from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from propcalc.config import settings
from propcalc.data.portfolio import Portfolio, PortfolioFormatError, load, reassume
from propcalc.data.share import decode_share
from propcalc.engine.series import build_chart_data, roi_table

logger = logging.getLogger(__name__)


def _money(v) -> str:
    return f"{float(v):,.0f}"


def _pct(v) -> str:
    """Format a percent value (already x100)."""
    return f"{float(v):.1f}%"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


def load_source(source: str) -> Portfolio:
    """Accept a JSON export path, a share URL, or a bare share string."""
    try:
        is_file = Path(source).is_file()
    except OSError:
        # Long share strings exceed the filename limit
        is_file = False
    if is_file:
        return load(source)

    encoded = source
    if "?" in source:
        query = parse_qs(urlparse(source).query)
        encoded = query.get(settings.share_url_param, [""])[0]

    portfolio = decode_share(encoded)
    if portfolio is None:
        raise PortfolioFormatError(f"Not a portfolio file or share link: {source}")
    return portfolio


def print_assumptions(portfolio: Portfolio) -> None:
    a = portfolio.assumptions
    _header("Assumptions")
    print(f"  Transfer tax:     {a.transfer_tax_rate}%")
    print(f"  Legal fee:        {a.legal_fee_rate}%")
    print(f"  Inflation:        {a.inflation_rate}%/yr")
    print(f"  Benchmark:        {a.benchmark_rate}%/yr")


def print_table(portfolio: Portfolio, horizon: int) -> None:
    _header(f"Properties ({horizon}-year ROI)")
    print(f"  {'Name':<20} {'Invested':>14} {'Loan':>14} {'Payment':>11} {'Cashflow':>11} {'ROI':>8}")
    for row in roi_table(portfolio.properties, portfolio.assumptions, horizon):
        print(
            f"  {row.name[:20]:<20} {_money(row.total_initial_investment):>14} "
            f"{_money(row.loan_principal):>14} {_money(row.monthly_payment_amount):>11} "
            f"{_money(row.monthly_cashflow):>11} {_pct(row.roi_percent):>8}"
        )


def print_series(portfolio: Portfolio, years: int) -> None:
    chart = build_chart_data(portfolio.properties, portfolio.assumptions, years)
    for s in chart.properties:
        _header(f"{s.name}: {years}-year projection")
        print(f"  {'Year':>4} {'Value':>16} {'Equity':>16} {'Profit':>16} {'ROI':>9}")
        for year in range(years + 1):
            print(
                f"  {year:>4} {_money(s.value[year]):>16} {_money(s.equity[year]):>16} "
                f"{_money(s.profit[year]):>16} {_pct(s.roi_percent[year]):>9}"
            )
    if chart.benchmark is not None and chart.benchmark.rate:
        final = chart.benchmark.roi_percent[-1]
        print(f"\n  Benchmark at {chart.benchmark.rate}%: {_pct(final)} after {years} years")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Leveraged rental property projection report")
    parser.add_argument("source", help="Portfolio JSON file, share URL or share string")
    parser.add_argument(
        "--horizon", type=int, default=settings.roi_table_horizon_years,
        help=f"ROI table horizon in years (default: {settings.roi_table_horizon_years})",
    )
    parser.add_argument(
        "--series", type=int, choices=settings.chart_horizon_options,
        help="Also print a year-by-year projection over this many years",
    )
    parser.add_argument("--inflation", type=Decimal, help="Override inflation rate (%%/yr)")
    parser.add_argument("--benchmark", type=Decimal, help="Override benchmark rate (%%/yr)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        portfolio = load_source(args.source)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    overrides = {}
    if args.inflation is not None:
        overrides["inflation_rate"] = args.inflation
    if args.benchmark is not None:
        overrides["benchmark_rate"] = args.benchmark
    if overrides:
        portfolio = reassume(portfolio, replace(portfolio.assumptions, **overrides))

    print_assumptions(portfolio)
    print_table(portfolio, args.horizon)
    if args.series:
        print_series(portfolio, args.series)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
