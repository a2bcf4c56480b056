"""Year-indexed series for charts and the ROI table.

Pure functions. Every series runs from year 0 through ``years`` inclusive,
so it has ``years + 1`` points.
"""

from decimal import Decimal

from propcalc.config import settings
from propcalc.engine.amortization import yearly_balances
from propcalc.engine.projection import compound, project_at, projected_value
from propcalc.models.assumptions import GlobalAssumptions
from propcalc.models.property import Property
from propcalc.models.results import (
    BenchmarkSeries,
    ChartData,
    ProjectionResult,
    PropertySeries,
    RoiTableRow,
)

ZERO = Decimal("0")


def project_series(prop: Property, assumptions: GlobalAssumptions, years: int) -> list[ProjectionResult]:
    return [project_at(prop, assumptions, year) for year in range(years + 1)]


def value_series(prop: Property, assumptions: GlobalAssumptions, years: int) -> list[Decimal]:
    return [projected_value(prop, assumptions, year) for year in range(years + 1)]


def equity_series(prop: Property, assumptions: GlobalAssumptions, years: int) -> list[Decimal]:
    """Appreciated value minus remaining loan, straight from the loan math.

    Unlike ``project_at`` this does not depend on the initial investment,
    so an all-cash or fully financed property still gets a curve.
    """
    balances = yearly_balances(
        prop.loan_principal, prop.annual_interest_rate, prop.loan_term_years, years
    )
    values = value_series(prop, assumptions, years)
    return [value - balance for value, balance in zip(values, balances)]


def roi_series(prop: Property, assumptions: GlobalAssumptions, years: int) -> list[Decimal]:
    return [p.roi_percent for p in project_series(prop, assumptions, years)]


def profit_series(prop: Property, assumptions: GlobalAssumptions, years: int) -> list[Decimal]:
    return [p.profit for p in project_series(prop, assumptions, years)]


def benchmark_roi_series(benchmark_rate: Decimal, years: int) -> list[Decimal]:
    """Cumulative return of the benchmark yield, in percent."""
    return [(compound(benchmark_rate, year) - 1) * 100 for year in range(years + 1)]


def benchmark_profit_series(
    properties: list[Property], benchmark_rate: Decimal, years: int
) -> list[Decimal]:
    """Profit from putting the average initial investment into the benchmark."""
    if not properties:
        return [ZERO] * (years + 1)
    avg_invested = sum(p.total_initial_investment for p in properties) / len(properties)
    return [avg_invested * (compound(benchmark_rate, year) - 1) for year in range(years + 1)]


def build_chart_data(
    properties: list[Property],
    assumptions: GlobalAssumptions,
    years: int | None = None,
) -> ChartData:
    """Every chart series for a horizon, plus the benchmark overlay."""
    years = settings.default_chart_years if years is None else years

    series = []
    for prop in properties:
        projections = project_series(prop, assumptions, years)
        series.append(PropertySeries(
            property_id=prop.id,
            name=prop.name,
            value=value_series(prop, assumptions, years),
            equity=equity_series(prop, assumptions, years),
            roi_percent=[p.roi_percent for p in projections],
            profit=[p.profit for p in projections],
        ))

    benchmark = BenchmarkSeries(
        rate=assumptions.benchmark_rate,
        roi_percent=benchmark_roi_series(assumptions.benchmark_rate, years),
        profit=benchmark_profit_series(properties, assumptions.benchmark_rate, years),
    )
    return ChartData(horizon_years=years, properties=series, benchmark=benchmark)


def roi_table(
    properties: list[Property],
    assumptions: GlobalAssumptions,
    horizon_years: int | None = None,
) -> list[RoiTableRow]:
    """One row per property with its derived fields and horizon ROI."""
    horizon = settings.roi_table_horizon_years if horizon_years is None else horizon_years
    return [
        RoiTableRow(
            property_id=prop.id,
            name=prop.name,
            total_initial_investment=prop.total_initial_investment,
            down_payment_amount=prop.down_payment_amount,
            loan_principal=prop.loan_principal,
            monthly_payment_amount=prop.monthly_payment_amount,
            monthly_cashflow=prop.monthly_cashflow,
            horizon_years=horizon,
            roi_percent=project_at(prop, assumptions, horizon).roi_percent,
        )
        for prop in properties
    ]
