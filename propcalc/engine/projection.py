"""Property normalization and multi-year projection.

Pure computation. No I/O. Property and GlobalAssumptions in, fresh
dataclasses out; the input record is never mutated.
"""

from dataclasses import replace
from decimal import Decimal

from propcalc.engine.amortization import monthly_payment, remaining_balance
from propcalc.models.assumptions import GlobalAssumptions
from propcalc.models.property import Property
from propcalc.models.results import ProjectionResult

ZERO = Decimal("0")
ONE = Decimal("1")


def recompute(prop: Property, assumptions: GlobalAssumptions) -> Property:
    """Return ``prop`` with every derived field refreshed.

    Derived fields depend only on the raw inputs and ``assumptions``, so
    recomputing an already-normalized record yields an equal record.
    """
    price = prop.price

    # Legacy records are filled by migration; keep the defaults idempotent here
    post_renovation_value = prop.valuation
    recurring_costs = prop.recurring_costs

    down_payment = price * prop.down_payment_percent / 100
    transfer_tax = price * assumptions.transfer_tax_rate / 100
    legal_fee = price * assumptions.legal_fee_rate / 100

    total_initial_investment = down_payment + prop.renovation_cost + transfer_tax + legal_fee
    loan_principal = price - down_payment
    payment = monthly_payment(loan_principal, prop.annual_interest_rate, prop.loan_term_years)

    return replace(
        prop,
        post_renovation_value=post_renovation_value,
        monthly_recurring_costs=recurring_costs,
        down_payment_amount=down_payment,
        total_initial_investment=total_initial_investment,
        loan_principal=loan_principal,
        monthly_payment_amount=payment,
        monthly_cashflow=prop.rent - payment - recurring_costs,
    )


def compound(rate_percent: Decimal, years: int) -> Decimal:
    """Growth multiplier of ``rate_percent`` per year over ``years`` years.

    Year 0 is always 1, including a -100% rate whose zero base Decimal
    would otherwise refuse to raise to the power 0.
    """
    if years == 0:
        return ONE
    return (1 + rate_percent / 100) ** years


def growth_factor(assumptions: GlobalAssumptions, years: int) -> Decimal:
    """Compounded inflation over ``years`` whole years."""
    return compound(assumptions.inflation_rate, years)


def projected_value(prop: Property, assumptions: GlobalAssumptions, year: int) -> Decimal:
    """Post-renovation value appreciated at the inflation rate."""
    return prop.valuation * growth_factor(assumptions, year)


def cumulative_cashflow(prop: Property, assumptions: GlobalAssumptions, target_year: int) -> Decimal:
    """Sum of yearly net cashflow for years 1..target_year.

    Rent and recurring costs escalate from the year-0 baseline with a
    one-year lag (year 1 is un-inflated); the fixed-rate payment never does.
    """
    annual_payment = prop.monthly_payment_amount * 12
    total = ZERO
    for year in range(1, target_year + 1):
        escalation = growth_factor(assumptions, year - 1)
        yearly_rent = prop.rent * 12 * escalation
        yearly_costs = prop.recurring_costs * 12 * escalation
        total += yearly_rent - annual_payment - yearly_costs
    return total


def project_at(prop: Property, assumptions: GlobalAssumptions, target_year: int) -> ProjectionResult:
    """Project equity, cumulative cashflow, profit and ROI at ``target_year``.

    ``prop`` must already have been through ``recompute``. A non-positive
    initial investment has no meaningful return, so every metric is zero.
    """
    invested = prop.total_initial_investment
    if not invested.is_nan() and invested <= 0:
        return ProjectionResult(year=target_year)

    value = projected_value(prop, assumptions, target_year)
    cashflow = cumulative_cashflow(prop, assumptions, target_year)
    remaining_loan = remaining_balance(
        prop.loan_principal,
        prop.annual_interest_rate,
        prop.loan_term_years,
        target_year,
    )

    equity = value - remaining_loan
    profit = equity + cashflow - invested

    return ProjectionResult(
        year=target_year,
        property_value=value,
        remaining_loan=remaining_loan,
        equity=equity,
        cumulative_cashflow=cashflow,
        profit=profit,
        roi_percent=profit / invested * 100,
    )
