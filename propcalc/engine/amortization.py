"""Fixed-rate annuity loan math.

Pure functions: Decimal in, Decimal (or dataclass) out. No I/O.

Rates are annual percentages (6.5 means 6.5%). ``term_years`` must be a
positive integer; callers validate it before reaching this module.
"""

from decimal import Decimal

from propcalc.models.results import AmortizationYear

ZERO = Decimal("0")


def _monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / 100 / 12


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, term_years: int) -> Decimal:
    """Calculate fixed monthly payment. No loan means no payment."""
    if principal.is_nan():
        return principal
    if principal <= 0:
        return ZERO

    r = _monthly_rate(annual_rate_percent)
    n = term_years * 12
    if r == 0:
        return principal / n

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)


def remaining_balance(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
    elapsed_years: int | Decimal,
) -> Decimal:
    """Principal still owed after ``elapsed_years`` of scheduled payments.

    Closed form of the annuity balance after p payments:
        B_p = P * [(1+r)^n - (1+r)^p] / [(1+r)^n - 1]
    Clamped to zero once the loan is retired.
    """
    if principal.is_nan():
        return principal
    n = term_years * 12
    p = elapsed_years * 12
    if principal <= 0 or p >= n:
        return ZERO
    if p == 0:
        return principal

    r = _monthly_rate(annual_rate_percent)
    if r == 0:
        return principal - (principal / n) * p

    factor_n = (1 + r) ** n
    factor_p = (1 + r) ** p
    return principal * (factor_n - factor_p) / (factor_n - 1)


def yearly_balances(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
    years: int,
) -> list[Decimal]:
    """Remaining balance at each year boundary, year 0 through ``years``."""
    return [
        remaining_balance(principal, annual_rate_percent, term_years, year)
        for year in range(years + 1)
    ]


def amortization_by_year(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
    years: int | None = None,
) -> list[AmortizationYear]:
    """Split each loan year's twelve payments into principal and interest.

    Principal repaid in a year is the drop in the closed-form balance and
    the remainder of the payments is interest, so the rows agree with
    ``remaining_balance`` at every year boundary. Rows stop at the end of
    the term or after ``years``, whichever comes first.
    """
    if principal.is_nan() or principal <= 0:
        return []

    horizon = term_years if years is None else min(years, term_years)
    paid = monthly_payment(principal, annual_rate_percent, term_years) * 12
    balances = yearly_balances(principal, annual_rate_percent, term_years, horizon)

    rows = []
    for year in range(1, horizon + 1):
        repaid = balances[year - 1] - balances[year]
        rows.append(AmortizationYear(
            year=year,
            payments=paid,
            principal=repaid,
            interest=paid - repaid,
            ending_balance=balances[year],
        ))
    return rows
