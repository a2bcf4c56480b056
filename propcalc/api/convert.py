"""Translation between API schemas and engine dataclasses."""

from dataclasses import replace
from decimal import Context, Decimal, ROUND_HALF_UP, getcontext

from fastapi import HTTPException

from propcalc.api.schemas import (
    AssumptionsInput,
    AssumptionsResponse,
    PortfolioResponse,
    ProjectionResponse,
    PropertyInput,
    PropertyResponse,
)
from propcalc.data.portfolio import Portfolio, new_property_id
from propcalc.engine.projection import recompute
from propcalc.engine.validation import PropertyValidationError, ensure_valid
from propcalc.models.assumptions import GlobalAssumptions, default_assumptions
from propcalc.models.property import Property
from propcalc.models.results import ProjectionResult

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def _round(value: Decimal, places: Decimal) -> Decimal:
    if not value.is_finite():
        return value
    # Room for every integer digit plus the requested places
    digits = max(getcontext().prec, value.adjusted() + 1 - places.as_tuple().exponent)
    return value.quantize(places, ROUND_HALF_UP, Context(prec=digits))


def money(value: Decimal) -> Decimal:
    return _round(value, TWO_PLACES)


def pct(value: Decimal) -> Decimal:
    return _round(value, FOUR_PLACES)


def build_assumptions(data: AssumptionsInput | None) -> GlobalAssumptions:
    """Request overrides on top of the configured defaults."""
    base = default_assumptions()
    if data is None:
        return base
    return replace(base, **data.model_dump(exclude_none=True))


def build_property(data: PropertyInput, assumptions: GlobalAssumptions) -> Property:
    """Validate raw inputs and return the recomputed Property (422 on bad input)."""
    prop = Property(
        id=data.id or new_property_id(),
        name=data.name,
        price=data.price,
        rent=data.rent,
        down_payment_percent=data.down_payment_percent,
        annual_interest_rate=data.annual_interest_rate,
        loan_term_years=data.loan_term_years,
        renovation_cost=data.renovation_cost,
        post_renovation_value=data.post_renovation_value,
        monthly_recurring_costs=data.monthly_recurring_costs,
    )
    try:
        ensure_valid(prop)
    except PropertyValidationError as e:
        raise HTTPException(status_code=422, detail={"property": data.name, "errors": e.errors})
    return recompute(prop, assumptions)


def build_properties(items: list[PropertyInput], assumptions: GlobalAssumptions) -> list[Property]:
    return [build_property(item, assumptions) for item in items]


def assumptions_response(assumptions: GlobalAssumptions) -> AssumptionsResponse:
    return AssumptionsResponse(
        transfer_tax_rate=assumptions.transfer_tax_rate,
        legal_fee_rate=assumptions.legal_fee_rate,
        inflation_rate=assumptions.inflation_rate,
        benchmark_rate=assumptions.benchmark_rate,
    )


def property_response(prop: Property) -> PropertyResponse:
    return PropertyResponse(
        id=prop.id,
        name=prop.name,
        price=prop.price,
        rent=prop.rent,
        down_payment_percent=prop.down_payment_percent,
        annual_interest_rate=prop.annual_interest_rate,
        loan_term_years=prop.loan_term_years,
        renovation_cost=prop.renovation_cost,
        post_renovation_value=prop.valuation,
        monthly_recurring_costs=prop.recurring_costs,
        down_payment_amount=money(prop.down_payment_amount),
        total_initial_investment=money(prop.total_initial_investment),
        loan_principal=money(prop.loan_principal),
        monthly_payment_amount=money(prop.monthly_payment_amount),
        monthly_cashflow=money(prop.monthly_cashflow),
    )


def projection_response(result: ProjectionResult) -> ProjectionResponse:
    return ProjectionResponse(
        year=result.year,
        property_value=money(result.property_value),
        remaining_loan=money(result.remaining_loan),
        equity=money(result.equity),
        cumulative_cashflow=money(result.cumulative_cashflow),
        profit=money(result.profit),
        roi_percent=pct(result.roi_percent),
    )


def portfolio_response(portfolio: Portfolio) -> PortfolioResponse:
    return PortfolioResponse(
        assumptions=assumptions_response(portfolio.assumptions),
        properties=[property_response(p) for p in portfolio.properties],
    )
