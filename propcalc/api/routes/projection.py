"""Projection routes: recompute, single-year projection, series and table."""

import logging
from decimal import Decimal

from fastapi import APIRouter, HTTPException

from propcalc.api.convert import (
    build_assumptions,
    build_properties,
    build_property,
    money,
    pct,
    projection_response,
    property_response,
)
from propcalc.api.schemas import (
    AmortizationRequest,
    AmortizationResponse,
    AmortizationYearResponse,
    BenchmarkSeriesResponse,
    ProjectRequest,
    ProjectResponse,
    PropertyResponse,
    PropertySeriesResponse,
    RecomputeRequest,
    RoiTableRowResponse,
    SeriesRequest,
    SeriesResponse,
    TableRequest,
)
from propcalc.config import settings
from propcalc.engine.amortization import amortization_by_year, monthly_payment
from propcalc.engine.projection import project_at
from propcalc.engine.series import build_chart_data, roi_table

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

router = APIRouter(prefix="/api/v1", tags=["projection"])


@router.post("/recompute", response_model=PropertyResponse)
async def recompute_property(req: RecomputeRequest):
    """Raw inputs → property with derived fields filled in."""
    assumptions = build_assumptions(req.assumptions)
    return property_response(build_property(req.property, assumptions))


@router.post("/project", response_model=ProjectResponse)
async def project(req: ProjectRequest):
    assumptions = build_assumptions(req.assumptions)
    prop = build_property(req.property, assumptions)
    result = project_at(prop, assumptions, req.year)
    return ProjectResponse(property=property_response(prop), projection=projection_response(result))


@router.post("/amortization", response_model=AmortizationResponse)
async def amortization(req: AmortizationRequest):
    """Yearly principal/interest split of a fixed-rate loan."""
    rows = amortization_by_year(
        principal=req.principal,
        annual_rate_percent=req.annual_interest_rate,
        term_years=req.loan_term_years,
        years=req.years,
    )
    return AmortizationResponse(
        monthly_payment=money(monthly_payment(req.principal, req.annual_interest_rate, req.loan_term_years)),
        total_payments=money(sum((r.payments for r in rows), ZERO)),
        total_principal=money(sum((r.principal for r in rows), ZERO)),
        total_interest=money(sum((r.interest for r in rows), ZERO)),
        years=[
            AmortizationYearResponse(
                year=r.year,
                payments=money(r.payments),
                principal=money(r.principal),
                interest=money(r.interest),
                ending_balance=money(r.ending_balance),
            )
            for r in rows
        ],
    )


@router.post("/series", response_model=SeriesResponse)
async def series(req: SeriesRequest):
    """Chart data for every property over one of the offered horizons."""
    years = settings.default_chart_years if req.years is None else req.years
    if years not in settings.chart_horizon_options:
        raise HTTPException(
            status_code=422,
            detail=f"years must be one of {settings.chart_horizon_options}",
        )

    assumptions = build_assumptions(req.assumptions)
    properties = build_properties(req.properties, assumptions)
    chart = build_chart_data(properties, assumptions, years)
    logger.debug("Built %d-year series for %d properties", years, len(properties))

    return SeriesResponse(
        horizon_years=chart.horizon_years,
        labels=[f"Year {i}" for i in range(years + 1)],
        properties=[
            PropertySeriesResponse(
                property_id=s.property_id,
                name=s.name,
                value=[money(v) for v in s.value],
                equity=[money(v) for v in s.equity],
                roi_percent=[pct(v) for v in s.roi_percent],
                profit=[money(v) for v in s.profit],
            )
            for s in chart.properties
        ],
        benchmark=BenchmarkSeriesResponse(
            rate=chart.benchmark.rate,
            roi_percent=[pct(v) for v in chart.benchmark.roi_percent],
            profit=[money(v) for v in chart.benchmark.profit],
        ),
    )


@router.post("/table", response_model=list[RoiTableRowResponse])
async def table(req: TableRequest):
    assumptions = build_assumptions(req.assumptions)
    properties = build_properties(req.properties, assumptions)
    return [
        RoiTableRowResponse(
            property_id=row.property_id,
            name=row.name,
            total_initial_investment=money(row.total_initial_investment),
            down_payment_amount=money(row.down_payment_amount),
            loan_principal=money(row.loan_principal),
            monthly_payment_amount=money(row.monthly_payment_amount),
            monthly_cashflow=money(row.monthly_cashflow),
            horizon_years=row.horizon_years,
            roi_percent=pct(row.roi_percent),
        )
        for row in roi_table(properties, assumptions, req.horizon_years)
    ]
