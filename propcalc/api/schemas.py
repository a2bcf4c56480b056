"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class AssumptionsInput(BaseModel):
    transfer_tax_rate: Decimal | None = Field(None, description="Transfer tax, % of price")
    legal_fee_rate: Decimal | None = Field(None, description="Legal fee, % of price")
    inflation_rate: Decimal | None = Field(None, description="Annual growth of value, rent and costs, %")
    benchmark_rate: Decimal | None = Field(None, description="Comparison yield, %/yr")


class PropertyInput(BaseModel):
    id: str | None = Field(None, description="Stable id; generated when omitted")
    name: str = ""
    price: Decimal
    rent: Decimal = Field(..., description="Monthly rent")
    down_payment_percent: Decimal
    annual_interest_rate: Decimal
    loan_term_years: int
    renovation_cost: Decimal = Decimal("0")
    post_renovation_value: Decimal | None = None
    monthly_recurring_costs: Decimal | None = None


class RecomputeRequest(BaseModel):
    property: PropertyInput
    assumptions: AssumptionsInput | None = None


class ProjectRequest(BaseModel):
    property: PropertyInput
    assumptions: AssumptionsInput | None = None
    year: int = Field(5, ge=0, le=100)


class AmortizationRequest(BaseModel):
    principal: Decimal = Field(..., ge=0)
    annual_interest_rate: Decimal = Field(..., ge=0)
    loan_term_years: int = Field(..., ge=1)
    years: int | None = Field(None, ge=1, description="Stop after this many years; defaults to the full term")


class PortfolioRequest(BaseModel):
    properties: list[PropertyInput]
    assumptions: AssumptionsInput | None = None


class SeriesRequest(PortfolioRequest):
    years: int | None = None


class TableRequest(PortfolioRequest):
    horizon_years: int | None = Field(None, ge=0, le=100)


class ShareEncodeRequest(PortfolioRequest):
    base_url: str | None = None


class ShareDecodeRequest(BaseModel):
    encoded: str


# ---- Response schemas ----

class AssumptionsResponse(BaseModel):
    transfer_tax_rate: Decimal
    legal_fee_rate: Decimal
    inflation_rate: Decimal
    benchmark_rate: Decimal


class PropertyResponse(BaseModel):
    id: str
    name: str
    price: Decimal
    rent: Decimal
    down_payment_percent: Decimal
    annual_interest_rate: Decimal
    loan_term_years: int
    renovation_cost: Decimal
    post_renovation_value: Decimal
    monthly_recurring_costs: Decimal

    down_payment_amount: Decimal
    total_initial_investment: Decimal
    loan_principal: Decimal
    monthly_payment_amount: Decimal
    monthly_cashflow: Decimal


class ProjectionResponse(BaseModel):
    year: int
    property_value: Decimal
    remaining_loan: Decimal
    equity: Decimal
    cumulative_cashflow: Decimal
    profit: Decimal
    roi_percent: Decimal


class ProjectResponse(BaseModel):
    property: PropertyResponse
    projection: ProjectionResponse


class AmortizationYearResponse(BaseModel):
    year: int
    payments: Decimal
    principal: Decimal
    interest: Decimal
    ending_balance: Decimal


class AmortizationResponse(BaseModel):
    monthly_payment: Decimal
    total_payments: Decimal
    total_principal: Decimal
    total_interest: Decimal
    years: list[AmortizationYearResponse]


class PropertySeriesResponse(BaseModel):
    property_id: str
    name: str
    value: list[Decimal]
    equity: list[Decimal]
    roi_percent: list[Decimal]
    profit: list[Decimal]


class BenchmarkSeriesResponse(BaseModel):
    rate: Decimal
    roi_percent: list[Decimal]
    profit: list[Decimal]


class SeriesResponse(BaseModel):
    horizon_years: int
    labels: list[str]
    properties: list[PropertySeriesResponse]
    benchmark: BenchmarkSeriesResponse


class RoiTableRowResponse(BaseModel):
    property_id: str
    name: str
    total_initial_investment: Decimal
    down_payment_amount: Decimal
    loan_principal: Decimal
    monthly_payment_amount: Decimal
    monthly_cashflow: Decimal
    horizon_years: int
    roi_percent: Decimal


class PortfolioResponse(BaseModel):
    assumptions: AssumptionsResponse
    properties: list[PropertyResponse]


class ShareEncodeResponse(BaseModel):
    encoded: str
    url: str | None = None
