from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ProjectionResult:
    year: int
    property_value: Decimal = Decimal("0")
    remaining_loan: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")  # Value - remaining loan
    cumulative_cashflow: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")  # Equity + cashflow - initial investment
    roi_percent: Decimal = Decimal("0")


@dataclass(frozen=True)
class PropertySeries:
    """Per-year chart data for one property, index = year (0..horizon)."""
    property_id: str
    name: str
    value: list[Decimal] = field(default_factory=list)
    equity: list[Decimal] = field(default_factory=list)
    roi_percent: list[Decimal] = field(default_factory=list)
    profit: list[Decimal] = field(default_factory=list)


@dataclass(frozen=True)
class BenchmarkSeries:
    rate: Decimal
    roi_percent: list[Decimal] = field(default_factory=list)
    profit: list[Decimal] = field(default_factory=list)


@dataclass(frozen=True)
class ChartData:
    horizon_years: int
    properties: list[PropertySeries] = field(default_factory=list)
    benchmark: BenchmarkSeries | None = None


@dataclass(frozen=True)
class RoiTableRow:
    property_id: str
    name: str
    total_initial_investment: Decimal
    down_payment_amount: Decimal
    loan_principal: Decimal
    monthly_payment_amount: Decimal
    monthly_cashflow: Decimal
    horizon_years: int
    roi_percent: Decimal


@dataclass(frozen=True)
class AmortizationYear:
    year: int
    payments: Decimal  # Twelve fixed payments
    principal: Decimal  # Drop in balance over the year
    interest: Decimal
    ending_balance: Decimal
