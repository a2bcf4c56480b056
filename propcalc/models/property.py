from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Property:
    """An investment candidate.

    Raw inputs are authoritative. Derived fields are only ever written by
    ``recompute`` and stay at zero until it has run.
    """
    id: str
    name: str
    price: Decimal
    rent: Decimal  # Monthly
    down_payment_percent: Decimal
    annual_interest_rate: Decimal  # Percent
    loan_term_years: int
    renovation_cost: Decimal = Decimal("0")
    post_renovation_value: Decimal | None = None  # Falls back to price
    monthly_recurring_costs: Decimal | None = None

    # Derived
    down_payment_amount: Decimal = Decimal("0")
    total_initial_investment: Decimal = Decimal("0")
    loan_principal: Decimal = Decimal("0")
    monthly_payment_amount: Decimal = Decimal("0")
    monthly_cashflow: Decimal = Decimal("0")

    @property
    def valuation(self) -> Decimal:
        """Post-renovation value, or price when none was entered."""
        return self.post_renovation_value or self.price

    @property
    def recurring_costs(self) -> Decimal:
        return self.monthly_recurring_costs or Decimal("0")
