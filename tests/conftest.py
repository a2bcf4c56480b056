"""Canonical test fixtures used across all tests.

Fixture: 50M flat, 20% down, 6.5% rate, 20yr fixed, 200K/month rent.
Assumptions: 4% transfer tax, 0.5% legal fee, 3.5% inflation.
"""

import pytest
from decimal import Decimal

from propcalc.engine.projection import recompute
from propcalc.models.assumptions import GlobalAssumptions
from propcalc.models.property import Property


@pytest.fixture
def canonical_assumptions() -> GlobalAssumptions:
    return GlobalAssumptions(
        transfer_tax_rate=Decimal("4"),
        legal_fee_rate=Decimal("0.5"),
        inflation_rate=Decimal("3.5"),
        benchmark_rate=Decimal("5"),
    )


@pytest.fixture
def raw_property() -> Property:
    """Raw inputs only, as entered in the form."""
    return Property(
        id="flat-1",
        name="Downtown flat",
        price=Decimal("50000000"),
        rent=Decimal("200000"),
        down_payment_percent=Decimal("20"),
        annual_interest_rate=Decimal("6.5"),
        loan_term_years=20,
        renovation_cost=Decimal("0"),
    )


@pytest.fixture
def canonical_property(raw_property, canonical_assumptions) -> Property:
    return recompute(raw_property, canonical_assumptions)


@pytest.fixture
def renovated_property(canonical_assumptions) -> Property:
    """Fixer-upper: renovation budget, higher post-renovation value, running costs."""
    return recompute(
        Property(
            id="house-2",
            name="Fixer-upper house",
            price=Decimal("40000000"),
            rent=Decimal("250000"),
            down_payment_percent=Decimal("30"),
            annual_interest_rate=Decimal("5"),
            loan_term_years=25,
            renovation_cost=Decimal("8000000"),
            post_renovation_value=Decimal("55000000"),
            monthly_recurring_costs=Decimal("30000"),
        ),
        canonical_assumptions,
    )
