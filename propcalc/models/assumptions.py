from dataclasses import dataclass
from decimal import Decimal

from propcalc.config import settings


@dataclass(frozen=True)
class GlobalAssumptions:
    """Economic assumptions shared by every property. All rates in percent."""
    transfer_tax_rate: Decimal = Decimal("4")   # One-time, % of price
    legal_fee_rate: Decimal = Decimal("0.5")    # % of price
    inflation_rate: Decimal = Decimal("3.5")    # Annual; value, rent and costs
    benchmark_rate: Decimal = Decimal("0")      # Annual comparison yield


def default_assumptions() -> GlobalAssumptions:
    """Assumptions seeded from configuration."""
    return GlobalAssumptions(
        transfer_tax_rate=Decimal(str(settings.default_transfer_tax_rate)),
        legal_fee_rate=Decimal(str(settings.default_legal_fee_rate)),
        inflation_rate=Decimal(str(settings.default_inflation_rate)),
        benchmark_rate=Decimal(str(settings.default_benchmark_rate)),
    )
