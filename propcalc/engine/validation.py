"""Input checks run before a property reaches ``recompute``.

The engine itself never rejects numbers; this is the boundary that does.
"""

from decimal import Decimal

from propcalc.models.property import Property


class PropertyValidationError(ValueError):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def validate_inputs(
    price: Decimal,
    down_payment_percent: Decimal,
    annual_interest_rate: Decimal,
    loan_term_years: int,
    rent: Decimal,
) -> list[str]:
    """Return human-readable problems with the raw inputs (empty when valid)."""
    values = (price, down_payment_percent, annual_interest_rate, Decimal(loan_term_years), rent)
    if any(not v.is_finite() for v in values):
        return ["All numeric fields must be finite numbers"]

    errors: list[str] = []
    if price <= 0:
        errors.append("Price must be positive")
    if down_payment_percent < 0 or down_payment_percent > 100:
        errors.append("Down payment must be 0-100%")
    if annual_interest_rate < 0:
        errors.append("Interest rate cannot be negative")
    if loan_term_years < 1:
        errors.append("Loan term must be at least 1 year")
    if rent < 0:
        errors.append("Rent cannot be negative")
    return errors


def validate_property(prop: Property) -> list[str]:
    return validate_inputs(
        price=prop.price,
        down_payment_percent=prop.down_payment_percent,
        annual_interest_rate=prop.annual_interest_rate,
        loan_term_years=prop.loan_term_years,
        rent=prop.rent,
    )


def ensure_valid(prop: Property) -> Property:
    """Raise PropertyValidationError unless ``prop`` passes every check."""
    errors = validate_property(prop)
    if errors:
        raise PropertyValidationError(errors)
    return prop
