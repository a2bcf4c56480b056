"""JSON export/import of a full portfolio (assumptions + properties).

Document layout, compatible with files written by the browser calculator:

    {
      "settings": {"taxRate": 4, "lawyerRate": 0.5, "inflation": 3.5, "benchmarkRate": 0},
      "properties": [{"id": ..., "name": ..., "price": ..., "rent": ..., ...}]
    }
"""

import json
import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any
from uuid import uuid4

from propcalc.engine.migration import CURRENT_SCHEMA_VERSION, VERSION_KEY, migrate_record
from propcalc.engine.projection import recompute
from propcalc.models.assumptions import GlobalAssumptions, default_assumptions
from propcalc.models.property import Property

logger = logging.getLogger(__name__)

SETTINGS_KEYS = {
    "taxRate": "transfer_tax_rate",
    "lawyerRate": "legal_fee_rate",
    "inflation": "inflation_rate",
    "benchmarkRate": "benchmark_rate",
}


class PortfolioFormatError(ValueError):
    pass


@dataclass(frozen=True)
class Portfolio:
    assumptions: GlobalAssumptions
    properties: list[Property] = field(default_factory=list)


def new_property_id() -> str:
    return uuid4().hex


def _decimal(value: Any, key: str) -> Decimal:
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise PortfolioFormatError(f"Field {key!r} is not a number: {value!r}")
    if not number.is_finite():
        raise PortfolioFormatError(f"Field {key!r} must be finite, got {value!r}")
    return number


def _whole_years(value: Any, key: str) -> int:
    number = _decimal(value, key)
    if number != number.to_integral_value():
        raise PortfolioFormatError(f"Field {key!r} must be a whole number of years, got {value!r}")
    return int(number)


def assumptions_from_settings(data: dict[str, Any] | None) -> GlobalAssumptions:
    """Overlay a ``settings`` block on the configured defaults."""
    base = default_assumptions()
    if not data:
        return base
    overrides = {
        attr: _decimal(data[key], key)
        for key, attr in SETTINGS_KEYS.items()
        if data.get(key) is not None
    }
    return replace(base, **overrides)


def assumptions_to_settings(assumptions: GlobalAssumptions) -> dict[str, float]:
    return {key: float(getattr(assumptions, attr)) for key, attr in SETTINGS_KEYS.items()}


def property_from_record(record: dict[str, Any], assumptions: GlobalAssumptions) -> Property:
    """Migrate a stored record, build the Property and recompute it."""
    if not isinstance(record, dict):
        raise PortfolioFormatError(f"Property record must be an object, got {type(record).__name__}")
    record = migrate_record(record)
    try:
        prop = Property(
            id=str(record.get("id") or new_property_id()),
            name=str(record.get("name", "")),
            price=_decimal(record["price"], "price"),
            rent=_decimal(record["rent"], "rent"),
            renovation_cost=_decimal(record["renoCost"], "renoCost"),
            post_renovation_value=_decimal(record["afterRenoValue"], "afterRenoValue"),
            monthly_recurring_costs=_decimal(record["monthlyCosts"], "monthlyCosts"),
            down_payment_percent=_decimal(record["downPaymentPercent"], "downPaymentPercent"),
            annual_interest_rate=_decimal(record["rate"], "rate"),
            loan_term_years=_whole_years(record["term"], "term"),
        )
    except KeyError as e:
        raise PortfolioFormatError(f"Property record missing field {e.args[0]!r}")
    try:
        return recompute(prop, assumptions)
    except ArithmeticError as e:
        raise PortfolioFormatError(f"Property {prop.name!r} has out-of-range numbers: {e!r}")


def property_to_record(prop: Property) -> dict[str, Any]:
    return {
        VERSION_KEY: CURRENT_SCHEMA_VERSION,
        "id": prop.id,
        "name": prop.name,
        "price": float(prop.price),
        "rent": float(prop.rent),
        "renoCost": float(prop.renovation_cost),
        "afterRenoValue": float(prop.valuation),
        "monthlyCosts": float(prop.recurring_costs),
        "downPaymentPercent": float(prop.down_payment_percent),
        "rate": float(prop.annual_interest_rate),
        "term": prop.loan_term_years,
        # Derived, informational only; recomputed on import
        "downPayment": float(prop.down_payment_amount),
        "totalInvested": float(prop.total_initial_investment),
        "loanAmount": float(prop.loan_principal),
        "monthlyPayment": float(prop.monthly_payment_amount),
        "cashflow": float(prop.monthly_cashflow),
    }


def export_document(portfolio: Portfolio) -> dict[str, Any]:
    return {
        "settings": assumptions_to_settings(portfolio.assumptions),
        "properties": [property_to_record(p) for p in portfolio.properties],
    }


def import_document(data: Any) -> Portfolio:
    """Parse an exported document; every property comes back recomputed."""
    if not isinstance(data, dict) or not isinstance(data.get("properties"), list):
        raise PortfolioFormatError("Invalid file: missing properties array.")

    assumptions = assumptions_from_settings(data.get("settings"))
    properties = [property_from_record(r, assumptions) for r in data["properties"]]
    logger.info("Imported %d properties", len(properties))
    return Portfolio(assumptions=assumptions, properties=properties)


def reassume(portfolio: Portfolio, assumptions: GlobalAssumptions) -> Portfolio:
    """Swap the assumptions and recompute every property against them."""
    return Portfolio(
        assumptions=assumptions,
        properties=[recompute(p, assumptions) for p in portfolio.properties],
    )


def dumps(portfolio: Portfolio) -> str:
    return json.dumps(export_document(portfolio), indent=2, ensure_ascii=False)


def loads(text: str) -> Portfolio:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PortfolioFormatError(f"Invalid JSON: {e}")
    return import_document(data)


def save(portfolio: Portfolio, path: str | Path) -> None:
    Path(path).write_text(dumps(portfolio), encoding="utf-8")
    logger.debug("Saved %d properties to %s", len(portfolio.properties), path)


def load(path: str | Path) -> Portfolio:
    return loads(Path(path).read_text(encoding="utf-8"))
