"""Compact share-link encoding.

Layout before base64 (UTF-8):

    taxRate,lawyerRate,inflation;name|priceM|rentK|renoM|down%|rate|term|afterRenoM|costsK;...

Prices are in millions, rent and monthly costs in thousands. Links made
before the post-renovation value and monthly costs existed carry only the
first seven property fields.
"""

import base64
import logging
from dataclasses import replace
from decimal import Decimal
from urllib.parse import quote, unquote, urlencode

from propcalc.config import settings
from propcalc.data.portfolio import (
    Portfolio,
    assumptions_from_settings,
    new_property_id,
    property_from_record,
)
from propcalc.models.assumptions import GlobalAssumptions
from propcalc.engine.projection import recompute
from propcalc.models.property import Property

logger = logging.getLogger(__name__)

MILLION = Decimal("1000000")
THOUSAND = Decimal("1000")
MIN_PROPERTY_FIELDS = 7

# Same unreserved set as JavaScript's encodeURIComponent
_URI_SAFE = "-_.!~*'()"


def _fmt(value: Decimal) -> str:
    """Shortest plain decimal string (no exponent, no trailing zeros)."""
    text = format(value.normalize(), "f")
    return "0" if text == "-0" else text


def _encode_property(prop: Property) -> str:
    fields = [
        quote(prop.name, safe=_URI_SAFE),
        _fmt(prop.price / MILLION),
        _fmt(prop.rent / THOUSAND),
        _fmt(prop.renovation_cost / MILLION),
        _fmt(prop.down_payment_percent),
        _fmt(prop.annual_interest_rate),
        str(prop.loan_term_years),
        _fmt(prop.valuation / MILLION),
        _fmt(prop.recurring_costs / THOUSAND),
    ]
    return "|".join(fields)


def encode_share(assumptions: GlobalAssumptions, properties: list[Property]) -> str:
    settings_part = ",".join(
        _fmt(v)
        for v in (assumptions.transfer_tax_rate, assumptions.legal_fee_rate, assumptions.inflation_rate)
    )
    raw = ";".join([settings_part, *(_encode_property(p) for p in properties)])
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def _decode_record(part: str) -> dict:
    fields = part.split("|")
    if len(fields) < MIN_PROPERTY_FIELDS:
        raise ValueError(f"expected at least {MIN_PROPERTY_FIELDS} fields, got {len(fields)}")

    price = Decimal(fields[1]) * MILLION
    record = {
        "schemaVersion": 1,
        "id": new_property_id(),
        "name": unquote(fields[0]),
        "price": price,
        "rent": Decimal(fields[2]) * THOUSAND,
        "renoCost": Decimal(fields[3]) * MILLION,
        "downPaymentPercent": Decimal(fields[4]),
        "rate": Decimal(fields[5]),
        "term": Decimal(fields[6]),
    }
    if len(fields) >= 8:
        record["afterRenoValue"] = Decimal(fields[7]) * MILLION
    if len(fields) >= 9:
        record["monthlyCosts"] = Decimal(fields[8]) * THOUSAND
    return record


def decode_share(encoded: str) -> Portfolio | None:
    """Decode a share string; ``None`` when it is malformed in any way."""
    try:
        padded = encoded.strip().replace(" ", "+")
        padded += "=" * (-len(padded) % 4)
        raw = base64.b64decode(padded, validate=True).decode("utf-8")
        parts = raw.split(";")

        settings_fields = parts[0].split(",")
        if len(settings_fields) != 3:
            logger.warning("Share data has %d settings fields, expected 3", len(settings_fields))
            return None
        assumptions = assumptions_from_settings({
            "taxRate": settings_fields[0],
            "lawyerRate": settings_fields[1],
            "inflation": settings_fields[2],
        })

        properties = [
            property_from_record(_decode_record(part), assumptions) for part in parts[1:]
        ]
    except (ArithmeticError, ValueError) as e:
        # Decimal signals are ArithmeticErrors; binascii, unicode, format
        # and schema errors are ValueErrors
        logger.warning("Error decoding shared data: %s", e)
        return None

    logger.debug("Decoded %d shared properties", len(properties))
    return Portfolio(assumptions=assumptions, properties=properties)


def share_url(base_url: str, encoded: str) -> str:
    return f"{base_url}?{urlencode({settings.share_url_param: encoded})}"


def merge_shared(
    local: list[Property], shared: list[Property], assumptions: GlobalAssumptions
) -> list[Property]:
    """Append shared properties to the local list under fresh ids.

    Shared records are copied, never aliased, so later edits to either list
    cannot leak into the other. Everything is recomputed against the local
    ``assumptions``, which replace the ones the link was shared with.
    """
    merged = [*local, *(replace(p, id=new_property_id()) for p in shared)]
    return [recompute(p, assumptions) for p in merged]
