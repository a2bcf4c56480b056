"""Upgrade stored/shared property records to the current schema.

Records arrive as plain dicts keyed the way the JSON export writes them
(camelCase). Version 1 predates the post-renovation value and monthly cost
fields; those are filled once here so ``recompute`` always sees a complete
record.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

CURRENT_SCHEMA_VERSION = 2
VERSION_KEY = "schemaVersion"


class UnsupportedSchemaVersion(ValueError):
    pass


def _is_blank(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        return Decimal(str(value)) == 0
    except InvalidOperation:
        return False


def _v1_to_v2(record: dict[str, Any]) -> dict[str, Any]:
    if _is_blank(record.get("afterRenoValue")):
        record["afterRenoValue"] = record.get("price")
    if _is_blank(record.get("monthlyCosts")):
        record["monthlyCosts"] = 0
    if record.get("renoCost") in (None, ""):
        record["renoCost"] = 0
    return record


MIGRATIONS = {
    1: _v1_to_v2,
}


def schema_version(record: dict[str, Any]) -> int:
    raw = record.get(VERSION_KEY, 1)
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        raise UnsupportedSchemaVersion(f"Invalid record schema version {raw!r}")


def migrate_record(record: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``record`` upgraded to CURRENT_SCHEMA_VERSION."""
    version = schema_version(record)
    if version > CURRENT_SCHEMA_VERSION:
        raise UnsupportedSchemaVersion(
            f"Record schema version {version} is newer than supported {CURRENT_SCHEMA_VERSION}"
        )
    if version < 1:
        raise UnsupportedSchemaVersion(f"Invalid record schema version {version}")

    upgraded = dict(record)
    while version < CURRENT_SCHEMA_VERSION:
        upgraded = MIGRATIONS[version](upgraded)
        version += 1
    upgraded[VERSION_KEY] = CURRENT_SCHEMA_VERSION
    return upgraded
