import pytest

from propcalc.engine.migration import (
    CURRENT_SCHEMA_VERSION,
    UnsupportedSchemaVersion,
    migrate_record,
    schema_version,
)

LEGACY = {
    "id": 1700000000000,
    "name": "Old flat",
    "price": 30000000,
    "rent": 150000,
    "renoCost": 0,
    "downPaymentPercent": 20,
    "rate": 6,
    "term": 20,
}


class TestMigrateRecord:
    def test_unversioned_is_v1(self):
        assert schema_version(LEGACY) == 1

    def test_fills_missing_fields(self):
        record = migrate_record(LEGACY)
        assert record["afterRenoValue"] == 30000000
        assert record["monthlyCosts"] == 0
        assert record["schemaVersion"] == CURRENT_SCHEMA_VERSION

    def test_zero_after_reno_value_defaults_to_price(self):
        record = migrate_record({**LEGACY, "afterRenoValue": 0, "monthlyCosts": None})
        assert record["afterRenoValue"] == 30000000
        assert record["monthlyCosts"] == 0

    def test_keeps_entered_values(self):
        record = migrate_record({**LEGACY, "afterRenoValue": 35000000, "monthlyCosts": 20000})
        assert record["afterRenoValue"] == 35000000
        assert record["monthlyCosts"] == 20000

    def test_missing_reno_cost(self):
        legacy = {k: v for k, v in LEGACY.items() if k != "renoCost"}
        assert migrate_record(legacy)["renoCost"] == 0

    def test_does_not_mutate_input(self):
        original = dict(LEGACY)
        migrate_record(original)
        assert original == LEGACY

    def test_current_version_untouched(self):
        current = {**LEGACY, "afterRenoValue": 0, "monthlyCosts": 5, "schemaVersion": CURRENT_SCHEMA_VERSION}
        assert migrate_record(current) == current

    def test_idempotent(self):
        once = migrate_record(LEGACY)
        assert migrate_record(once) == once

    def test_future_version_rejected(self):
        with pytest.raises(UnsupportedSchemaVersion):
            migrate_record({**LEGACY, "schemaVersion": CURRENT_SCHEMA_VERSION + 1})

    @pytest.mark.parametrize("version", ["two", None, "", [2], 0, -1])
    def test_malformed_version_rejected(self, version):
        with pytest.raises(UnsupportedSchemaVersion, match="Invalid record schema version"):
            migrate_record({**LEGACY, "schemaVersion": version})

    def test_numeric_string_version(self):
        assert schema_version({**LEGACY, "schemaVersion": "2"}) == 2
