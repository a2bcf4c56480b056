import base64
from dataclasses import replace
from decimal import Decimal

from propcalc.data.share import decode_share, encode_share, merge_shared, share_url
from propcalc.engine.projection import recompute
from propcalc.models.assumptions import GlobalAssumptions
from propcalc.models.property import Property

DERIVED = (
    "down_payment_amount",
    "total_initial_investment",
    "loan_principal",
    "monthly_payment_amount",
    "monthly_cashflow",
)


def _b64(raw: str) -> str:
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class TestEncode:
    def test_compact_layout(self, canonical_assumptions, canonical_property):
        raw = base64.b64decode(encode_share(canonical_assumptions, [canonical_property])).decode("utf-8")
        assert raw == "4,0.5,3.5;Downtown%20flat|50|200|0|20|6.5|20|50|0"

    def test_renovated_fields(self, canonical_assumptions, renovated_property):
        raw = base64.b64decode(encode_share(canonical_assumptions, [renovated_property])).decode("utf-8")
        assert raw.split(";")[1] == "Fixer-upper%20house|40|250|8|30|5|25|55|30"

    def test_url(self):
        assert share_url("https://calc.example/", "YWJj") == "https://calc.example/?s=YWJj"


class TestDecode:
    def test_known_link(self):
        portfolio = decode_share("NCwwLjUsMy41O0ZsYXR8NTB8MjAwfDB8MjB8Ni41fDIw")
        assert portfolio is not None
        assert portfolio.assumptions.inflation_rate == Decimal("3.5")
        prop = portfolio.properties[0]
        assert prop.name == "Flat"
        assert prop.price == Decimal("50000000")
        assert prop.rent == Decimal("200000")
        assert prop.loan_term_years == 20

    def test_scale_round_trip_matches_full_units(self, canonical_assumptions, canonical_property, renovated_property):
        encoded = encode_share(canonical_assumptions, [canonical_property, renovated_property])
        decoded = decode_share(encoded)
        for direct, shared in zip([canonical_property, renovated_property], decoded.properties):
            for name in DERIVED:
                assert getattr(shared, name) == getattr(direct, name)
            assert shared.post_renovation_value == direct.post_renovation_value
            assert shared.monthly_recurring_costs == direct.monthly_recurring_costs

    def test_fractional_units(self, canonical_assumptions):
        direct = recompute(
            Property(
                id="a", name="Studio", price=Decimal("32500000"), rent=Decimal("142500"),
                down_payment_percent=Decimal("25"), annual_interest_rate=Decimal("5.75"),
                loan_term_years=15, renovation_cost=Decimal("1250000"),
                post_renovation_value=Decimal("36000000"), monthly_recurring_costs=Decimal("17500"),
            ),
            canonical_assumptions,
        )
        shared = decode_share(encode_share(canonical_assumptions, [direct])).properties[0]
        for name in DERIVED:
            assert getattr(shared, name) == getattr(direct, name)

    def test_legacy_seven_field_link(self, canonical_property):
        portfolio = decode_share(_b64("4,0.5,3.5;Downtown%20flat|50|200|0|20|6.5|20"))
        prop = portfolio.properties[0]
        assert prop.post_renovation_value == Decimal("50000000")
        assert prop.monthly_recurring_costs == Decimal("0")
        assert prop.monthly_payment_amount == canonical_property.monthly_payment_amount

    def test_unicode_name(self, canonical_assumptions, canonical_property):
        prop = replace(canonical_property, name="Budapesti lakás; 2|B")
        decoded = decode_share(encode_share(canonical_assumptions, [prop]))
        assert decoded.properties[0].name == "Budapesti lakás; 2|B"

    def test_fresh_ids(self, canonical_assumptions, canonical_property):
        decoded = decode_share(encode_share(canonical_assumptions, [canonical_property, canonical_property]))
        ids = {p.id for p in decoded.properties}
        assert len(ids) == 2
        assert canonical_property.id not in ids

    def test_no_properties(self):
        portfolio = decode_share(_b64("4,0.5,3.5"))
        assert portfolio.properties == []

    def test_bad_base64(self):
        assert decode_share("%%%not-base64%%%") is None

    def test_wrong_settings_arity(self):
        assert decode_share(_b64("4,0.5;Flat|50|200|0|20|6.5|20")) is None

    def test_too_few_property_fields(self):
        assert decode_share(_b64("4,0.5,3.5;Flat|50|200|0|20|6.5")) is None

    def test_non_numeric_field(self):
        assert decode_share(_b64("4,0.5,3.5;Flat|fifty|200|0|20|6.5|20")) is None

    def test_non_finite_term(self):
        assert decode_share(_b64("4,0.5,3.5;Flat|50|200|0|20|6.5|Infinity")) is None
        assert decode_share(_b64("4,0.5,3.5;Flat|50|200|0|20|6.5|NaN")) is None

    def test_non_finite_amount(self):
        assert decode_share(_b64("4,0.5,3.5;Flat|Infinity|200|0|20|6.5|20")) is None
        assert decode_share(_b64("Infinity,0.5,3.5;Flat|50|200|0|20|6.5|20")) is None

    def test_fractional_term(self):
        assert decode_share(_b64("4,0.5,3.5;Flat|50|200|0|20|6.5|2.5")) is None

    def test_out_of_range_amount(self):
        assert decode_share(_b64("4,0.5,3.5;Flat|1e999999|200|0|20|6.5|20")) is None

    def test_missing_padding_tolerated(self):
        encoded = _b64("4,0.5,3.5;Flat|50|200|0|20|6.5|20|50|0").rstrip("=")
        assert decode_share(encoded) is not None


class TestMergeShared:
    def test_appends_copies_with_new_ids(self, canonical_property, renovated_property):
        local_assumptions = GlobalAssumptions(
            transfer_tax_rate=Decimal("0"), legal_fee_rate=Decimal("0"), inflation_rate=Decimal("2")
        )
        merged = merge_shared([renovated_property], [canonical_property], local_assumptions)
        assert len(merged) == 2
        assert merged[0].id == renovated_property.id
        assert merged[1].id != canonical_property.id
        assert merged[1].name == canonical_property.name
        # Recomputed without transfer tax or legal fee
        assert merged[1].total_initial_investment == Decimal("10000000")
        assert canonical_property.total_initial_investment == Decimal("12250000")
