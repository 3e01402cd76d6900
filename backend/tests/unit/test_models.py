"""Tests for wager and insurance value objects."""

import pytest
from pydantic import TypeAdapter, ValidationError

from wagerbook.models import (
    FixedInsurance,
    InsurancePolicy,
    InsuredWager,
    RateInsurance,
    Wager,
    format_cents,
)


class TestFormatCents:
    def test_pads_cents(self):
        assert format_cents(1005) == "R$10,05"

    def test_below_one_unit(self):
        assert format_cents(7) == "R$0,07"

    def test_custom_symbol(self):
        assert format_cents(250000, "$") == "$2500,00"


class TestInsurancePolicies:
    def test_fixed_guarantees_its_value(self):
        assert FixedInsurance(value=300).guaranteed_amount(10_000) == 300

    def test_rate_guarantees_floored_share_of_stake(self):
        assert RateInsurance(rate=0.33).guaranteed_amount(1000) == 330
        assert RateInsurance(rate=0.1).guaranteed_amount(333) == 33

    @pytest.mark.parametrize("rate", [-0.1, 1.01])
    def test_rate_out_of_range_is_rejected(self, rate):
        with pytest.raises(ValidationError):
            RateInsurance(rate=rate)

    def test_fixed_value_must_be_positive(self):
        with pytest.raises(ValidationError):
            FixedInsurance(value=0)

    def test_policy_union_dispatches_on_kind(self):
        adapter = TypeAdapter(InsurancePolicy)

        assert adapter.validate_python({"kind": "fixed", "value": 50}) == FixedInsurance(value=50)
        assert adapter.validate_python({"kind": "rate", "rate": 0.2}) == RateInsurance(rate=0.2)

    def test_describe(self):
        assert FixedInsurance(value=150).describe() == "INSURED (VALUE) - R$1,50"
        assert RateInsurance(rate=0.05).describe() == "INSURED (RATE) - 5%"


class TestWager:
    def test_key_ignores_resolution(self):
        wager = Wager(bettor="Alice", prediction="VAI ACONTECER", amount=100)
        before = wager.key
        wager.won = True

        assert wager.key == before == ("Alice", "VAI ACONTECER", 100)

    def test_predicts_occurrence(self):
        phrases = ["VAI ACONTECER", "WILL HAPPEN"]

        assert Wager(bettor="A", prediction=" will happen ", amount=1).predicts_occurrence(phrases)
        assert not Wager(bettor="A", prediction="N VAI ACONTECER", amount=1).predicts_occurrence(phrases)

    def test_blank_bettor_is_rejected(self):
        with pytest.raises(ValidationError):
            Wager(bettor=" ", prediction="VAI ACONTECER", amount=1)

    def test_insured_wager_guaranteed_amount_and_describe(self):
        wager = InsuredWager(
            bettor="Bob",
            prediction="N VAI ACONTECER",
            amount=2000,
            insurance_id=1,
            insurance=RateInsurance(rate=0.25),
        )

        assert wager.guaranteed_amount == 500
        assert wager.describe("$") == "Bob - $20,00 - N VAI ACONTECER - INSURED (RATE) - 25%"

    @pytest.mark.parametrize("field,value", [("amount", True), ("amount", "1000"), ("insurance_id", "1")])
    def test_integer_fields_are_strict(self, field, value):
        fields = {
            "bettor": "Bob",
            "prediction": "N VAI ACONTECER",
            "amount": 1000,
            "insurance_id": 1,
            "insurance": FixedInsurance(value=100),
        }
        fields[field] = value

        with pytest.raises(ValidationError):
            InsuredWager(**fields)
