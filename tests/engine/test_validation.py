from dataclasses import replace
from datetime import date
from decimal import Decimal

from payoff.engine.validation import validate_inputs
from payoff.models.mortgage import LumpSumEvent, RateAdjustment


class TestLoanFields:
    def test_valid_inputs(self, canonical_terms, canonical_lump_sums, rate_hike_year_two):
        assert validate_inputs(canonical_terms, canonical_lump_sums, [rate_hike_year_two]) == {}

    def test_zero_principal(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, principal=Decimal("0")))
        assert errors == {"principal": "Principal amount must be greater than 0"}

    def test_negative_principal(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, principal=Decimal("-5")))
        assert "principal" in errors

    def test_nan_principal(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, principal=Decimal("NaN")))
        assert errors["principal"] == "Please enter a valid number"

    def test_principal_too_large(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, principal=Decimal("20000000")))
        assert "principal" in errors

    def test_negative_rate(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, base_annual_rate=Decimal("-0.01")))
        assert errors == {"annual_rate": "Interest rate cannot be negative"}

    def test_zero_rate_allowed(self, zero_rate_terms):
        assert validate_inputs(zero_rate_terms) == {}

    def test_rate_above_hundred_percent(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, base_annual_rate=Decimal("1.5")))
        assert "annual_rate" in errors

    def test_zero_payment(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, monthly_payment=Decimal("0")))
        assert errors == {"monthly_payment": "Monthly payment must be greater than 0"}

    def test_payment_below_interest_is_not_a_field_error(self, canonical_terms):
        # The term solver reports this one
        assert validate_inputs(replace(canonical_terms, monthly_payment=Decimal("400"))) == {}

    def test_negative_extra_payment(self, canonical_terms):
        errors = validate_inputs(replace(canonical_terms, extra_monthly_payment=Decimal("-1")))
        assert errors == {"extra_monthly_payment": "Extra payment cannot be negative"}

    def test_reports_every_bad_field(self, canonical_terms):
        terms = replace(
            canonical_terms,
            principal=Decimal("0"),
            base_annual_rate=Decimal("-1"),
            monthly_payment=Decimal("-1"),
        )
        assert set(validate_inputs(terms)) == {"principal", "annual_rate", "monthly_payment"}


class TestPaymentDay:
    def test_day_out_of_range(self, canonical_terms):
        for day in (0, 29, 31):
            errors = validate_inputs(replace(canonical_terms, payment_day_of_month=day))
            assert errors == {"payment_day_of_month": "Payment day must be between 1 and 28"}

    def test_preferred_day_range(self, canonical_terms):
        assert validate_inputs(replace(canonical_terms, preferred_payment_day=31)) == {}
        errors = validate_inputs(replace(canonical_terms, preferred_payment_day=20))
        assert set(errors) == {"preferred_payment_day"}

    def test_both_day_fields_reported(self, canonical_terms):
        terms = replace(canonical_terms, payment_day_of_month=0, preferred_payment_day=15)
        errors = validate_inputs(terms)
        assert errors == {
            "payment_day_of_month": "Payment day must be between 1 and 28",
            "preferred_payment_day": "Preferred payment day must be between 29 and 31",
        }

    def test_bad_day_still_checks_amounts(self, canonical_terms):
        lump = LumpSumEvent(id="x", amount=Decimal("-10"), planned_date=date(2025, 1, 1))
        errors = validate_inputs(replace(canonical_terms, payment_day_of_month=40), [lump])
        assert set(errors) == {"payment_day_of_month", "lump_sum_x_amount"}


class TestLumpSumFields:
    def test_negative_amount(self, canonical_terms):
        lump = LumpSumEvent(id="neg", amount=Decimal("-1"), planned_date=date(2025, 1, 1))
        errors = validate_inputs(canonical_terms, [lump])
        assert errors == {"lump_sum_neg_amount": "Lump sum amount cannot be negative"}

    def test_zero_amount_allowed(self, canonical_terms):
        lump = LumpSumEvent(id="zero", amount=Decimal("0"), planned_date=date(2025, 1, 1))
        assert validate_inputs(canonical_terms, [lump]) == {}

    def test_missing_trigger(self, canonical_terms):
        lump = LumpSumEvent(id="none", amount=Decimal("100"))
        errors = validate_inputs(canonical_terms, [lump])
        assert errors == {"lump_sum_none_date": "Lump sum needs a planned date"}

    def test_date_beyond_horizon(self, canonical_terms):
        lump = LumpSumEvent(id="far", amount=Decimal("100"), planned_date=date(2200, 1, 1))
        errors = validate_inputs(canonical_terms, [lump])
        assert set(errors) == {"lump_sum_far_date"}

    def test_legacy_year_range(self, canonical_terms):
        lump = LumpSumEvent(id="old", amount=Decimal("100"), year=51, month=1)
        errors = validate_inputs(canonical_terms, [lump])
        assert errors["lump_sum_old_year"] == (
            "Lump sum year must be between 0 and 50 (0 = immediate payment)"
        )

    def test_legacy_month_range(self, canonical_terms):
        lump = LumpSumEvent(id="old", amount=Decimal("100"), year=3, month=13)
        errors = validate_inputs(canonical_terms, [lump])
        assert errors == {"lump_sum_old_month": "Month must be between 1 and 12"}

    def test_year_zero_ignores_month(self, canonical_terms):
        lump = LumpSumEvent(id="now", amount=Decimal("100"), year=0)
        assert validate_inputs(canonical_terms, [lump]) == {}


class TestRateAdjustmentFields:
    def test_delta_out_of_range(self, canonical_terms):
        adj = RateAdjustment(id="wild", effective_date=date(2025, 1, 1), rate_delta_percent=Decimal("150"))
        errors = validate_inputs(canonical_terms, rate_adjustments=[adj])
        assert errors == {"rate_adjustment_wild_delta": "Rate change must be between -100% and 100%"}

    def test_negative_delta_allowed(self, canonical_terms):
        adj = RateAdjustment(id="cut", effective_date=date(2025, 1, 1), rate_delta_percent=Decimal("-2"))
        assert validate_inputs(canonical_terms, rate_adjustments=[adj]) == {}

    def test_date_beyond_horizon(self, canonical_terms):
        adj = RateAdjustment(id="far", effective_date=date(2300, 1, 1), rate_delta_percent=Decimal("1"))
        errors = validate_inputs(canonical_terms, rate_adjustments=[adj])
        assert set(errors) == {"rate_adjustment_far_date"}
