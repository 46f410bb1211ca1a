"""Canonical test fixtures used across all engine tests.

Fixture: $100K loan at 6%, $720/month, started 2024-01-15, paid on the 15th.
First month's interest is $500, so $220 goes to principal; the loan retires in
about 238 payments.
"""

import pytest
from datetime import date
from decimal import Decimal

from payoff.models.mortgage import LoanTerms, LumpSumEvent, RateAdjustment


@pytest.fixture
def canonical_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("100000"),
        base_annual_rate=Decimal("0.06"),
        monthly_payment=Decimal("720"),
        start_date=date(2024, 1, 15),
        payment_day_of_month=15,
    )


@pytest.fixture
def zero_rate_terms() -> LoanTerms:
    """$12K at 0% and $1,000/month: exactly 12 payments."""
    return LoanTerms(
        principal=Decimal("12000"),
        base_annual_rate=Decimal("0"),
        monthly_payment=Decimal("1000"),
        start_date=date(2024, 1, 15),
        payment_day_of_month=15,
    )


@pytest.fixture
def canonical_lump_sums() -> list[LumpSumEvent]:
    """Two prepayments, deliberately listed out of chronological order."""
    return [
        LumpSumEvent(id="bonus-2026", amount=Decimal("15000"), planned_date=date(2026, 3, 1)),
        LumpSumEvent(id="bonus-2025", amount=Decimal("10000"), planned_date=date(2025, 1, 10)),
    ]


@pytest.fixture
def rate_hike_year_two() -> RateAdjustment:
    """+1 point landing on payment 13 (due 2025-02-15)."""
    return RateAdjustment(
        id="renewal",
        effective_date=date(2025, 2, 15),
        rate_delta_percent=Decimal("1.0"),
    )


@pytest.fixture
def schedule_kwargs(canonical_terms):
    """generate_schedule keyword arguments for the canonical loan."""
    return dict(
        principal=canonical_terms.principal,
        monthly_payment=canonical_terms.monthly_payment,
        base_annual_rate=canonical_terms.base_annual_rate,
        start_date=canonical_terms.start_date,
        payment_day_of_month=canonical_terms.payment_day_of_month,
    )
