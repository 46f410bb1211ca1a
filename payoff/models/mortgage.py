"""Caller-supplied inputs for a payoff calculation."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class LoanTerms:
    principal: Decimal
    base_annual_rate: Decimal  # e.g. Decimal("0.0404") for 4.04%
    monthly_payment: Decimal
    start_date: date
    extra_monthly_payment: Decimal = Decimal("0")
    payment_day_of_month: int = 1  # 1-28
    preferred_payment_day: int | None = None  # 29-31, clamped to month end

    @property
    def total_monthly_payment(self) -> Decimal:
        return self.monthly_payment + self.extra_monthly_payment

    @property
    def first_month_interest(self) -> Decimal:
        return self.principal * self.base_annual_rate / 12


@dataclass(frozen=True)
class LumpSumEvent:
    """One-time principal prepayment.

    The trigger is ``planned_date`` when present. Older records only carry a
    ``year``/``month`` pair relative to the loan start (year 0 = first payment).
    ``is_paid`` and ``actual_date`` are bookkeeping and never change the
    simulation.
    """
    id: str
    amount: Decimal
    planned_date: date | None = None
    year: int | None = None
    month: int | None = None
    description: str = ""
    is_paid: bool = False
    actual_date: date | None = None


@dataclass(frozen=True)
class RateAdjustment:
    id: str
    effective_date: date
    rate_delta_percent: Decimal  # +1.0 = one percentage point up
    description: str = ""

    @property
    def rate_delta(self) -> Decimal:
        return self.rate_delta_percent / 100
