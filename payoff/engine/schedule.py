"""Amortization schedule simulation with prepayments and rate changes.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from payoff.engine.dates import MAX_PAYMENT_PERIODS, payment_number_for_date
from payoff.engine.errors import UnresolvableTriggerError
from payoff.models.mortgage import LumpSumEvent, RateAdjustment
from payoff.models.results import AmortizationSchedule, PaymentRecord, StopReason

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
BALANCE_EPSILON = Decimal("0.01")


def legacy_payment_number(year: int, month: int) -> int:
    """Payment number for a year/month pair relative to the loan start."""
    if year == 0:
        return 1
    return (year - 1) * 12 + month


def resolve_lump_sum(
    lump_sum: LumpSumEvent,
    start_date: date | None,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> int:
    """Payment number a lump sum is applied at.

    An explicit planned date wins; the year/month pair is the fallback for
    records that predate exact dates.
    """
    if lump_sum.planned_date is not None and start_date is not None:
        return payment_number_for_date(
            start_date, lump_sum.planned_date, payment_day_of_month, preferred_payment_day
        )
    if lump_sum.year is not None:
        return legacy_payment_number(lump_sum.year, lump_sum.month or 1)
    raise UnresolvableTriggerError(f"Lump sum {lump_sum.id!r} has no planned date or year/month")


def resolve_rate_adjustment(
    adjustment: RateAdjustment,
    start_date: date | None,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> int:
    if start_date is None:
        raise UnresolvableTriggerError(
            f"Rate adjustment {adjustment.id!r} needs a loan start date to resolve"
        )
    return payment_number_for_date(
        start_date, adjustment.effective_date, payment_day_of_month, preferred_payment_day
    )


def _lump_sums_by_payment(
    lump_sums: Iterable[LumpSumEvent],
    start_date: date | None,
    payment_day_of_month: int,
    preferred_payment_day: int | None,
) -> dict[int, Decimal]:
    # Several lump sums on the same payment are summed
    totals: dict[int, Decimal] = {}
    for ls in lump_sums:
        n = resolve_lump_sum(ls, start_date, payment_day_of_month, preferred_payment_day)
        totals[n] = totals.get(n, Decimal("0")) + ls.amount
    return totals


def _resolved_adjustments(
    rate_adjustments: Iterable[RateAdjustment],
    start_date: date | None,
    payment_day_of_month: int,
    preferred_payment_day: int | None,
) -> list[tuple[int, Decimal]]:
    resolved = [
        (
            resolve_rate_adjustment(adj, start_date, payment_day_of_month, preferred_payment_day),
            adj.rate_delta,
        )
        for adj in rate_adjustments
    ]
    return sorted(resolved, key=lambda item: item[0])


def generate_schedule(
    principal: Decimal,
    monthly_payment: Decimal,
    base_annual_rate: Decimal,
    extra_monthly_payment: Decimal = Decimal("0"),
    lump_sums: Sequence[LumpSumEvent] = (),
    rate_adjustments: Sequence[RateAdjustment] = (),
    start_date: date | None = None,
    payment_day_of_month: int = 1,
    preferred_payment_day: int | None = None,
) -> AmortizationSchedule:
    """Simulate the loan payment by payment until it is paid off.

    Each period:
        - rate adjustments due by this payment are added to a running delta
          (they stack, never replace each other)
        - interest accrues at max(0, base rate + delta) / 12
        - the regular plus extra payment covers interest first, the rest goes
          to principal (never below zero, so the balance cannot grow)
        - lump sums landing on this payment go straight to principal
        - principal is capped at the outstanding balance

    Stops once the balance is within a cent of zero, or after 1200 payments.
    In the latter case ``stop_reason`` is ``StopReason.PERIOD_CAP``.
    """
    lump_by_payment = _lump_sums_by_payment(
        lump_sums, start_date, payment_day_of_month, preferred_payment_day
    )
    adjustments = _resolved_adjustments(
        rate_adjustments, start_date, payment_day_of_month, preferred_payment_day
    )

    scheduled = monthly_payment + extra_monthly_payment
    balance = principal.quantize(TWO_PLACES, ROUND_HALF_UP)
    cumulative_delta = Decimal("0")
    next_adjustment = 0
    payments: list[PaymentRecord] = []

    payment_number = 0
    while balance > BALANCE_EPSILON and payment_number < MAX_PAYMENT_PERIODS:
        payment_number += 1

        while next_adjustment < len(adjustments) and adjustments[next_adjustment][0] <= payment_number:
            cumulative_delta += adjustments[next_adjustment][1]
            next_adjustment += 1

        annual_rate = max(Decimal("0"), base_annual_rate + cumulative_delta)
        interest = (balance * annual_rate / 12).quantize(TWO_PLACES, ROUND_HALF_UP)

        principal_paid = max(Decimal("0"), scheduled - interest)
        principal_paid += lump_by_payment.get(payment_number, Decimal("0"))
        principal_paid = min(principal_paid, balance).quantize(TWO_PLACES, ROUND_HALF_UP)

        balance -= principal_paid

        payments.append(PaymentRecord(
            payment_number=payment_number,
            payment_amount=interest + principal_paid,
            principal_portion=principal_paid,
            interest_portion=interest,
            remaining_balance=balance,
            annual_rate=annual_rate,
        ))

    if balance > BALANCE_EPSILON:
        logger.warning(
            "Schedule hit the %d-payment cap with %s still outstanding",
            MAX_PAYMENT_PERIODS, balance,
        )
        return AmortizationSchedule(payments=payments, stop_reason=StopReason.PERIOD_CAP)

    return AmortizationSchedule(payments=payments)
