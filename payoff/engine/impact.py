"""Marginal impact of each lump sum, by differential schedule comparison.

Lump sums are layered on in chronological order; each one is credited with
the difference between the schedule that includes it and the one that stops
just before it. With n lump sums this regenerates n + 1 schedules (each prefix
schedule is reused as the "before" of the next step). n is expected to be in
the tens.
"""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from payoff.engine.schedule import generate_schedule, resolve_lump_sum
from payoff.models.mortgage import LumpSumEvent, RateAdjustment
from payoff.models.results import LumpSumImpact

logger = logging.getLogger(__name__)


def sort_chronologically(
    lump_sums: Sequence[LumpSumEvent],
    start_date: date | None,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> list[LumpSumEvent]:
    """Order lump sums by the payment they land on, then by planned date.

    Input order is never used for attribution; ties keep their input order.
    """
    def key(ls: LumpSumEvent) -> tuple[int, date]:
        n = resolve_lump_sum(ls, start_date, payment_day_of_month, preferred_payment_day)
        return n, ls.planned_date or date.min

    return sorted(lump_sums, key=key)


def analyze_lump_sum_impacts(
    principal: Decimal,
    monthly_payment: Decimal,
    base_annual_rate: Decimal,
    extra_monthly_payment: Decimal,
    lump_sums: Sequence[LumpSumEvent],
    rate_adjustments: Sequence[RateAdjustment] = (),
    start_date: date | None = None,
    payment_day_of_month: int = 1,
    preferred_payment_day: int | None = None,
) -> list[LumpSumImpact]:
    """Interest and time each lump sum saves on top of the earlier ones.

    Returns one LumpSumImpact per lump sum, in chronological order.
    ``cumulative_interest_saved`` is measured against a schedule with no lump
    sums at all (same extra payment and rate adjustments).
    """
    ordered = sort_chronologically(
        lump_sums, start_date, payment_day_of_month, preferred_payment_day
    )

    def schedule_with(subset: Sequence[LumpSumEvent]):
        return generate_schedule(
            principal=principal,
            monthly_payment=monthly_payment,
            base_annual_rate=base_annual_rate,
            extra_monthly_payment=extra_monthly_payment,
            lump_sums=subset,
            rate_adjustments=rate_adjustments,
            start_date=start_date,
            payment_day_of_month=payment_day_of_month,
            preferred_payment_day=preferred_payment_day,
        )

    baseline = schedule_with([])
    baseline_interest = baseline.total_interest
    logger.debug(
        "Analyzing %d lump sums against a %d-payment baseline", len(ordered), len(baseline)
    )

    impacts: list[LumpSumImpact] = []
    previous = baseline
    for i, lump_sum in enumerate(ordered):
        current = schedule_with(ordered[: i + 1])
        impacts.append(LumpSumImpact(
            lump_sum_id=lump_sum.id,
            interest_saved=previous.total_interest - current.total_interest,
            time_saved_months=len(previous) - len(current),
            principal_reduction=lump_sum.amount,
            cumulative_interest_saved=baseline_interest - current.total_interest,
        ))
        previous = current

    return impacts
