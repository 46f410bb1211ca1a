"""Payoff orchestrator: composes the engine sub-modules into one calculation.

Pure computation. No I/O. Dataclasses in, MortgageResult out.
"""

import logging
import math
from collections.abc import Sequence
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from payoff.engine.dates import payment_due_date, payments_completed
from payoff.engine.errors import NonAmortizingPaymentError, ScheduleCapExceededError
from payoff.engine.impact import analyze_lump_sum_impacts
from payoff.engine.schedule import generate_schedule
from payoff.engine.term import term_from_payment
from payoff.engine.validation import validate_inputs
from payoff.engine.yearly import summarize_by_year
from payoff.models.mortgage import LoanTerms, LumpSumEvent, RateAdjustment
from payoff.models.results import (
    AmortizationSchedule,
    CalculationStatus,
    CurrentMortgageState,
    MortgageResult,
    TermEstimate,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

PAYMENT_TOO_LOW = "Payment too low - loan will never be paid off"
CAP_EXCEEDED = "Schedule did not pay off within 100 years - payment is insufficient after rate changes"


def require_amortizing(term: TermEstimate, terms: LoanTerms) -> TermEstimate:
    if not term.amortizes:
        raise NonAmortizingPaymentError(
            f"{PAYMENT_TOO_LOW}: payment must exceed "
            f"${terms.first_month_interest:,.2f} monthly interest"
        )
    return term


def require_paid_off(schedule: AmortizationSchedule) -> AmortizationSchedule:
    if not schedule.paid_off:
        raise ScheduleCapExceededError(
            f"{CAP_EXCEEDED} (balance {schedule.final_balance} after {len(schedule)} payments)"
        )
    return schedule


def _schedule(
    terms: LoanTerms,
    extra_monthly_payment: Decimal,
    lump_sums: Sequence[LumpSumEvent],
    rate_adjustments: Sequence[RateAdjustment],
) -> AmortizationSchedule:
    return generate_schedule(
        principal=terms.principal,
        monthly_payment=terms.monthly_payment,
        base_annual_rate=terms.base_annual_rate,
        extra_monthly_payment=extra_monthly_payment,
        lump_sums=lump_sums,
        rate_adjustments=rate_adjustments,
        start_date=terms.start_date,
        payment_day_of_month=terms.payment_day_of_month,
        preferred_payment_day=terms.preferred_payment_day,
    )


def recalculate(
    terms: LoanTerms,
    lump_sums: Sequence[LumpSumEvent] = (),
    rate_adjustments: Sequence[RateAdjustment] = (),
) -> MortgageResult:
    """Run the full payoff calculation over one input snapshot.

    Never raises for bad inputs: validation errors, a payment that does not
    cover interest, and a schedule that hits the period cap each come back as
    a distinct ``CalculationStatus`` with field-scoped messages. A cap hit by
    the standard schedule alone is reported under ``standard_schedule``.
    """
    errors = validate_inputs(terms, lump_sums, rate_adjustments)
    if errors:
        logger.debug("Rejected payoff inputs: %s", errors)
        return MortgageResult(status=CalculationStatus.INVALID_INPUT, errors=errors)

    term = term_from_payment(terms.principal, terms.base_annual_rate, terms.monthly_payment)
    try:
        require_amortizing(term, terms)
    except NonAmortizingPaymentError as e:
        return MortgageResult(
            status=CalculationStatus.PAYMENT_TOO_LOW,
            errors={"monthly_payment": str(e)},
            term=term,
        )

    # Standard schedule: regular payment only, same rate path
    standard = _schedule(terms, Decimal("0"), [], rate_adjustments)
    schedule = _schedule(terms, terms.extra_monthly_payment, lump_sums, rate_adjustments)

    try:
        require_paid_off(schedule)
    except ScheduleCapExceededError as e:
        return MortgageResult(
            status=CalculationStatus.CAP_EXCEEDED,
            errors={"monthly_payment": str(e)},
            term=term,
            schedule=schedule,
            standard_schedule=standard,
        )

    # Savings are measured against the standard schedule, so it must finish too
    try:
        require_paid_off(standard)
    except ScheduleCapExceededError as e:
        return MortgageResult(
            status=CalculationStatus.CAP_EXCEEDED,
            errors={"standard_schedule": f"Regular payment alone: {e}"},
            term=term,
            schedule=schedule,
            standard_schedule=standard,
        )

    impacts = []
    if lump_sums:
        impacts = analyze_lump_sum_impacts(
            principal=terms.principal,
            monthly_payment=terms.monthly_payment,
            base_annual_rate=terms.base_annual_rate,
            extra_monthly_payment=terms.extra_monthly_payment,
            lump_sums=lump_sums,
            rate_adjustments=rate_adjustments,
            start_date=terms.start_date,
            payment_day_of_month=terms.payment_day_of_month,
            preferred_payment_day=terms.preferred_payment_day,
        )

    payments_reduced = len(standard) - len(schedule)
    payoff_date = None
    if schedule.payments:
        payoff_date = payment_due_date(
            terms.start_date,
            len(schedule),
            terms.payment_day_of_month,
            terms.preferred_payment_day,
        )

    return MortgageResult(
        status=CalculationStatus.OK,
        term=term,
        schedule=schedule,
        standard_schedule=standard,
        yearly=summarize_by_year(schedule),
        lump_sum_impacts=impacts,
        total_interest=schedule.total_interest,
        total_paid=schedule.total_paid,
        interest_saved=standard.total_interest - schedule.total_interest,
        payments_reduced=payments_reduced,
        years_reduced=(Decimal(payments_reduced) / 12).quantize(TWO_PLACES, ROUND_HALF_UP),
        payoff_year=math.ceil(len(schedule) / 12),
        payoff_date=payoff_date,
    )


def current_state(
    terms: LoanTerms,
    as_of: date,
    lump_sums: Sequence[LumpSumEvent] = (),
    rate_adjustments: Sequence[RateAdjustment] = (),
) -> CurrentMortgageState:
    """Where the loan stands on ``as_of``, assuming every due payment was made."""
    schedule = _schedule(terms, terms.extra_monthly_payment, lump_sums, rate_adjustments)

    completed = min(
        payments_completed(
            terms.start_date, as_of, terms.payment_day_of_month, terms.preferred_payment_day
        ),
        len(schedule),
    )
    done = schedule.payments[:completed]
    balance = done[-1].remaining_balance if done else terms.principal

    next_due = payment_due_date(
        terms.start_date, completed + 1, terms.payment_day_of_month, terms.preferred_payment_day
    )
    next_amount = (
        schedule.payments[completed].payment_amount if completed < len(schedule) else Decimal("0")
    )

    return CurrentMortgageState(
        as_of=as_of,
        payments_completed=completed,
        current_balance=balance,
        next_payment_date=next_due,
        days_until_payment=(next_due - as_of).days,
        next_payment_amount=next_amount,
        principal_paid=sum((p.principal_portion for p in done), Decimal("0")),
        interest_paid=sum((p.interest_portion for p in done), Decimal("0")),
        months_remaining=len(schedule) - completed,
    )
