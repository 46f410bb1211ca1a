"""Calendar mapping between dates and payment periods.

Payment 1 falls in the month after the loan start; payment k in the k-th month
after it. All dates are zone-less ``datetime.date`` values.
"""

import calendar
from datetime import date

from payoff.engine.errors import PaymentDateOutOfRangeError

MAX_PAYMENT_PERIODS = 1200  # 100 years


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, months: int) -> date:
    """Return ``d`` shifted by ``months``, clamping the day to the month end.

    Jan 31 + 1 month gives Feb 28 (or 29).
    """
    year = d.year + (d.month - 1 + months) // 12
    month = (d.month - 1 + months) % 12 + 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def actual_payment_day(
    year: int,
    month: int,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> int:
    """Resolve the due day for a month.

    A preference above 28 means "end of month": 31 becomes 30 in April and
    28/29 in February. Otherwise the fixed payment day applies.
    """
    if preferred_payment_day and preferred_payment_day > 28:
        return min(preferred_payment_day, days_in_month(year, month))
    return payment_day_of_month


def payment_due_date(
    start_date: date,
    payment_number: int,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> date:
    """Due date of the given 1-based payment."""
    month_anchor = add_months(start_date.replace(day=1), payment_number)
    day = actual_payment_day(
        month_anchor.year, month_anchor.month, payment_day_of_month, preferred_payment_day
    )
    return month_anchor.replace(day=day)


def payment_number_for_date(
    start_date: date,
    target_date: date,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> int:
    """Map a calendar date to the payment it lands on.

    Dates on or before the start apply at payment 1. Otherwise the result is
    the first payment whose due date is on or after ``target_date``.

    Raises:
        PaymentDateOutOfRangeError: target is more than 1200 payments out.
    """
    if target_date <= start_date:
        return 1

    for payment_number in range(1, MAX_PAYMENT_PERIODS + 1):
        due = payment_due_date(
            start_date, payment_number, payment_day_of_month, preferred_payment_day
        )
        if target_date <= due:
            return payment_number

    raise PaymentDateOutOfRangeError(
        f"{target_date.isoformat()} is more than {MAX_PAYMENT_PERIODS} payments "
        f"after {start_date.isoformat()}"
    )


def payments_completed(
    start_date: date,
    as_of: date,
    payment_day_of_month: int,
    preferred_payment_day: int | None = None,
) -> int:
    """Count payments whose due date is on or before ``as_of``."""
    completed = 0
    while completed < MAX_PAYMENT_PERIODS:
        due = payment_due_date(
            start_date, completed + 1, payment_day_of_month, preferred_payment_day
        )
        if due > as_of:
            break
        completed += 1
    return completed
