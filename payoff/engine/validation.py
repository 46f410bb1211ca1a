"""Field-scoped input validation, run before any calculation.

Returns a dict of field key -> message; empty means valid.
"""

from collections.abc import Sequence
from decimal import Decimal

from payoff.engine.dates import payment_number_for_date
from payoff.engine.errors import PaymentDateOutOfRangeError
from payoff.models.mortgage import LoanTerms, LumpSumEvent, RateAdjustment

MAX_PRINCIPAL = Decimal("10000000")
MAX_LUMP_SUM_YEAR = 50


def _check_principal(value: Decimal) -> str | None:
    if not value.is_finite():
        return "Please enter a valid number"
    if value < 0:
        return "Principal amount cannot be negative"
    if value == 0:
        return "Principal amount must be greater than 0"
    if value > MAX_PRINCIPAL:
        return "Principal amount is too large"
    return None


def _check_rate(value: Decimal) -> str | None:
    if not value.is_finite():
        return "Please enter a valid number"
    if value < 0:
        return "Interest rate cannot be negative"
    if value > 1:
        return "Interest rate cannot exceed 100%"
    return None


def _check_payment(value: Decimal) -> str | None:
    # Whether the payment covers interest is the term solver's call
    if not value.is_finite():
        return "Please enter a valid number"
    if value <= 0:
        return "Monthly payment must be greater than 0"
    return None


def _check_lump_sum(ls: LumpSumEvent, terms: LoanTerms, check_dates: bool) -> dict[str, str]:
    errors: dict[str, str] = {}
    prefix = f"lump_sum_{ls.id}"

    if not ls.amount.is_finite():
        errors[f"{prefix}_amount"] = "Please enter a valid number"
    elif ls.amount < 0:
        errors[f"{prefix}_amount"] = "Lump sum amount cannot be negative"

    if ls.planned_date is not None:
        if not check_dates:
            return errors
        try:
            payment_number_for_date(
                terms.start_date,
                ls.planned_date,
                terms.payment_day_of_month,
                terms.preferred_payment_day,
            )
        except PaymentDateOutOfRangeError:
            errors[f"{prefix}_date"] = "Lump sum date is beyond the 100-year payment horizon"
    elif ls.year is None:
        errors[f"{prefix}_date"] = "Lump sum needs a planned date"
    else:
        if not 0 <= ls.year <= MAX_LUMP_SUM_YEAR:
            errors[f"{prefix}_year"] = (
                f"Lump sum year must be between 0 and {MAX_LUMP_SUM_YEAR} (0 = immediate payment)"
            )
        if ls.year > 0 and not 1 <= (ls.month or 0) <= 12:
            errors[f"{prefix}_month"] = "Month must be between 1 and 12"

    return errors


def _check_rate_adjustment(adj: RateAdjustment, terms: LoanTerms, check_dates: bool) -> dict[str, str]:
    errors: dict[str, str] = {}
    prefix = f"rate_adjustment_{adj.id}"

    if not adj.rate_delta_percent.is_finite():
        errors[f"{prefix}_delta"] = "Please enter a valid number"
    elif abs(adj.rate_delta_percent) > 100:
        errors[f"{prefix}_delta"] = "Rate change must be between -100% and 100%"

    if not check_dates:
        return errors
    try:
        payment_number_for_date(
            terms.start_date,
            adj.effective_date,
            terms.payment_day_of_month,
            terms.preferred_payment_day,
        )
    except PaymentDateOutOfRangeError:
        errors[f"{prefix}_date"] = "Effective date is beyond the 100-year payment horizon"

    return errors


def validate_inputs(
    terms: LoanTerms,
    lump_sums: Sequence[LumpSumEvent] = (),
    rate_adjustments: Sequence[RateAdjustment] = (),
) -> dict[str, str]:
    """Check every caller-supplied field.

    Keys: principal, annual_rate, monthly_payment, extra_monthly_payment,
    payment_day_of_month, preferred_payment_day, lump_sum_<id>_<field>,
    rate_adjustment_<id>_<field>.
    """
    errors: dict[str, str] = {}

    if msg := _check_principal(terms.principal):
        errors["principal"] = msg
    if msg := _check_rate(terms.base_annual_rate):
        errors["annual_rate"] = msg
    if msg := _check_payment(terms.monthly_payment):
        errors["monthly_payment"] = msg

    if not terms.extra_monthly_payment.is_finite():
        errors["extra_monthly_payment"] = "Please enter a valid number"
    elif terms.extra_monthly_payment < 0:
        errors["extra_monthly_payment"] = "Extra payment cannot be negative"

    if not 1 <= terms.payment_day_of_month <= 28:
        errors["payment_day_of_month"] = "Payment day must be between 1 and 28"
    if terms.preferred_payment_day is not None and not 29 <= terms.preferred_payment_day <= 31:
        errors["preferred_payment_day"] = "Preferred payment day must be between 29 and 31"

    # Dates can only be mapped once the payment day is sane
    check_dates = "payment_day_of_month" not in errors and "preferred_payment_day" not in errors
    for ls in lump_sums:
        errors.update(_check_lump_sum(ls, terms, check_dates))
    for adj in rate_adjustments:
        errors.update(_check_rate_adjustment(adj, terms, check_dates))

    return errors
