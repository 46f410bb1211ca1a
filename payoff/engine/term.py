"""Loan term solving: payment -> number of payments, and back.

Pure functions. No I/O.
"""

import math
from decimal import Decimal, ROUND_UP

from payoff.models.results import NON_AMORTIZING_YEARS, TermEstimate

TWO_PLACES = Decimal("0.01")


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """Level payment that retires ``principal`` within ``term_months`` payments.

    Rounded up to the cent so the loan never outlives the requested term.
    """
    if principal <= 0 or term_months <= 0:
        return Decimal("0")
    if annual_rate <= 0:
        return (principal / term_months).quantize(TWO_PLACES, ROUND_UP)

    r = annual_rate / 12
    # Annuity factor: r / (1 - (1+r)^-n)
    annuity = r / (1 - (1 + r) ** -term_months)
    return (principal * annuity).quantize(TWO_PLACES, ROUND_UP)


def term_from_payment(
    principal: Decimal,
    annual_rate: Decimal,
    monthly_payment: Decimal,
) -> TermEstimate:
    """Number of payments needed to retire a loan at a fixed payment.

    n = -ln(1 - P*r / M) / ln(1 + r), rounded up.

    A payment that does not cover the first month's interest never amortizes;
    the result is then the 999-year sentinel (check ``TermEstimate.amortizes``)
    so the caller can report "payment too low" instead of handling an error.
    """
    if principal <= 0 or monthly_payment <= 0:
        return TermEstimate(years=0, months=0, total_months=0)

    if annual_rate <= 0:
        total_months = math.ceil(principal / monthly_payment)
        return _split(total_months)

    r = annual_rate / 12
    if monthly_payment <= principal * r:
        return TermEstimate(
            years=NON_AMORTIZING_YEARS,
            months=0,
            total_months=NON_AMORTIZING_YEARS * 12,
        )

    # Float math for the logarithms
    numerator = math.log(1 - float(principal * r / monthly_payment))
    denominator = math.log(1 + float(r))
    return _split(math.ceil(-numerator / denominator))


def _split(total_months: int) -> TermEstimate:
    years, months = months_to_term_parts(total_months)
    return TermEstimate(years=years, months=months, total_months=total_months)


def term_parts_to_months(years: int | None, months: int | None) -> int:
    """Years + months -> total months. Missing or negative parts count as 0."""
    safe_years = max(0, int(years)) if years is not None else 0
    safe_months = max(0, int(months)) if months is not None else 0
    return safe_years * 12 + safe_months


def months_to_term_parts(total_months: int | None) -> tuple[int, int]:
    if total_months is None or total_months <= 0:
        return 0, 0
    return total_months // 12, total_months % 12


def format_years_and_months(total_months: int) -> str:
    years, months = months_to_term_parts(total_months)
    if years == 0 and months == 0:
        return "0 months"
    year_str = f"{years} {'year' if years == 1 else 'years'}"
    month_str = f"{months} {'month' if months == 1 else 'months'}"
    if years == 0:
        return month_str
    if months == 0:
        return year_str
    return f"{year_str} and {month_str}"
