"""Roll a payment schedule up into yearly totals."""

from decimal import Decimal

from payoff.models.results import AmortizationSchedule, YearSummary


def summarize_by_year(schedule: AmortizationSchedule) -> list[YearSummary]:
    """Aggregate every 12 consecutive payments into one YearSummary.

    A final partial year (schedule length not a multiple of 12) gets its own
    short bucket.
    """
    yearly: list[YearSummary] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_paid = Decimal("0")

    for i, p in enumerate(schedule.payments, start=1):
        year_principal += p.principal_portion
        year_interest += p.interest_portion
        year_paid += p.payment_amount

        if i % 12 == 0 or i == len(schedule.payments):
            yearly.append(YearSummary(
                year=(i - 1) // 12 + 1,
                total_principal=year_principal,
                total_interest=year_interest,
                total_paid=year_paid,
                ending_balance=p.remaining_balance,
            ))
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_paid = Decimal("0")

    return yearly
