"""CLI for running a payoff calculation and printing a terminal report.

Usage:
    python -m payoff.cli --principal 842952.60 --rate 4.04 --payment 4624.05 --start 2024-03-12 --day 12
    python -m payoff.cli --principal 300000 --rate 5 --payment 2000 --lump 2026-06-01:20000 --yearly
    python -m payoff.cli --principal 400000 --rate 6.5 --term-years 25 --start 2025-01-01
    python -m payoff.cli ... --rate-change 2027-01-12:+1.25 --rate-change 2029-01-12:-0.5
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from payoff.config import settings
from payoff.engine.mortgage import recalculate
from payoff.engine.term import format_years_and_months, monthly_payment, term_parts_to_months
from payoff.models.mortgage import LoanTerms, LumpSumEvent, RateAdjustment
from payoff.models.results import MortgageResult


def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def _dated_amount(raw: str) -> tuple[date, Decimal]:
    """Parse 'YYYY-MM-DD:AMOUNT'."""
    try:
        day, amount = raw.split(":", 1)
        return date.fromisoformat(day), Decimal(amount)
    except (ValueError, InvalidOperation):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD:AMOUNT, got {raw!r}")


def print_summary(result: MortgageResult, terms: LoanTerms) -> None:
    _header("Payoff Summary")
    print(f"  Principal:          {_dollar(terms.principal)}")
    print(f"  Rate:               {float(terms.base_annual_rate) * 100:.2f}%")
    print(f"  Monthly payment:    {_dollar(terms.total_monthly_payment)}")
    print(f"  Term at payment:    {format_years_and_months(result.term.total_months)}")
    print(f"  Payments:           {len(result.schedule)}")
    print(f"  Payoff date:        {result.payoff_date.isoformat() if result.payoff_date else 'N/A'}")
    print(f"  Total interest:     {_dollar(result.total_interest)}")
    print(f"  Total paid:         {_dollar(result.total_paid)}")
    if result.payments_reduced or result.interest_saved:
        print(f"  Interest saved:     {_dollar(result.interest_saved)}")
        print(f"  Time saved:         {format_years_and_months(result.payments_reduced)}")


def print_impacts(result: MortgageResult) -> None:
    if not result.lump_sum_impacts:
        return
    _header("Lump Sum Impact")
    for impact in result.lump_sum_impacts:
        print(
            f"  [{impact.lump_sum_id:>4}]  {_dollar(impact.principal_reduction):>14}"
            f"  saves {_dollar(impact.interest_saved):>12}"
            f"  / {impact.time_saved_months:>3} mo"
            f"  (cumulative {_dollar(impact.cumulative_interest_saved)})"
        )


def print_yearly(result: MortgageResult) -> None:
    _header("Yearly Breakdown")
    print(f"  {'Year':>4}  {'Principal':>14}  {'Interest':>12}  {'Balance':>14}")
    for y in result.yearly:
        print(
            f"  {y.year:>4}  {_dollar(y.total_principal):>14}"
            f"  {_dollar(y.total_interest):>12}  {_dollar(y.ending_balance):>14}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Mortgage payoff calculator")
    parser.add_argument("--principal", type=Decimal, required=True, help="Loan balance")
    parser.add_argument("--rate", type=Decimal, required=True, help="Annual rate in percent, e.g. 4.04")
    parser.add_argument("--payment", type=Decimal, help="Regular monthly payment")
    parser.add_argument("--term-years", type=int, help="Derive the payment from a term instead of --payment")
    parser.add_argument("--term-months", type=int, help="Extra months on top of --term-years")
    parser.add_argument("--extra", type=Decimal, default=Decimal("0"), help="Extra monthly payment (default: 0)")
    parser.add_argument("--start", type=date.fromisoformat, default=date.today(), help="Loan start date (default: today)")
    parser.add_argument("--day", type=int, default=settings.default_payment_day, help="Payment day of month, 1-28")
    parser.add_argument("--month-end", type=int, choices=[29, 30, 31], help="Pay at month end instead (29-31)")
    parser.add_argument("--lump", type=_dated_amount, action="append", default=[], help="Lump sum as DATE:AMOUNT (repeatable)")
    parser.add_argument("--rate-change", type=_dated_amount, action="append", default=[], help="Rate change as DATE:DELTA_PERCENT (repeatable)")
    parser.add_argument("--yearly", action="store_true", help="Show the yearly breakdown")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine diagnostics to stderr")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level)

    payment = args.payment
    if payment is None:
        term_months = term_parts_to_months(args.term_years, args.term_months)
        if term_months == 0:
            parser.error("either --payment or a positive --term-years/--term-months is required")
        payment = monthly_payment(args.principal, args.rate / 100, term_months)

    terms = LoanTerms(
        principal=args.principal,
        base_annual_rate=args.rate / 100,
        monthly_payment=payment,
        extra_monthly_payment=args.extra,
        start_date=args.start,
        payment_day_of_month=args.day,
        preferred_payment_day=args.month_end,
    )
    lump_sums = [
        LumpSumEvent(id=str(i), amount=amount, planned_date=when)
        for i, (when, amount) in enumerate(args.lump, start=1)
    ]
    adjustments = [
        RateAdjustment(id=str(i), effective_date=when, rate_delta_percent=delta)
        for i, (when, delta) in enumerate(args.rate_change, start=1)
    ]

    result = recalculate(terms, lump_sums, adjustments)
    if not result.ok:
        print(f"Calculation failed ({result.status.value}):", file=sys.stderr)
        for field_name, message in result.errors.items():
            print(f"  {field_name}: {message}", file=sys.stderr)
        return 1

    print_summary(result, terms)
    print_impacts(result)
    if args.yearly:
        print_yearly(result)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
