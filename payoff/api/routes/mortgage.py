"""Mortgage payoff routes: thin wrappers over the pure engine."""

import logging
from decimal import Decimal

from fastapi import APIRouter, HTTPException

from payoff.api.schemas import (
    CurrentStateRequest,
    CurrentStateResponse,
    LumpSumImpactResponse,
    MortgageRequest,
    MortgageResponse,
    PaymentNumberRequest,
    PaymentNumberResponse,
    PaymentRecordResponse,
    TermRequest,
    TermResponse,
    YearSummaryResponse,
)
from payoff.config import settings
from payoff.engine.dates import payment_due_date, payment_number_for_date
from payoff.engine.impact import analyze_lump_sum_impacts
from payoff.engine.mortgage import current_state, recalculate, require_amortizing
from payoff.engine.term import (
    format_years_and_months,
    monthly_payment,
    term_from_payment,
    term_parts_to_months,
)
from payoff.engine.validation import validate_inputs
from payoff.models.mortgage import LoanTerms, LumpSumEvent, RateAdjustment
from payoff.models.results import MortgageResult, TermEstimate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/mortgage", tags=["mortgage"])


def _build_terms(req: MortgageRequest) -> LoanTerms:
    day = req.payment_day_of_month
    if day is None:
        day = settings.default_payment_day
    return LoanTerms(
        principal=req.principal,
        base_annual_rate=req.annual_rate,
        monthly_payment=req.monthly_payment,
        extra_monthly_payment=req.extra_monthly_payment,
        start_date=req.start_date,
        payment_day_of_month=day,
        preferred_payment_day=req.preferred_payment_day,
    )


def _build_lump_sums(req: MortgageRequest) -> list[LumpSumEvent]:
    if len(req.lump_sums) > settings.max_lump_sums:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_lump_sums} lump sums per calculation",
        )
    return [LumpSumEvent(**ls.model_dump()) for ls in req.lump_sums]


def _build_adjustments(req: MortgageRequest) -> list[RateAdjustment]:
    return [RateAdjustment(**adj.model_dump()) for adj in req.rate_adjustments]


def _term_response(term: TermEstimate, payment: Decimal) -> TermResponse:
    return TermResponse(
        monthly_payment=payment,
        years=term.years,
        months=term.months,
        total_months=term.total_months,
        amortizes=term.amortizes,
        label=format_years_and_months(term.total_months) if term.amortizes else "never",
    )


def _unprocessable(result: MortgageResult) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"status": result.status.value, "errors": result.errors},
    )


def _result_to_response(result: MortgageResult, terms: LoanTerms) -> MortgageResponse:
    """Convert engine MortgageResult to API response."""
    return MortgageResponse(
        term=_term_response(result.term, terms.monthly_payment),
        total_monthly_payment=terms.total_monthly_payment,
        total_interest=result.total_interest,
        total_paid=result.total_paid,
        standard_total_interest=result.standard_schedule.total_interest,
        interest_saved=result.interest_saved,
        payments_reduced=result.payments_reduced,
        years_reduced=result.years_reduced,
        payoff_year=result.payoff_year,
        payoff_date=result.payoff_date,
        schedule=[
            PaymentRecordResponse.model_validate(p, from_attributes=True)
            for p in result.schedule.payments
        ],
        yearly=[
            YearSummaryResponse.model_validate(y, from_attributes=True)
            for y in result.yearly
        ],
        lump_sum_impacts=[
            LumpSumImpactResponse.model_validate(i, from_attributes=True)
            for i in result.lump_sum_impacts
        ],
    )


@router.post("/calculate", response_model=MortgageResponse)
async def calculate(req: MortgageRequest):
    """Primary endpoint: loan inputs → schedule, savings and per-lump-sum impact."""
    terms = _build_terms(req)
    result = recalculate(terms, _build_lump_sums(req), _build_adjustments(req))
    if not result.ok:
        logger.info("Payoff calculation failed: %s", result.status.value)
        raise _unprocessable(result)
    return _result_to_response(result, terms)


@router.post("/term", response_model=TermResponse)
async def term(req: TermRequest):
    """How long a fixed payment takes to retire the loan.

    Without a payment, the level payment for term_years/term_months is derived
    first.
    """
    payment = req.monthly_payment
    if payment is None:
        total_months = term_parts_to_months(req.term_years, req.term_months)
        if total_months == 0:
            raise HTTPException(
                status_code=422,
                detail="Provide monthly_payment or a positive term_years/term_months",
            )
        payment = monthly_payment(req.principal, req.annual_rate, total_months)
    estimate = term_from_payment(req.principal, req.annual_rate, payment)
    return _term_response(estimate, payment)


@router.post("/payment-number", response_model=PaymentNumberResponse)
async def payment_number(req: PaymentNumberRequest):
    """Which payment a calendar date lands on."""
    try:
        n = payment_number_for_date(
            req.start_date, req.target_date, req.payment_day_of_month, req.preferred_payment_day
        )
        due = payment_due_date(
            req.start_date, n, req.payment_day_of_month, req.preferred_payment_day
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PaymentNumberResponse(payment_number=n, due_date=due)


@router.post("/lump-sum-impacts", response_model=list[LumpSumImpactResponse])
async def lump_sum_impacts(req: MortgageRequest):
    """Marginal interest and time saved by each lump sum, chronologically."""
    terms = _build_terms(req)
    lump_sums = _build_lump_sums(req)
    adjustments = _build_adjustments(req)

    errors = validate_inputs(terms, lump_sums, adjustments)
    if errors:
        raise HTTPException(status_code=422, detail={"status": "invalid_input", "errors": errors})

    try:
        require_amortizing(
            term_from_payment(terms.principal, terms.base_annual_rate, terms.monthly_payment),
            terms,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"status": "payment_too_low", "errors": {"monthly_payment": str(e)}},
        )

    impacts = analyze_lump_sum_impacts(
        principal=terms.principal,
        monthly_payment=terms.monthly_payment,
        base_annual_rate=terms.base_annual_rate,
        extra_monthly_payment=terms.extra_monthly_payment,
        lump_sums=lump_sums,
        rate_adjustments=adjustments,
        start_date=terms.start_date,
        payment_day_of_month=terms.payment_day_of_month,
        preferred_payment_day=terms.preferred_payment_day,
    )
    return [LumpSumImpactResponse.model_validate(i, from_attributes=True) for i in impacts]


@router.post("/current-state", response_model=CurrentStateResponse)
async def mortgage_current_state(req: CurrentStateRequest):
    """Balance and next payment as of a date, assuming every due payment was made."""
    terms = _build_terms(req)
    lump_sums = _build_lump_sums(req)
    adjustments = _build_adjustments(req)

    errors = validate_inputs(terms, lump_sums, adjustments)
    if errors:
        raise HTTPException(status_code=422, detail={"status": "invalid_input", "errors": errors})

    state = current_state(terms, req.as_of, lump_sums, adjustments)
    return CurrentStateResponse.model_validate(state, from_attributes=True)
