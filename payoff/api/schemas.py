"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class LumpSumRequest(BaseModel):
    id: str
    amount: Decimal
    planned_date: date | None = Field(None, description="ISO date the prepayment is made")
    year: int | None = Field(None, description="Legacy trigger: years after start (0 = immediately)")
    month: int | None = Field(None, description="Legacy trigger: month within that year (1-12)")
    description: str = ""
    is_paid: bool = False
    actual_date: date | None = None


class RateAdjustmentRequest(BaseModel):
    id: str
    effective_date: date
    rate_delta_percent: Decimal = Field(..., description="Signed change in percentage points, e.g. 0.5")
    description: str = ""


class MortgageRequest(BaseModel):
    principal: Decimal
    annual_rate: Decimal = Field(..., description="Decimal fraction, e.g. 0.0404 for 4.04%")
    monthly_payment: Decimal
    extra_monthly_payment: Decimal = Decimal("0")
    start_date: date
    payment_day_of_month: int | None = Field(None, description="1-28; defaults from settings")
    preferred_payment_day: int | None = Field(None, description="29-31 for end-of-month payments")
    lump_sums: list[LumpSumRequest] = []
    rate_adjustments: list[RateAdjustmentRequest] = []


class CurrentStateRequest(MortgageRequest):
    as_of: date


class TermRequest(BaseModel):
    principal: Decimal
    annual_rate: Decimal
    monthly_payment: Decimal | None = Field(None, description="Omit to derive it from term_years/term_months")
    term_years: int | None = None
    term_months: int | None = None


class PaymentNumberRequest(BaseModel):
    start_date: date
    target_date: date
    payment_day_of_month: int = Field(1, ge=1, le=28)
    preferred_payment_day: int | None = Field(None, ge=29, le=31)


# ---- Response schemas ----

class PaymentRecordResponse(BaseModel):
    payment_number: int
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal
    annual_rate: Decimal


class YearSummaryResponse(BaseModel):
    year: int
    total_principal: Decimal
    total_interest: Decimal
    total_paid: Decimal
    ending_balance: Decimal


class LumpSumImpactResponse(BaseModel):
    lump_sum_id: str
    interest_saved: Decimal
    time_saved_months: int
    principal_reduction: Decimal
    cumulative_interest_saved: Decimal


class TermResponse(BaseModel):
    monthly_payment: Decimal
    years: int
    months: int
    total_months: int
    amortizes: bool
    label: str


class PaymentNumberResponse(BaseModel):
    payment_number: int
    due_date: date


class MortgageResponse(BaseModel):
    term: TermResponse
    total_monthly_payment: Decimal
    total_interest: Decimal
    total_paid: Decimal
    standard_total_interest: Decimal
    interest_saved: Decimal
    payments_reduced: int
    years_reduced: Decimal
    payoff_year: int
    payoff_date: date | None = None
    schedule: list[PaymentRecordResponse]
    yearly: list[YearSummaryResponse]
    lump_sum_impacts: list[LumpSumImpactResponse] = []


class CurrentStateResponse(BaseModel):
    as_of: date
    payments_completed: int
    current_balance: Decimal
    next_payment_date: date
    days_until_payment: int
    next_payment_amount: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    months_remaining: int
