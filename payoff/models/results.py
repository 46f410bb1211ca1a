from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

NON_AMORTIZING_YEARS = 999


class StopReason(Enum):
    PAID_OFF = "paid_off"
    PERIOD_CAP = "period_cap"  # Payment never retired the balance


class CalculationStatus(Enum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    PAYMENT_TOO_LOW = "payment_too_low"
    CAP_EXCEEDED = "cap_exceeded"


@dataclass(frozen=True)
class PaymentRecord:
    payment_number: int
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal
    annual_rate: Decimal  # Effective rate for this period, after adjustments


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[PaymentRecord]
    stop_reason: StopReason = StopReason.PAID_OFF

    def __len__(self) -> int:
        return len(self.payments)

    @property
    def paid_off(self) -> bool:
        return self.stop_reason is StopReason.PAID_OFF

    @property
    def total_interest(self) -> Decimal:
        return sum((p.interest_portion for p in self.payments), Decimal("0"))

    @property
    def total_principal(self) -> Decimal:
        return sum((p.principal_portion for p in self.payments), Decimal("0"))

    @property
    def total_paid(self) -> Decimal:
        return sum((p.payment_amount for p in self.payments), Decimal("0"))

    @property
    def final_balance(self) -> Decimal:
        return self.payments[-1].remaining_balance if self.payments else Decimal("0")


@dataclass(frozen=True)
class TermEstimate:
    years: int
    months: int
    total_months: int

    @property
    def amortizes(self) -> bool:
        """False when the payment never covers the first month's interest."""
        return self.years < NON_AMORTIZING_YEARS


@dataclass(frozen=True)
class LumpSumImpact:
    lump_sum_id: str
    interest_saved: Decimal
    time_saved_months: int
    principal_reduction: Decimal
    cumulative_interest_saved: Decimal  # Relative to no prepayments at all


@dataclass(frozen=True)
class YearSummary:
    year: int
    total_principal: Decimal
    total_interest: Decimal
    total_paid: Decimal
    ending_balance: Decimal


@dataclass
class MortgageResult:
    status: CalculationStatus
    errors: dict[str, str] = field(default_factory=dict)
    term: TermEstimate | None = None

    schedule: AmortizationSchedule | None = None
    standard_schedule: AmortizationSchedule | None = None  # No extras, no lump sums
    yearly: list[YearSummary] = field(default_factory=list)
    lump_sum_impacts: list[LumpSumImpact] = field(default_factory=list)

    # Summary metrics
    total_interest: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    interest_saved: Decimal = Decimal("0")
    payments_reduced: int = 0
    years_reduced: Decimal = Decimal("0")
    payoff_year: int = 0
    payoff_date: date | None = None

    @property
    def ok(self) -> bool:
        return self.status is CalculationStatus.OK


@dataclass(frozen=True)
class CurrentMortgageState:
    as_of: date
    payments_completed: int
    current_balance: Decimal
    next_payment_date: date
    days_until_payment: int
    next_payment_amount: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    months_remaining: int
