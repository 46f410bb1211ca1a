"""Named failures raised by the payoff engine.

All subclass ValueError so callers that already guard on ValueError keep
working.
"""


class PaymentDateOutOfRangeError(ValueError):
    """Target date lies beyond the 1200-payment horizon."""


class UnresolvableTriggerError(ValueError):
    """A lump sum or rate adjustment cannot be mapped to a payment number."""


class NonAmortizingPaymentError(ValueError):
    """Monthly payment does not cover the first month's interest."""


class ScheduleCapExceededError(ValueError):
    """Simulation hit the period cap with a balance still outstanding."""
