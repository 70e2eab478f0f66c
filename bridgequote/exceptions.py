"""Domain errors raised by the pricing engine.

These signal programmer misuse of the engine (quoting an application that
cannot be priced). User-correctable problems are reported through
``ValidationResult`` instead and never raised.
"""

from typing import List, Optional


class PricingError(ValueError):
    """Base class for errors raised while pricing a loan."""


class ManualUnderwritingRequired(PricingError):
    """The property has too many units to be priced from the rate card."""

    def __init__(self, units: int):
        self.units = units
        super().__init__(f"{units} units require manual underwriting referral")


class InvalidApplicationError(PricingError):
    """A quote was requested for an application that fails validation."""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        detail = "; ".join(self.errors) or "application is not valid"
        super().__init__(f"Cannot quote an invalid application: {detail}")
