"""
Annuity payout calculator.

Standard amortization: the level monthly income a principal supports over
`years` at `annual_rate`, compounded monthly.

    r = annual_rate / 12,  n = years * 12
    payout = principal * r * (1 + r)^n / ((1 + r)^n - 1)

Computed in the equivalent form P * r / (1 - (1 + r)^-n) via log1p/expm1, so
tiny rates do not collapse (1 + r)^n to 1.0 and long terms do not overflow.
A zero rate or term would divide by zero, so both are rejected up front.
"""

import math

from .base import BaseCalculator, require_finite
from ..exceptions import InvalidInputError
from ..schemas import AnnuityPayout

MAX_YEARS = 100


def calculate_annuity_payout(principal: float, annual_rate: float, years: int) -> float:
    """Monthly income for a principal. Raises InvalidInputError outside the valid domain."""
    require_finite(principal=principal, annual_rate=annual_rate, years=years)
    if principal < 0:
        raise InvalidInputError("principal must not be negative")
    if annual_rate <= 0:
        raise InvalidInputError("annual_rate must be positive")
    if years <= 0:
        raise InvalidInputError("years must be positive")
    if years > MAX_YEARS:
        raise InvalidInputError("years must be at most %d" % MAX_YEARS)

    monthly_rate = annual_rate / 12
    n_payments = years * 12
    # 1 - (1 + r)^-n
    discount = -math.expm1(-n_payments * math.log1p(monthly_rate))
    if discount <= 0:
        raise InvalidInputError("annual_rate %r is too small to amortize" % annual_rate)
    payout = principal * monthly_rate / discount
    if not math.isfinite(payout) or not math.isfinite(payout * n_payments):
        raise InvalidInputError("annuity payout out of range")
    return payout


def build_annuity_payout(principal: float, annual_rate: float, years: int) -> AnnuityPayout:
    monthly = calculate_annuity_payout(principal, annual_rate, years)
    return AnnuityPayout(
        principal=principal,
        annual_rate=annual_rate,
        years=years,
        monthly_income=monthly,
        total_payout=monthly * years * 12,
    )


class AnnuityCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> dict:
        self.require(fields, "principal", "annual_rate", "years")
        return build_annuity_payout(
            self.parse_number(fields.get("principal")),
            self.parse_rate(fields.get("annual_rate")),
            self.parse_int(fields.get("years")),
        ).model_dump()
