"""
Indexed Universal Life cash-value projection.

Year-by-year recurrence over the illustration period (30 years):

    coi        = (death_benefit_base - cash_value) * coi_base_rate * e^(coi_growth_rate * year)
    rate       = clamp(market_return, floor_rate, cap_rate)
    cash_value = (cash_value + annual_premium) * (1 + rate) - coi
    death_benefit = death_benefit_base + cash_value

Once cash value exceeds the death benefit base the COI term goes negative.
IULAssumptions.coi_floor_policy decides whether that is kept or floored at zero;
either way the affected years are reported in negative_coi_years.
"""

import logging
import math
from typing import Optional, Sequence

from .base import BaseCalculator, require_finite
from ..config import DEFAULT_CONFIG, CalculatorConfig, CoiFloorPolicy
from ..exceptions import InvalidInputError
from ..schemas import IULProjection, IULYear

logger = logging.getLogger(__name__)


def credited_rate(market_return: float, floor_rate: float, cap_rate: float) -> float:
    """Index crediting: the market return clamped to [floor, cap]."""
    return min(max(market_return, floor_rate), cap_rate)


def cost_of_insurance(net_amount_at_risk: float, year: int,
                      base_rate: float, growth_rate: float) -> float:
    return net_amount_at_risk * base_rate * math.exp(growth_rate * year)


def project_iul(
    age: int,
    monthly_premium: float,
    initial_lump_sum: float = 0.0,
    config: CalculatorConfig = DEFAULT_CONFIG,
    *,
    market_returns: Optional[Sequence[float]] = None,
    death_benefit_base: Optional[float] = None,
) -> IULProjection:
    """
    Project cash value and death benefit for each policy year.

    Args:
        age: Issue age. Each row reports the attained age at the end of that year.
        monthly_premium: Planned premium, paid annually as monthly × 12.
        initial_lump_sum: Opening cash value.
        market_returns: Optional per-year index returns, cycled if shorter than
            the projection. Defaults to the configured average market return.
        death_benefit_base: Face amount override.

    Returns:
        IULProjection with exactly config.iul.projection_years rows.
    """
    require_finite(age=age, monthly_premium=monthly_premium, initial_lump_sum=initial_lump_sum)
    if age < 0:
        raise InvalidInputError("age must not be negative")
    if monthly_premium < 0:
        raise InvalidInputError("monthly_premium must not be negative")
    if initial_lump_sum < 0:
        raise InvalidInputError("initial_lump_sum must not be negative")

    assumptions = config.iul
    face = assumptions.death_benefit_base if death_benefit_base is None else death_benefit_base
    if face <= 0:
        raise InvalidInputError("death_benefit_base must be positive")
    returns = list(market_returns) if market_returns else [assumptions.market_return]

    annual_premium = monthly_premium * 12
    cash_value = float(initial_lump_sum)
    total_premiums = float(initial_lump_sum)
    rows = []
    negative_coi_years = []

    for year in range(1, assumptions.projection_years + 1):
        coi = cost_of_insurance(face - cash_value, year,
                                assumptions.coi_base_rate, assumptions.coi_growth_rate)
        if coi < 0:
            negative_coi_years.append(year)
            if assumptions.coi_floor_policy == CoiFloorPolicy.FLOOR_AT_ZERO:
                coi = 0.0

        rate = credited_rate(returns[(year - 1) % len(returns)],
                             assumptions.floor_rate, assumptions.cap_rate)
        cash_value = (cash_value + annual_premium) * (1 + rate) - coi
        total_premiums += annual_premium

        rows.append(IULYear(
            year=year,
            age=int(age) + year,
            annual_premium=annual_premium,
            credited_rate=rate,
            cost_of_insurance=coi,
            cash_value=cash_value,
            death_benefit=face + cash_value,
        ))

    if negative_coi_years:
        logger.warning(
            "IUL projection: cash value exceeds death benefit base from year %d "
            "(cost of insurance negative, policy=%s)",
            negative_coi_years[0], assumptions.coi_floor_policy.value,
        )

    return IULProjection(
        years=rows,
        total_premiums_paid=total_premiums,
        final_cash_value=cash_value,
        final_death_benefit=face + cash_value,
        negative_coi_years=negative_coi_years,
    )


class IULCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> dict:
        self.require(fields, "age", "monthly_premium")
        face = self.parse_number(fields.get("death_benefit_base", fields.get("coverage_amount")))
        projection = project_iul(
            self.parse_int(fields.get("age")),
            self.parse_number(fields.get("monthly_premium")),
            self.parse_number(fields.get("initial_lump_sum")),
            self.config,
            death_benefit_base=face or None,
        )
        return projection.model_dump()
