"""
ACA premium tax credit estimate.

Households under 400% of the federal poverty line pay at most 8.5% of income
toward the benchmark plan; the subsidy covers the rest of the monthly cost.
"""

from .base import BaseCalculator, require_finite
from ..config import DEFAULT_CONFIG, CalculatorConfig
from ..exceptions import InvalidInputError
from ..schemas import ACASubsidyEstimate


def federal_poverty_line(family_size: int, config: CalculatorConfig = DEFAULT_CONFIG) -> float:
    return config.aca.fpl_base + (family_size - 1) * config.aca.fpl_per_person


def estimate_aca_subsidy(household_income: float, family_size: int, plan_cost: float,
                         config: CalculatorConfig = DEFAULT_CONFIG) -> ACASubsidyEstimate:
    """Full breakdown: poverty line, ratio, affordable premium, subsidy."""
    require_finite(household_income=household_income, family_size=family_size,
                   plan_cost=plan_cost)
    if household_income < 0:
        raise InvalidInputError("household_income must not be negative")
    if family_size < 1:
        raise InvalidInputError("family_size must be at least 1")
    if plan_cost < 0:
        raise InvalidInputError("plan_cost must not be negative")

    fpl = federal_poverty_line(family_size, config)
    ratio = household_income / fpl
    eligible = ratio < config.aca.fpl_ratio_limit
    affordable = household_income * config.aca.affordability_pct / 12
    subsidy = max(0.0, plan_cost - affordable) if eligible else 0.0

    return ACASubsidyEstimate(
        federal_poverty_line=fpl,
        poverty_ratio=ratio,
        affordable_premium=affordable,
        eligible=eligible,
        subsidy=subsidy,
    )


def calculate_aca_subsidy(household_income: float, family_size: int, plan_cost: float,
                          config: CalculatorConfig = DEFAULT_CONFIG) -> float:
    return estimate_aca_subsidy(household_income, family_size, plan_cost, config).subsidy


class ACASubsidyCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> dict:
        self.require(fields, "household_income", "family_size", "plan_cost")
        return estimate_aca_subsidy(
            self.parse_number(fields.get("household_income")),
            self.parse_int(fields.get("family_size")),
            self.parse_number(fields.get("plan_cost")),
            self.config,
        ).model_dump()
