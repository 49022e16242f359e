"""
Calculator registry: maps calculator names to calculator classes.

Used by the generic form endpoint so the site forms and chat widget can
submit raw fields without knowing each calculator's signature.
"""

from .service_quote import ServiceQuoteCalculator
from .iul import IULCalculator
from .annuity import AnnuityCalculator
from .aca_subsidy import ACASubsidyCalculator
from .policy_premium import PolicyPremiumCalculator
from .base import BaseCalculator
from ..config import DEFAULT_CONFIG, CalculatorConfig
from ..exceptions import NotFoundError

CALCULATOR_REGISTRY: dict[str, type] = {
    "quote": ServiceQuoteCalculator,
    "iul": IULCalculator,
    "annuity": AnnuityCalculator,
    "aca-subsidy": ACASubsidyCalculator,
    "policy-quotes": PolicyPremiumCalculator,
}


def get_calculator(name: str, config: CalculatorConfig = DEFAULT_CONFIG) -> BaseCalculator:
    """Returns an instance of the named calculator, or raises NotFoundError."""
    if name not in CALCULATOR_REGISTRY:
        raise NotFoundError(
            f"No calculator registered for: {name}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[name](config)


def has_calculator(name: str) -> bool:
    return name in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered calculator names."""
    return list(CALCULATOR_REGISTRY.keys())
