"""
Lead priority scoring and inbox routing.

A rule table is a tuple of ScoringRule(name, predicate, weight). Every rule
whose predicate matches adds its weight; the sum is thresholded into a tier:

    score >= 5  -> HIGH
    score >= 2  -> MEDIUM
    otherwise   -> LOW

The intake form and the HITL review queue historically weighted leads
differently. Both weightings are kept as named presets; "intake" is the default.
"""

import logging
from typing import Callable, Mapping, NamedTuple, Optional, Tuple

from .calculators.base import parse_number
from .config import Settings, settings as default_settings
from .exceptions import NotFoundError
from .schemas import PriorityScore

logger = logging.getLogger(__name__)

HIGH_THRESHOLD = 5
MEDIUM_THRESHOLD = 2

# Fraction of face amount assumed as annual premium by the HITL queue
HITL_PREMIUM_RATE = 0.02


class ScoringRule(NamedTuple):
    name: str
    predicate: Callable[[Mapping], bool]
    weight: int


def service_type(intake: Mapping) -> str:
    """Form field is serviceType; the HITL queue sent it as service."""
    value = intake.get("serviceType") or intake.get("service")
    return str(value or "").strip().lower()


def field_amount(intake: Mapping, key: str) -> float:
    """Missing or unparseable optional amounts count as zero."""
    return parse_number(intake.get(key), 0.0)


def is_truthy(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "on", "1")
    return bool(value)


INTAKE_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        "wealth_capital_over_50k",
        lambda i: service_type(i) == "wealth" and field_amount(i, "investmentCapital") > 50000,
        5,
    ),
    ScoringRule(
        "insurance_coverage_over_100k",
        lambda i: service_type(i) == "insurance" and field_amount(i, "currentCoverage") > 100000,
        3,
    ),
    ScoringRule(
        "income_over_200k",
        lambda i: field_amount(i, "currentIncome") > 200000,
        2,
    ),
)

HITL_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        "wealth_capital_over_50k",
        lambda i: service_type(i) == "wealth" and field_amount(i, "investmentCapital") > 50000,
        5,
    ),
    ScoringRule(
        "insurance_premium_over_10k",
        lambda i: (service_type(i) == "insurance"
                   and field_amount(i, "currentCoverage") * HITL_PREMIUM_RATE > 10000),
        4,
    ),
    ScoringRule(
        "income_over_200k",
        lambda i: field_amount(i, "currentIncome") > 200000,
        3,
    ),
    ScoringRule(
        "multi_product",
        lambda i: is_truthy(i.get("multiProduct")),
        2,
    ),
)

SCORING_PRESETS = {
    "intake": INTAKE_RULES,
    "hitl": HITL_RULES,
}


def get_preset(name: str) -> Tuple[ScoringRule, ...]:
    if name not in SCORING_PRESETS:
        raise NotFoundError(
            "Unknown scoring preset: %s. Available: %s" % (name, list(SCORING_PRESETS))
        )
    return SCORING_PRESETS[name]


def tier_for_score(score: int) -> str:
    if score >= HIGH_THRESHOLD:
        return "HIGH"
    if score >= MEDIUM_THRESHOLD:
        return "MEDIUM"
    return "LOW"


def score_priority(intake: Mapping,
                   rules: Optional[Tuple[ScoringRule, ...]] = None) -> PriorityScore:
    """Sum matching rule weights and map the total to a tier."""
    rules = INTAKE_RULES if rules is None else rules
    matched = [rule for rule in rules if rule.predicate(intake)]
    score = sum(rule.weight for rule in matched)
    tier = tier_for_score(score)
    logger.debug("Lead scored %d (%s): %s", score, tier, [r.name for r in matched])
    return PriorityScore(tier=tier, score=score, matched_rules=[r.name for r in matched])


# --- Routing ---

INSURANCE_SERVICES = {
    "iul", "auto", "homeowners", "life", "health", "annuities", "medicare", "aca",
    "insurance", "wealth",
}
BUSINESS_SERVICES = {"tax", "notary", "business"}


def route_lead(service: str, tier: str, config: Settings = default_settings) -> str:
    """Inbox address for a scored lead. HIGH priority goes to the high-priority (insurance) desk."""
    key = str(service or "").strip().lower()
    if tier == "HIGH" or key in INSURANCE_SERVICES:
        return config.INSURANCE_INBOX
    if key in BUSINESS_SERVICES:
        return config.BUSINESS_INBOX
    return config.DEFAULT_INBOX
