"""
Multi-carrier policy premium generator.

Validates the applicant fields a policy type needs, computes a monthly base
premium from age / health / coverage (or investment amount for annuities),
then lists one quote per eligible carrier, cheapest first.

Carrier spread: pass a random.Random to reproduce the ±5% per-carrier
variance used on the live quote form. Without one every carrier quotes the
base premium, so results are deterministic.
"""

import logging
import math
import random
from typing import Optional

from .base import BaseCalculator, parse_number
from ..exceptions import InvalidInputError, NotFoundError
from ..schemas import PolicyQuote, PolicyQuoteSet

logger = logging.getLogger(__name__)


# line: which carrier product line covers the policy type
POLICY_TYPES = {
    "termLife": {
        "name": "Term Life Insurance",
        "description": "Affordable protection for a specific term",
        "required_fields": ["age", "health", "coverage_amount", "term_length"],
        "line": "term_life",
        "approval_time": "7-14 days",
        "benefits": [
            "Pure death benefit protection",
            "Most affordable option",
            "Convertible to permanent policy",
            "Quick underwriting (7-14 days)",
        ],
    },
    "wholeLife": {
        "name": "Whole Life Insurance",
        "description": "Lifetime coverage with cash value accumulation",
        "required_fields": ["age", "health", "coverage_amount"],
        "line": "whole_life",
        "approval_time": "10-21 days",
        "benefits": [
            "Lifetime coverage guaranteed",
            "Cash value growth",
            "Loan against cash value",
            "Tax-free withdrawals",
        ],
    },
    "universalLife": {
        "name": "Universal Life (UL)",
        "description": "Flexible coverage with investment options",
        "required_fields": ["age", "health", "coverage_amount"],
        "line": "whole_life",
        "approval_time": "10-21 days",
        "benefits": [
            "Flexible premiums",
            "Adjustable death benefit",
            "Cash value potential",
            "Lower cost than whole life",
        ],
    },
    "indexedUniversalLife": {
        "name": "Indexed Universal Life (IUL)",
        "description": "Market-linked growth with principal protection",
        "required_fields": ["age", "health", "coverage_amount"],
        "line": "whole_life",
        "approval_time": "14-28 days",
        "benefits": [
            "Market-linked growth potential",
            "Principal protection (0% floor)",
            "Tax-deferred growth",
            "Monthly income potential",
        ],
    },
    "immediateAnnuity": {
        "name": "Immediate Annuity",
        "description": "Guaranteed income for life",
        "required_fields": ["age", "investment_amount", "payment_frequency"],
        "line": "annuities",
        "approval_time": "5-10 days",
        "benefits": [
            "Guaranteed income for life",
            "No market risk",
            "Immediate payments",
            "Predictable retirement income",
        ],
    },
    "fixedIndexAnnuity": {
        "name": "Fixed Index Annuity (FIA)",
        "description": "Protected growth linked to market index",
        "required_fields": ["age", "investment_amount"],
        "line": "annuities",
        "approval_time": "5-10 days",
        "benefits": [
            "Principal protected",
            "Market upside potential",
            "Tax-deferred growth",
            "Guaranteed minimum interest rate",
        ],
    },
}

CARRIERS = {
    "ethos": {"name": "Ethos", "lines": {"term_life"}, "rating": 4.8},
    "mutualOfOmaha": {"name": "Mutual of Omaha", "lines": {"term_life", "whole_life", "annuities"}, "rating": 4.6},
    "americo": {"name": "Americo", "lines": {"term_life", "whole_life", "annuities"}, "rating": 4.5},
    "allianz": {"name": "Allianz", "lines": {"annuities"}, "rating": 4.7},
    "nationwide": {"name": "Nationwide", "lines": {"term_life", "whole_life", "annuities"}, "rating": 4.4},
    "massMutual": {"name": "Mass Mutual", "lines": {"term_life", "whole_life", "annuities"}, "rating": 4.5},
    "johnHancock": {"name": "John Hancock", "lines": {"term_life", "whole_life", "annuities"}, "rating": 4.6},
    "prudential": {"name": "Prudential", "lines": {"term_life", "whole_life", "annuities"}, "rating": 4.5},
}

HEALTH_FACTORS = {
    "excellent": 0.85,
    "good": 1.0,
    "fair": 1.25,
    "poor": 1.75,
}

CARRIER_SPREAD = 0.05  # ±5%

MAX_AGE = 120
MAX_TERM_YEARS = 40


def get_policy_type(policy_type: str) -> dict:
    if policy_type not in POLICY_TYPES:
        raise NotFoundError(
            "Unknown policy type: %s. Available: %s" % (policy_type, list(POLICY_TYPES))
        )
    return POLICY_TYPES[policy_type]


def validate_required_fields(policy_type: str, data: dict) -> list:
    """Returns the list of missing required fields (empty when valid)."""
    required = get_policy_type(policy_type)["required_fields"]
    return [f for f in required if data.get(f) in (None, "")]


def health_risk_factor(health) -> float:
    return HEALTH_FACTORS.get(str(health or "").strip().lower(), 1.0)


def get_eligible_carriers(policy_type: str) -> list:
    """Carriers writing the policy type's line, best rated first."""
    line = get_policy_type(policy_type)["line"]
    eligible = [
        {"id": carrier_id, **carrier}
        for carrier_id, carrier in CARRIERS.items()
        if line in carrier["lines"]
    ]
    return sorted(eligible, key=lambda c: c["rating"], reverse=True)


def _check_applicant(age: float, units: float, investment: float):
    if not 0 <= age <= MAX_AGE:
        raise InvalidInputError("age must be between 0 and %d" % MAX_AGE)
    if not (math.isfinite(units) and units >= 0):
        raise InvalidInputError("coverage_amount must be a non-negative number")
    if not (math.isfinite(investment) and investment >= 0):
        raise InvalidInputError("investment_amount must be a non-negative number")


def calculate_base_premium(policy_type: str, data: dict) -> float:
    """Monthly base premium, rounded to cents."""
    get_policy_type(policy_type)
    age = parse_number(data.get("age"))
    units = parse_number(data.get("coverage_amount")) / 100000
    investment = parse_number(data.get("investment_amount"))
    health = health_risk_factor(data.get("health"))
    _check_applicant(age, units, investment)

    if policy_type == "termLife":
        term_length = parse_number(data.get("term_length"), 20)
        if not 0 < term_length <= MAX_TERM_YEARS:
            raise InvalidInputError("term_length must be between 1 and %d years" % MAX_TERM_YEARS)
        age_rate = 1.05 ** (age - 25)  # 5% per year from age 25
        premium = units * (10 + age_rate * 2) * health * (term_length / 20)
    elif policy_type in ("wholeLife", "universalLife"):
        premium = units * (20 + (age - 25) * 0.5) * health
    elif policy_type == "indexedUniversalLife":
        premium = units * (18 + (age - 25) * 0.4) * health
    elif policy_type == "immediateAnnuity":
        payout_rate = 0.04 + max(0.0, age - 60) * 0.002  # higher income at older ages
        premium = investment * payout_rate / 12
    else:  # fixedIndexAnnuity
        premium = investment * 0.03 / 12

    if not math.isfinite(premium):
        raise InvalidInputError("premium out of range for %s" % policy_type)
    return round(premium, 2)


def generate_policy_quotes(policy_type: str, data: dict,
                           rng: Optional[random.Random] = None) -> PolicyQuoteSet:
    """
    Quote every eligible carrier for a policy type.

    Raises:
        NotFoundError: unknown policy type
        InvalidInputError: required applicant fields missing
    """
    ptype = get_policy_type(policy_type)
    missing = validate_required_fields(policy_type, data)
    if missing:
        raise InvalidInputError("Missing fields: %s" % ", ".join(missing), missing_fields=missing)

    base_premium = calculate_base_premium(policy_type, data)

    def spread():
        if rng is None:
            return 1.0
        return 1 - CARRIER_SPREAD + rng.random() * CARRIER_SPREAD * 2

    quotes = []
    for carrier in get_eligible_carriers(policy_type):
        monthly = round(base_premium * spread(), 2)
        quotes.append(PolicyQuote(
            carrier_id=carrier["id"],
            carrier_name=carrier["name"],
            policy_type=ptype["name"],
            monthly_premium=monthly,
            annual_premium=round(monthly * 12, 2),
            rating=carrier["rating"],
            benefits=ptype["benefits"],
            estimated_approval_time=ptype["approval_time"],
        ))

    # Stable sort keeps rating order among equal premiums
    quotes.sort(key=lambda q: q.monthly_premium)
    logger.debug("Generated %d %s quotes at base %.2f", len(quotes), policy_type, base_premium)

    return PolicyQuoteSet(
        policy_type=policy_type,
        policy_name=ptype["name"],
        base_premium=base_premium,
        quotes=quotes,
    )


class PolicyPremiumCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> dict:
        self.require(fields, "policy_type")
        data = {k: v for k, v in fields.items() if k != "policy_type"}
        return generate_policy_quotes(str(fields["policy_type"]), data).model_dump()
