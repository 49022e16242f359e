from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ValueObject(BaseModel):
    """Calculator results are created per call and never mutated."""

    model_config = ConfigDict(frozen=True)


# --- Results ---

class Service(ValueObject):
    id: str
    name: str
    base_price: float


class Quote(ValueObject):
    service_id: str
    service_name: str
    complexity_tier: str
    multiplier: float
    estimated_total: float
    currency: str = "USD"


class IULYear(ValueObject):
    year: int
    age: int
    annual_premium: float
    credited_rate: float
    cost_of_insurance: float
    cash_value: float
    death_benefit: float


class IULProjection(ValueObject):
    years: List[IULYear]
    total_premiums_paid: float
    final_cash_value: float
    final_death_benefit: float
    negative_coi_years: List[int] = []


class AnnuityPayout(ValueObject):
    principal: float
    annual_rate: float
    years: int
    monthly_income: float
    total_payout: float


class ACASubsidyEstimate(ValueObject):
    federal_poverty_line: float
    poverty_ratio: float
    affordable_premium: float
    eligible: bool
    subsidy: float


class PriorityScore(ValueObject):
    tier: str
    score: int
    matched_rules: List[str] = []


class PolicyQuote(ValueObject):
    carrier_id: str
    carrier_name: str
    policy_type: str
    monthly_premium: float
    annual_premium: float
    rating: float
    benefits: List[str] = []
    estimated_approval_time: str


class PolicyQuoteSet(ValueObject):
    policy_type: str
    policy_name: str
    base_premium: float
    quotes: List[PolicyQuote]


class Recommendation(ValueObject):
    package: str
    services: List[str]


# --- Requests ---

class QuoteRequest(BaseModel):
    service_id: str
    complexity_tier: str = "low"


class IULRequest(BaseModel):
    age: int = Field(ge=0, le=120)
    monthly_premium: float = Field(ge=0)
    initial_lump_sum: float = Field(default=0.0, ge=0)
    death_benefit_base: Optional[float] = Field(default=None, gt=0)
    market_returns: Optional[List[float]] = None


class AnnuityRequest(BaseModel):
    principal: float
    annual_rate: float
    years: int


class ACASubsidyRequest(BaseModel):
    household_income: float
    family_size: int
    plan_cost: float


class PolicyQuoteRequest(BaseModel):
    policy_type: str
    applicant: Dict[str, Any] = {}


class IntakeRequest(BaseModel):
    """Raw intake form answers, camelCase keys as submitted by the site forms."""

    model_config = ConfigDict(extra="allow")

    serviceType: Optional[str] = None


class PriorityResponse(BaseModel):
    tier: str
    score: int
    matched_rules: List[str] = []
    preset: str
    route_to: str


class RecommendRequest(BaseModel):
    answers: List[str] = []
