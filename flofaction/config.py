"""
Application settings and calculator configuration.

Settings come from the environment (or .env). Calculator constants live in an
immutable CalculatorConfig that is passed explicitly to every calculator.
"""

import enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoiFloorPolicy(str, enum.Enum):
    ALLOW_NEGATIVE = "allow_negative"   # cost of insurance may go below zero
    FLOOR_AT_ZERO = "floor_at_zero"


class ServiceItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    base_price: float


DEFAULT_SERVICES = (
    ServiceItem(id="tax", name="Tax Preparation", base_price=250),
    ServiceItem(id="web", name="Web Development", base_price=1500),
    ServiceItem(id="ai", name="AI Automation", base_price=3000),
    ServiceItem(id="notary", name="Notary Services", base_price=25),
    ServiceItem(id="ins", name="Insurance", base_price=0),  # quote based
)

DEFAULT_COMPLEXITY_MULTIPLIERS = (
    ("low", 1.0),
    ("medium", 1.5),
    ("high", 2.5),
    ("enterprise", 5.0),
)


class IULAssumptions(BaseModel):
    """Fixed illustration assumptions for the IUL projection."""

    model_config = ConfigDict(frozen=True)

    cap_rate: float = 0.105
    floor_rate: float = 0.0075
    market_return: float = 0.07
    coi_base_rate: float = 0.0005
    coi_growth_rate: float = 0.06
    projection_years: int = 30
    death_benefit_base: float = 500000.0
    coi_floor_policy: CoiFloorPolicy = CoiFloorPolicy.ALLOW_NEGATIVE


class ACAConstants(BaseModel):
    model_config = ConfigDict(frozen=True)

    fpl_base: float = 15060.0
    fpl_per_person: float = 5380.0
    fpl_ratio_limit: float = 4.0
    affordability_pct: float = 0.085


class CalculatorConfig(BaseModel):
    """Every constant the calculators read. Frozen; build a new one to change it."""

    model_config = ConfigDict(frozen=True)

    services: Tuple[ServiceItem, ...] = DEFAULT_SERVICES
    complexity_multipliers: Tuple[Tuple[str, float], ...] = DEFAULT_COMPLEXITY_MULTIPLIERS
    currency: str = "USD"
    iul: IULAssumptions = IULAssumptions()
    aca: ACAConstants = ACAConstants()

    def find_service(self, service_id: str):
        for service in self.services:
            if service.id == service_id:
                return service
        return None

    def multiplier_for(self, tier: str) -> Optional[float]:
        for name, multiplier in self.complexity_multipliers:
            if name == tier:
                return multiplier
        return None


DEFAULT_CONFIG = CalculatorConfig()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "flofaction-quoting"
    COMPANY_NAME: str = "FloFaction LLC"
    COMPANY_PHONE: str = "(772) 208-9646"
    CURRENCY: str = "USD"
    ALLOWED_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Calculator policy knobs
    IUL_COI_FLOOR_POLICY: CoiFloorPolicy = CoiFloorPolicy.ALLOW_NEGATIVE
    LEAD_SCORING_PRESET: str = "intake"

    # Lead routing inboxes
    INSURANCE_INBOX: str = "flofaction.insurance@gmail.com"
    BUSINESS_INBOX: str = "flofaction.business@gmail.com"
    DEFAULT_INBOX: str = "flofactionllc@gmail.com"

    def calculator_config(self) -> CalculatorConfig:
        """Build the immutable calculator config from env-driven settings."""
        return CalculatorConfig(
            currency=self.CURRENCY,
            iul=IULAssumptions(coi_floor_policy=self.IUL_COI_FLOOR_POLICY),
        )


settings = Settings()
