"""
Service quote calculator.

Estimated total = catalog base price × complexity multiplier.
Unknown tiers price at multiplier 1; unknown services are an error.
"""

import logging

from .base import BaseCalculator
from ..config import DEFAULT_CONFIG, CalculatorConfig
from ..exceptions import NotFoundError
from ..schemas import Quote, Service

logger = logging.getLogger(__name__)


def list_services(config: CalculatorConfig = DEFAULT_CONFIG) -> list:
    return [Service(id=s.id, name=s.name, base_price=s.base_price) for s in config.services]


def calculate_quote(service_id: str, complexity_tier: str,
                    config: CalculatorConfig = DEFAULT_CONFIG) -> Quote:
    """Price a catalog service at a complexity tier."""
    service = config.find_service(service_id)
    if service is None:
        raise NotFoundError("Service not found: %s" % service_id)

    tier = (complexity_tier or "").strip().lower()
    multiplier = config.multiplier_for(tier)
    if multiplier is None:
        multiplier = 1.0
        logger.debug("Unknown complexity tier %r, using multiplier 1", complexity_tier)

    return Quote(
        service_id=service.id,
        service_name=service.name,
        complexity_tier=tier,
        multiplier=multiplier,
        estimated_total=service.base_price * multiplier,
        currency=config.currency,
    )


class ServiceQuoteCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> dict:
        self.require(fields, "service_id")
        tier = fields.get("complexity_tier", fields.get("complexity", "low"))
        return calculate_quote(str(fields["service_id"]), str(tier), self.config).model_dump()
