"""
Calculator endpoints.

POST /api/calculators/quote           service quote
POST /api/calculators/iul             IUL cash-value projection
POST /api/calculators/annuity         monthly annuity income
POST /api/calculators/aca-subsidy     ACA premium subsidy estimate
POST /api/calculators/policy-quotes   multi-carrier policy premiums
POST /api/calculators/{name}/form     raw form fields through the registry
GET  /api/services                    service catalog
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from .. import schemas
from ..calculators.aca_subsidy import estimate_aca_subsidy
from ..calculators.annuity import build_annuity_payout
from ..calculators.iul import project_iul
from ..calculators.policy_premium import generate_policy_quotes
from ..calculators.registry import get_calculator
from ..calculators.service_quote import calculate_quote, list_services
from ..config import CalculatorConfig
from ..dependencies import get_config
from ..exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculators"])


def _bad_request(e: InvalidInputError):
    logger.info("Rejected calculator input: %s", e)
    detail = {"message": str(e)}
    if e.missing_fields:
        detail["missing_fields"] = e.missing_fields
    return HTTPException(status_code=400, detail=detail)


@router.get("/services", response_model=List[schemas.Service])
def services(config: CalculatorConfig = Depends(get_config)):
    return list_services(config)


@router.post("/calculators/quote", response_model=schemas.Quote)
def quote(req: schemas.QuoteRequest, config: CalculatorConfig = Depends(get_config)):
    try:
        return calculate_quote(req.service_id, req.complexity_tier, config)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/calculators/iul", response_model=schemas.IULProjection)
def iul(req: schemas.IULRequest, config: CalculatorConfig = Depends(get_config)):
    try:
        return project_iul(
            req.age, req.monthly_premium, req.initial_lump_sum, config,
            market_returns=req.market_returns,
            death_benefit_base=req.death_benefit_base,
        )
    except InvalidInputError as e:
        raise _bad_request(e)


@router.post("/calculators/annuity", response_model=schemas.AnnuityPayout)
def annuity(req: schemas.AnnuityRequest):
    try:
        return build_annuity_payout(req.principal, req.annual_rate, req.years)
    except InvalidInputError as e:
        raise _bad_request(e)


@router.post("/calculators/aca-subsidy", response_model=schemas.ACASubsidyEstimate)
def aca_subsidy(req: schemas.ACASubsidyRequest, config: CalculatorConfig = Depends(get_config)):
    try:
        return estimate_aca_subsidy(req.household_income, req.family_size, req.plan_cost, config)
    except InvalidInputError as e:
        raise _bad_request(e)


@router.post("/calculators/policy-quotes", response_model=schemas.PolicyQuoteSet)
def policy_quotes(req: schemas.PolicyQuoteRequest):
    try:
        return generate_policy_quotes(req.policy_type, req.applicant)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        raise _bad_request(e)


@router.post("/calculators/{name}/form")
def calculate_from_fields(
    name: str,
    fields: Dict[str, Any] = Body(...),
    config: CalculatorConfig = Depends(get_config),
):
    """
    Run a registered calculator on raw form fields (strings accepted).

    Used by the intake forms and chat widget, which post whatever the user typed.
    """
    try:
        calculator = get_calculator(name, config)
        return calculator.calculate(fields)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        raise _bad_request(e)
