"""
Intake endpoints.

POST /api/intake/priority   score a lead and pick its inbox
POST /api/intake/recommend  recommend a service package
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import schemas
from ..config import Settings
from ..dependencies import get_settings
from ..exceptions import NotFoundError
from ..lead_priority import get_preset, route_lead, score_priority, service_type
from ..recommendation import recommend_package

router = APIRouter(prefix="/intake", tags=["intake"])


@router.post("/priority", response_model=schemas.PriorityResponse)
def priority(
    intake: schemas.IntakeRequest,
    preset: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
):
    preset_name = preset or settings.LEAD_SCORING_PRESET
    try:
        rules = get_preset(preset_name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    answers = intake.model_dump(exclude_none=True)
    result = score_priority(answers, rules)
    return schemas.PriorityResponse(
        tier=result.tier,
        score=result.score,
        matched_rules=result.matched_rules,
        preset=preset_name,
        route_to=route_lead(service_type(answers), result.tier, settings),
    )


@router.post("/recommend", response_model=schemas.Recommendation)
def recommend(req: schemas.RecommendRequest):
    return recommend_package(req.answers)
