"""
Illustration download endpoint.

POST /api/illustrations/iul: IUL projection rendered as a PDF.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from .. import schemas
from ..calculators.iul import project_iul
from ..config import CalculatorConfig, Settings
from ..dependencies import get_config, get_settings
from ..exceptions import InvalidInputError
from ..illustration_pdf import generate_iul_illustration_pdf

router = APIRouter(prefix="/illustrations", tags=["illustrations"])


class IllustrationRequest(schemas.IULRequest):
    client_name: Optional[str] = None


@router.post("/iul")
def iul_illustration(
    req: IllustrationRequest,
    config: CalculatorConfig = Depends(get_config),
    settings: Settings = Depends(get_settings),
):
    """Returns: application/pdf"""
    try:
        projection = project_iul(
            req.age, req.monthly_premium, req.initial_lump_sum, config,
            market_returns=req.market_returns,
            death_benefit_base=req.death_benefit_base,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    pdf_bytes = generate_iul_illustration_pdf(
        projection, req.model_dump(), settings.COMPANY_NAME, config,
    )
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="IUL-Illustration.pdf"'},
    )
