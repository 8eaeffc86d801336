"""POST /v1/projection - Projected wallet value at a collection rate"""

import math
from fastapi import APIRouter, Depends

from algo_compounder.api.dependencies import get_settings
from algo_compounder.api.v1.coefficients import coefs_from_request
from algo_compounder.api.v1.schemas import ProjectionRequest, ProjectionResponse
from algo_compounder.config import Settings
from algo_compounder.domain.interest import InterestModel

router = APIRouter()


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(
    request_body: ProjectionRequest,
    config: Settings = Depends(get_settings),
):
    """Evaluate the wallet value model; non-finite results come back as null"""
    model = InterestModel(coefs_from_request(request_body, config))
    value = model.projected_value(request_body.collections_per_year)
    finite = math.isfinite(value)

    return ProjectionResponse(
        collections_per_year=request_body.collections_per_year,
        projected_value=value if finite else None,
        finite=finite,
    )
