"""POST /v1/wait-time - Recommended wait before collecting rewards"""

import logging
from fastapi import APIRouter, Depends, Request

from algo_compounder.api.dependencies import get_request_id, get_settings
from algo_compounder.api.v1.coefficients import coefs_from_request
from algo_compounder.api.v1.schemas import WaitTimeRequest, WaitTimeResponse
from algo_compounder.config import Settings
from algo_compounder.domain.interest import recommend_wait_time
from algo_compounder.infrastructure.observability.metrics import record_recommendation

router = APIRouter()


@router.post("/wait-time", response_model=WaitTimeResponse)
def create_wait_time(
    request_body: WaitTimeRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Compute how long to wait before the next reward collection.

    Falls back to the configured default wait when the model has no
    optimum for the given coefficients.
    """
    recommendation = recommend_wait_time(
        coefs_from_request(request_body, config),
        config.default_wait_seconds,
    )
    record_recommendation(recommendation)

    logging.info(
        "Wait time computed",
        extra={
            "request_id": get_request_id(request),
            "balance_algos": request_body.balance,
            "optimum_found": recommendation.found,
            "wait_seconds": recommendation.wait_seconds,
        },
    )

    return WaitTimeResponse(
        wait_seconds=recommendation.wait_seconds,
        wait_days=recommendation.wait_days,
        found=recommendation.found,
        optimal_collections_per_year=recommendation.optimal_collections_per_year,
    )
