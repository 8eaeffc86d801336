"""Request coefficients merged with configured defaults"""

from algo_compounder.api.v1.schemas import CoefficientsRequest
from algo_compounder.config import Settings
from algo_compounder.domain.models import CompoundModelCoefs


def coefs_from_request(request_body: CoefficientsRequest, config: Settings) -> CompoundModelCoefs:
    return CompoundModelCoefs(
        years=config.interest_years if request_body.years is None else request_body.years,
        rate=config.interest_rate if request_body.rate is None else request_body.rate,
        avg_fees=config.interest_avg_fees if request_body.avg_fees is None else request_body.avg_fees,
        initial_principal=request_body.balance,
    )
