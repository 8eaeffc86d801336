"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Optional


class CoefficientsRequest(BaseModel):
    """Model coefficients; unset fields use the configured defaults"""

    balance: float = Field(..., ge=0, description="Current account balance in Algos")
    years: Optional[float] = Field(None, gt=0, description="Compounding horizon in years")
    rate: Optional[float] = Field(None, gt=-1, description="Annual interest rate")
    avg_fees: Optional[float] = Field(None, ge=0, description="Fee per collection in Algos")


class WaitTimeRequest(CoefficientsRequest):
    """Request body for POST /v1/wait-time"""


class WaitTimeResponse(BaseModel):
    """Response for POST /v1/wait-time"""

    wait_seconds: float
    wait_days: float
    found: bool
    optimal_collections_per_year: Optional[float] = None


class ProjectionRequest(CoefficientsRequest):
    """Request body for POST /v1/projection"""

    collections_per_year: float = Field(..., gt=0, description="Reward collections per year")


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projection"""

    collections_per_year: float
    projected_value: Optional[float] = None
    finite: bool
