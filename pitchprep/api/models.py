"""
Pydantic models for the pitch API.

Request bodies use the camelCase keys the web app sends; Python attributes
are snake_case.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GeneratePitchRequest(BaseModel):
    """Request body for generating a pitch."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", description="Owner of the profile to pitch from.")
    company_name: str = Field(..., alias="companyName", description="Company display name.")
    company_id: Optional[str] = Field(
        None, alias="companyId", description="Company record to refresh with the new card."
    )
    force_refresh: bool = Field(
        False, alias="forceRefresh", description="Refetch employer research even if cached."
    )


class ResearchEmployersRequest(BaseModel):
    """Request body for batch employer research."""

    model_config = ConfigDict(populate_by_name=True)

    company_names: List[str] = Field(..., alias="companyNames")


class ResearchEmployersResponse(BaseModel):
    """Per-company context or {error, errorType} marker, keyed by company name."""

    results: Dict[str, Dict[str, Any]]


class CachedContextResponse(BaseModel):
    """Cached employer context and when it was fetched."""

    model_config = ConfigDict(populate_by_name=True)

    context: Dict[str, Any]
    cached_at: datetime = Field(..., alias="cachedAt")


class ClearGeneratedResponse(BaseModel):
    message: str
    modified: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
