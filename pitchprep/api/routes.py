"""
Pitch API Endpoints

- POST /api/pitch/generate: generate, score and save a pitch
- POST /api/employers/research: batch employer research (max 5 per request)
- GET  /api/employers/research?company=: cached research, never fetches
- GET  /api/pitches?userId=: saved pitch history, newest first
- POST /api/companies/clear-ai: remove generated cards from all companies

Services are provided through dependencies so tests can override them.
Domain errors are mapped to status codes by the handlers in app.py.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from pitchprep.services import EmployerResearchService, PitchGenerationService

from .models import (
    CachedContextResponse,
    ClearGeneratedResponse,
    GeneratePitchRequest,
    ResearchEmployersRequest,
    ResearchEmployersResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pitch"])

_research_service: Optional[EmployerResearchService] = None
_pitch_service: Optional[PitchGenerationService] = None


def get_research_service() -> EmployerResearchService:
    """Process-wide research service (dependency)."""
    global _research_service
    if _research_service is None:
        _research_service = EmployerResearchService()
    return _research_service


def get_pitch_service(
    research_service: EmployerResearchService = Depends(get_research_service),
) -> PitchGenerationService:
    """Process-wide pitch service sharing the research service's cache (dependency)."""
    global _pitch_service
    if _pitch_service is None:
        _pitch_service = PitchGenerationService(research_service=research_service)
    return _pitch_service


@router.post("/pitch/generate")
async def generate_pitch(
    request: GeneratePitchRequest,
    service: PitchGenerationService = Depends(get_pitch_service),
) -> Dict[str, Any]:
    artifact = await service.generate_pitch(
        request.user_id,
        request.company_name,
        company_id=request.company_id,
        force_refresh=request.force_refresh,
    )
    body = artifact.to_dict()
    if artifact.employer_context is not None:
        body["employerContext"] = artifact.employer_context.to_dict()
    return body


@router.post("/employers/research", response_model=ResearchEmployersResponse)
async def research_employers(
    request: ResearchEmployersRequest,
    service: EmployerResearchService = Depends(get_research_service),
) -> ResearchEmployersResponse:
    results = await service.research_employers(request.company_names)
    return ResearchEmployersResponse(
        results={name: result.to_dict() for name, result in results.items()}
    )


@router.get("/employers/research")
def get_cached_research(
    company: str = Query("", description="Company name to look up"),
    service: EmployerResearchService = Depends(get_research_service),
) -> Dict[str, Any]:
    entry = service.get_cached_context(company)
    return CachedContextResponse(
        context=entry.context.to_dict(),
        cached_at=entry.updated_at,
    ).model_dump(by_alias=True, mode="json")


@router.get("/pitches")
def list_pitches(
    user_id: str = Query("", alias="userId"),
    company_name: Optional[str] = Query(None, alias="companyName"),
    limit: int = Query(20, ge=1, le=100),
    service: PitchGenerationService = Depends(get_pitch_service),
) -> Dict[str, List[Dict[str, Any]]]:
    pitches = service.list_history(user_id, company_name=company_name, limit=limit)
    return {"pitches": pitches}


@router.post("/companies/clear-ai", response_model=ClearGeneratedResponse)
def clear_generated_pitches(
    service: PitchGenerationService = Depends(get_pitch_service),
) -> ClearGeneratedResponse:
    modified = service.clear_generated_pitches()
    return ClearGeneratedResponse(
        message=f"Cleared AI-generated pitch data from {modified} companies",
        modified=modified,
    )
