"""
Pitch Store

Persists generated pitches in two places:
- the append-only pitch history (system of record; failures propagate)
- the denormalized "latest pitch" fields on the company record (overwritten)
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pitchprep.common.error_handling import log_on_exception
from pitchprep.common.repositories import (
    CompanyRepositoryInterface,
    PitchHistoryRepositoryInterface,
    WriteResult,
)
from pitchprep.common.types import PitchArtifact, ScoreBreakdown

logger = logging.getLogger(__name__)


class PitchStore:
    """Writes pitch artifacts to history and to company records."""

    def __init__(
        self,
        history_repository: PitchHistoryRepositoryInterface,
        company_repository: CompanyRepositoryInterface,
    ):
        self._history = history_repository
        self._companies = company_repository

    def append_history(
        self,
        user_id: str,
        company_name: str,
        artifact: PitchArtifact,
        company_id: Optional[str] = None,
    ) -> WriteResult:
        """
        Insert one pitch record. Never updates an existing record.

        Raises:
            Whatever the repository raises; history is not best effort.
        """
        document = {
            "userId": user_id,
            "companyName": company_name,
            "companyId": company_id,
            "pitchResult": artifact.to_dict(),
            "careerFairCard": artifact.to_career_fair_card(),
            "matchScore": artifact.match_score,
            "scoreBreakdown": artifact.score_breakdown.to_dict(),
            "createdAt": datetime.utcnow(),
        }

        with log_on_exception(logger, "pitch history append", level=logging.ERROR):
            result = self._history.insert_pitch(document)

        logger.info(f"Saved pitch history for user {user_id} / {company_name}")
        return result

    def upsert_on_company(
        self,
        company_id: Optional[str],
        artifact: PitchArtifact,
        breakdown: ScoreBreakdown,
        about_info: Optional[str] = None,
    ) -> Optional[WriteResult]:
        """
        Overwrite the company's generated fields with this artifact.

        No-op when company_id is empty. about_info is only written when the
        company has no aboutInfo yet.
        """
        if not company_id:
            return None

        fields: Dict[str, Any] = {
            "careerFairCard": artifact.to_career_fair_card(),
            "matchScore": breakdown.match_score,
            "matchReasoning": breakdown.reasoning,
            "scoreBreakdown": breakdown.to_dict(),
            "generated": True,
            "updatedAt": datetime.utcnow(),
        }
        result = self._companies.set_generated_fields(company_id, fields)

        if result.matched_count == 0:
            logger.warning(f"Company {company_id} not found while storing pitch card")
            return result

        if about_info and about_info.strip():
            self._companies.fill_about_info(company_id, about_info.strip())

        logger.info(f"Updated career fair card on company {company_id} (score {breakdown.match_score})")
        return result

    def list_history(
        self,
        user_id: str,
        company_name: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """Pitch records for a user, newest first."""
        return self._history.find_for_user(user_id, company_name=company_name, limit=limit)

    def clear_generated(self) -> int:
        """Unset generated fields on all companies; returns the modified count."""
        result = self._companies.clear_generated_fields()
        logger.info(f"Cleared generated pitch fields on {result.modified_count} companies")
        return result.modified_count
