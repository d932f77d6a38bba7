"""
Pipeline operation services.

Usage:
    from pitchprep.services import PitchGenerationService

    artifact = await PitchGenerationService().generate_pitch(user_id, "Acme Corp")
"""

from pitchprep.services.employer_research_service import EmployerResearchService
from pitchprep.services.operation_base import OperationService, OperationTimer
from pitchprep.services.pitch_service import PitchGenerationService

__all__ = [
    "EmployerResearchService",
    "OperationService",
    "OperationTimer",
    "PitchGenerationService",
]
