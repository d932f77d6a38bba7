"""
Oracle capability interfaces.

The generative services behind employer research and pitch writing are
treated as opaque oracles. Anything satisfying these contracts (a different
model, a rule engine, a test fixture) can be plugged into the services.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pitchprep.common.types import EmployerContext, RawPitchMaterials, UserProfileSnapshot


class EmployerResearchOracle(ABC):
    """Returns structured employer facts for a company name."""

    @abstractmethod
    async def fetch(self, company_name: str) -> EmployerContext:
        """
        Research one employer.

        Args:
            company_name: Display name as supplied by the user

        Returns:
            EmployerContext for the company

        Raises:
            GenerationFailure: service error, empty output, or output that
                cannot be parsed into an EmployerContext
        """
        pass


class PitchOracle(ABC):
    """Writes pitch materials and raw sub-scores for a profile/company pair."""

    @abstractmethod
    async def generate(
        self,
        profile: UserProfileSnapshot,
        company_name: str,
        context: Optional[EmployerContext] = None,
    ) -> RawPitchMaterials:
        """
        Generate pitch materials.

        Args:
            profile: Read-only user profile snapshot
            company_name: Company display name
            context: Freshest available employer context, if any

        Returns:
            RawPitchMaterials with unvalidated sub-scores

        Raises:
            GenerationFailure: service error, or malformed/empty output
        """
        pass
