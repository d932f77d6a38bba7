"""
Generative oracles for employer research and pitch writing.

Services depend on the EmployerResearchOracle / PitchOracle interfaces; the
OpenAI implementations are the production defaults.
"""

from pitchprep.oracles.base import EmployerResearchOracle, PitchOracle
from pitchprep.oracles.employer_researcher import OpenAIEmployerResearcher
from pitchprep.oracles.pitch_generator import OpenAIPitchGenerator

__all__ = [
    "EmployerResearchOracle",
    "PitchOracle",
    "OpenAIEmployerResearcher",
    "OpenAIPitchGenerator",
]
