"""
Pitch core: context caching, score aggregation, assembly and persistence.
"""

from .context_cache import ContextCache
from .pitch_assembler import PitchAssembler
from .pitch_store import PitchStore
from .score_aggregator import ScoreAggregator

__all__ = [
    "ContextCache",
    "PitchAssembler",
    "PitchStore",
    "ScoreAggregator",
]
