"""
PitchPrep: personalized career fair pitches grounded in cached employer research.
"""

__version__ = "0.1.0"
