"""
onboardx - onboarding guides from git history and import structure.

Ranks a repository's files by churn, names their primary contributor, and
measures how deep each sits in the local import graph.
"""

__version__ = "0.2.0"

from .api import analyze
from .pipeline import AnalysisResult, RankedFile

__all__ = [
    "analyze",
    "AnalysisResult",
    "RankedFile",
]
