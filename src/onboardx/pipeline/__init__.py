"""Signal join and the end-to-end onboarding pipeline."""

from .analyzer import run_analysis
from .join import join_signals
from .models import UNKNOWN_CONTRIBUTOR, AnalysisResult, RankedFile

__all__ = [
    "AnalysisResult",
    "RankedFile",
    "UNKNOWN_CONTRIBUTOR",
    "join_signals",
    "run_analysis",
]
