"""Public API for onboardx.

Example:
    >>> from onboardx import analyze
    >>> result = analyze("/path/to/repo")
    >>> [f.file for f in result.top_files]
    >>>
    >>> # With customization
    >>> result = analyze("/path/to/repo", top_n=10, churn_since="6.months")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_config
from .pipeline import AnalysisResult, run_analysis


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Analyze a repository and return the joined ranking.

    Args:
        path: Repository root (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., top_n=10)

    Returns:
        AnalysisResult with the top files and the raw churn, ownership
        and depth records

    Raises:
        OnboardxError: If configuration is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    return run_analysis(path, config)
