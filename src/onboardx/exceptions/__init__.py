"""Exception hierarchy for onboardx."""

from .analysis import AnalysisError, GitCommandError, ProjectConfigError
from .base import OnboardxError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "OnboardxError",
    "AnalysisError",
    "GitCommandError",
    "ProjectConfigError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
]
