"""Base exception for onboardx."""

from typing import Dict, Optional


class OnboardxError(Exception):
    """Root of the onboardx error hierarchy.

    Two families hang off it: ``AnalysisError`` for provider failures
    (git invocations, project configuration), which the scoring passes
    absorb into empty results, and ``ConfigurationError`` for bad settings
    or paths, which the CLI reports with exit code 1.

    ``details`` carries structured context (command, root, reason) and is
    appended to ``str()`` so a single log line shows it.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
