"""Analysis-related exceptions: git invocation and project parsing."""

from pathlib import Path
from typing import List, Optional

from .base import OnboardxError


class AnalysisError(OnboardxError):
    """Base class for analysis-related errors."""
    pass


class GitCommandError(AnalysisError):
    """Raised when a git invocation fails or produces unusable output."""

    def __init__(self, args: List[str], reason: str, repo_path: Optional[str] = None):
        details = {"command": "git " + " ".join(args), "reason": reason}
        if repo_path is not None:
            details["repo"] = repo_path
        super().__init__("git command failed", details=details)
        self.args_list = args
        self.reason = reason
        self.repo_path = repo_path


class ProjectConfigError(AnalysisError):
    """Raised when a project configuration is missing or cannot be parsed."""

    def __init__(self, root: Path, reason: str):
        super().__init__(
            f"Cannot load project at {root}",
            details={"root": str(root), "reason": reason},
        )
        self.root = root
        self.reason = reason
