"""Temporal signals: churn and ownership from git history."""

from .churn import parse_numstat, score_churn
from .git_runner import GitRunner
from .models import ChurnRecord, Contributor, OwnershipRecord
from .ownership import attribute_ownership, build_ownership, top_file_ownership

__all__ = [
    "ChurnRecord",
    "Contributor",
    "OwnershipRecord",
    "GitRunner",
    "score_churn",
    "parse_numstat",
    "attribute_ownership",
    "build_ownership",
    "top_file_ownership",
]
