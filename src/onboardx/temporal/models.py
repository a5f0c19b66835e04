"""Data models for git-based signals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChurnRecord:
    file: str
    churn: int  # added + deleted lines inside the window


@dataclass(frozen=True)
class Contributor:
    author: str
    commits: int


@dataclass(frozen=True)
class OwnershipRecord:
    file: str
    primary_contributor: str
    contribution_count: int
    all_contributors: tuple[Contributor, ...]  # commits descending, first-seen on ties
