"""Data models for the joined onboarding view."""

from dataclasses import dataclass, field

from ..graph.models import ImportDepthRecord
from ..temporal.models import ChurnRecord, OwnershipRecord

UNKNOWN_CONTRIBUTOR = "Unknown"


@dataclass(frozen=True)
class RankedFile:
    file: str
    churn: int
    primary_contributor: str = UNKNOWN_CONTRIBUTOR
    contribution_count: int = 0
    import_depth: int = 0  # 0 = no depth record


@dataclass
class AnalysisResult:
    """Everything one run produced: the joined ranking plus the raw passes."""

    repo_root: str
    top_files: list[RankedFile] = field(default_factory=list)
    churn: list[ChurnRecord] = field(default_factory=list)
    ownership: list[OwnershipRecord] = field(default_factory=list)
    depth: list[ImportDepthRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.top_files or self.churn or self.depth)
