"""Left join of churn, ownership and depth into one ranking."""

from typing import Sequence

from ..graph.models import ImportDepthRecord
from ..temporal.models import ChurnRecord, OwnershipRecord
from .models import UNKNOWN_CONTRIBUTOR, RankedFile


def join_signals(
    top_churn: Sequence[ChurnRecord],
    ownership: Sequence[OwnershipRecord],
    depth: Sequence[ImportDepthRecord],
) -> list[RankedFile]:
    """One RankedFile per churn record, in churn order.

    Files missing from ``ownership`` get ``("Unknown", 0)``; files missing
    from ``depth`` get depth 0.
    """
    owners = {o.file: o for o in ownership}
    depths = {d.file: d.depth for d in depth}

    ranked: list[RankedFile] = []
    for record in top_churn:
        owner = owners.get(record.file)
        ranked.append(
            RankedFile(
                file=record.file,
                churn=record.churn,
                primary_contributor=owner.primary_contributor if owner else UNKNOWN_CONTRIBUTOR,
                contribution_count=owner.contribution_count if owner else 0,
                import_depth=depths.get(record.file, 0),
            )
        )
    return ranked
