"""Tests for the churn/ownership/depth left join."""

from onboardx.graph.models import ImportDepthRecord
from onboardx.pipeline.join import join_signals
from onboardx.pipeline.models import RankedFile
from onboardx.temporal.models import ChurnRecord, Contributor, OwnershipRecord


def owner(file, name, count):
    return OwnershipRecord(
        file=file,
        primary_contributor=name,
        contribution_count=count,
        all_contributors=(Contributor(name, count),),
    )


class TestJoinSignals:
    def test_full_match(self):
        result = join_signals(
            [ChurnRecord("a.ts", 120)],
            [owner("a.ts", "alice", 4)],
            [ImportDepthRecord("a.ts", 3)],
        )
        assert result == [RankedFile("a.ts", 120, "alice", 4, 3)]

    def test_missing_partners_use_sentinels(self):
        result = join_signals([ChurnRecord("ghost.ts", 9)], [], [])
        assert result[0].primary_contributor == "Unknown"
        assert result[0].contribution_count == 0
        assert result[0].import_depth == 0

    def test_preserves_churn_order(self):
        churn = [ChurnRecord("z.ts", 50), ChurnRecord("a.ts", 40), ChurnRecord("m.ts", 30)]
        depth = [ImportDepthRecord("a.ts", 5), ImportDepthRecord("m.ts", 2)]
        ownership = [owner("m.ts", "mo", 1), owner("z.ts", "zed", 2)]
        result = join_signals(churn, ownership, depth)
        assert [r.file for r in result] == ["z.ts", "a.ts", "m.ts"]
        assert [r.import_depth for r in result] == [0, 5, 2]
        assert [r.primary_contributor for r in result] == ["zed", "Unknown", "mo"]

    def test_extra_records_outside_top_churn_ignored(self):
        result = join_signals(
            [ChurnRecord("a.ts", 1)],
            [owner("b.ts", "bob", 1)],
            [ImportDepthRecord("b.ts", 4)],
        )
        assert len(result) == 1
        assert result[0] == RankedFile("a.ts", 1)

    def test_empty(self):
        assert join_signals([], [], []) == []
