"""
Tests for repository ranking

Tests ordering, tie stability, truncation and input immutability.
"""

import copy
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import RelevancePolicy
from core.exceptions import InvalidInputError
from intelligence.ranking import rank_repositories, score_repositories
from tests.fixtures.sample_data import NOW, demo_records, make_record


def _ten_records():
    return [make_record(i, star_count=i) for i in range(10)]


class TestRankRepositories:
    """Tests for rank_repositories."""

    def test_default_cap_is_eight(self):
        """Test ten records rank down to eight, best first."""
        ranked = rank_repositories(_ten_records(), NOW)

        assert len(ranked) == 8
        scores = [r.relevance_score for r in ranked]
        assert scores == sorted(scores, reverse=True)
        assert [r.identifier for r in ranked] == [9, 8, 7, 6, 5, 4, 3, 2]

    def test_demo_portfolio_order(self):
        ranked = rank_repositories(demo_records(), NOW)
        assert [r.identifier for r in ranked] == [1, 2, 3, 4, 5, 6]

    def test_ties_keep_input_order(self):
        """Test equal scores keep their original relative order."""
        a = make_record("A", star_count=3)
        b = make_record("B", star_count=3)

        assert [r.identifier for r in rank_repositories([a, b], NOW)] == ["A", "B"]
        assert [r.identifier for r in rank_repositories([b, a], NOW)] == ["B", "A"]

    def test_ties_stable_among_many(self):
        records = [make_record(i) for i in range(6)] + [make_record("top", star_count=1)]

        ranked = rank_repositories(records, NOW)

        assert [r.identifier for r in ranked] == ["top", 0, 1, 2, 3, 4, 5]

    @pytest.mark.parametrize("count,k", [(0, 8), (3, 8), (8, 8), (12, 8), (12, 3), (5, 0)])
    def test_size_is_min_of_count_and_k(self, count, k):
        records = [make_record(i, fork_count=i) for i in range(count)]
        assert len(rank_repositories(records, NOW, k=k)) == min(count, k)

    def test_empty_input(self):
        assert rank_repositories([], NOW) == []

    def test_accepts_generators(self):
        ranked = rank_repositories((r for r in demo_records()), NOW, k=2)
        assert [r.identifier for r in ranked] == [1, 2]

    @pytest.mark.parametrize("bad_k", [-1, 2.5, "8", True])
    def test_invalid_k(self, bad_k):
        with pytest.raises(InvalidInputError):
            rank_repositories(demo_records(), NOW, k=bad_k)

    def test_policy_result_limit(self):
        policy = RelevancePolicy(result_limit=3, text_match_limit=2)
        assert len(rank_repositories(_ten_records(), NOW, policy=policy)) == 3

    def test_does_not_mutate_input(self):
        records = demo_records()
        snapshot = copy.deepcopy(records)

        rank_repositories(records, NOW)

        assert records == snapshot

    def test_idempotent(self):
        records = demo_records()
        first = rank_repositories(records, NOW)
        second = rank_repositories(records, NOW)

        assert [(r.identifier, r.relevance_score) for r in first] == \
               [(r.identifier, r.relevance_score) for r in second]

    def test_results_carry_breakdown(self):
        ranked = rank_repositories(demo_records(), NOW, k=1)
        assert ranked[0].breakdown.total == ranked[0].relevance_score


class TestScoreRepositories:
    """Tests for score_repositories."""

    def test_keeps_input_order(self):
        records = list(reversed(demo_records()))
        scored = score_repositories(records, NOW)

        assert [s.identifier for s in scored] == [6, 5, 4, 3, 2, 1]

    def test_scores_everything(self):
        assert len(score_repositories(_ten_records(), NOW)) == 10
