"""Tests for Borda-style scoring."""

import pytest
from tests.conftest import make_election, ranking_names, ranking_scores

from core.voting.borda import BordaScoring


class TestBordaAward:
    def setup_method(self):
        self.system = BordaScoring()

    def test_name(self):
        assert self.system.name == "Borda Count"

    def test_first_choice_gets_candidate_count(self):
        awards = self.system.award(["B", "A"], 3)
        assert [(a.candidate, a.points) for a in awards] == [("B", 3), ("A", 2)]

    def test_points_decrease_by_one_per_rank(self):
        preferences = ["A", "B", "C", "D", "E", "F"]
        awards = self.system.award(preferences, 6)
        assert [a.points for a in awards] == [6, 5, 4, 3, 2, 1]

    def test_partial_ranking_keeps_candidate_count_scale(self):
        """Ranking one of five candidates still gives five points."""
        awards = self.system.award(["C"], 5)
        assert [(a.candidate, a.points) for a in awards] == [("C", 5)]

    def test_points_are_always_positive(self):
        for n in range(1, 8):
            awards = self.system.award([str(i) for i in range(n)], n)
            assert min(a.points for a in awards) == 1

    def test_more_preferences_than_candidates_rejected(self):
        with pytest.raises(ValueError):
            self.system.award(["A", "B", "C"], 2)


class TestBordaResults:
    def setup_method(self):
        self.system = BordaScoring()

    def test_worked_example(self, worked_example):
        """A=5, B=3, C=0 → A, B, C."""
        results = self.system.calculate(worked_example)
        assert ranking_scores(results) == [(1, "A", 5), (2, "B", 3), (3, "C", 0)]

    def test_totals(self, worked_example):
        results = self.system.calculate(worked_example)
        assert results.total_votes == 2
        assert results.num_candidates == 3

    def test_clear_winner(self, clear_winner):
        results = self.system.calculate(clear_winner)
        assert ranking_scores(results) == [
            (1, "A", 11),
            (2, "B", 9),
            (3, "C", 7),
            (4, "D", 3),
        ]

    def test_tie_keeps_snapshot_order(self, late_tie):
        results = self.system.calculate(late_tie)
        assert ranking_names(results) == ["Z", "M", "A"]

    def test_tied_candidates_take_consecutive_ranks(self, late_tie):
        results = self.system.calculate(late_tie)
        assert ranking_scores(results)[:2] == [(1, "Z", 5), (2, "M", 5)]

    def test_no_votes_lists_everyone_at_zero(self, no_votes):
        results = self.system.calculate(no_votes)
        assert ranking_scores(results) == [(1, "A", 0), (2, "B", 0), (3, "C", 0)]
        assert results.total_votes == 0

    def test_unranked_candidate_appears_with_zero(self, worked_example):
        results = self.system.calculate(worked_example)
        assert results.get_score("C") == 0

    def test_all_tied_keeps_snapshot_order(self):
        """Each candidate is ranked first exactly once: all tie at n+(n-1)+(n-2)."""
        election = make_election(["C", "A", "B"], {
            "V1": ["C", "A", "B"],
            "V2": ["A", "B", "C"],
            "V3": ["B", "C", "A"],
        })
        results = self.system.calculate(election)
        assert ranking_scores(results) == [(1, "C", 6), (2, "A", 6), (3, "B", 6)]

    def test_empty_snapshot(self):
        election = make_election([], {})
        results = self.system.calculate(election)
        assert results.standings == []
