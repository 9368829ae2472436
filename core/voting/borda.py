"""Borda-style positional scoring."""

from core.models import Election, ElectionResults, PointAward, Standing
from core.voting.base import ScoringSystem


class BordaScoring(ScoringSystem):
    """Borda-style scoring over partial rankings.

    Each ranked preference awards points by position:
    - 1st choice = n points
    - 2nd choice = n-1 points
    - ...

    Where n is the number of candidates in the election. Candidates a voter
    leaves unranked get nothing from that ballot, so a ballot of length L
    never awards fewer than n-L+1 points to anyone it ranks.

    Tiebreaker: candidates with equal totals keep the order in which they
    appear in the election's candidate snapshot (first registered first).
    """

    @property
    def name(self) -> str:
        return "Borda Count"

    @property
    def description(self) -> str:
        return "1st choice = n pts, 2nd choice = n-1 pts, ... for n candidates"

    def award(self, preferences: list[str], num_candidates: int) -> list[PointAward]:
        if len(preferences) > num_candidates:
            raise ValueError(
                f"{len(preferences)} preferences ranked but only "
                f"{num_candidates} candidates are standing"
            )
        return [
            PointAward(candidate=candidate, points=num_candidates - position)
            for position, candidate in enumerate(preferences)
        ]

    @staticmethod
    def _compute_scores(election: Election) -> dict[str, int]:
        """Sum recorded points per candidate.

        Every candidate in the snapshot starts at zero, so candidates nobody
        ranked still appear in the results. The dict preserves snapshot order.
        """
        scores: dict[str, int] = {c: 0 for c in election.candidates}
        for vote in election.votes:
            for award in vote.points:
                scores[award.candidate] += award.points
        return scores

    def calculate(self, election: Election) -> ElectionResults:
        scores = self._compute_scores(election)
        snapshot_order = {c: i for i, c in enumerate(election.candidates)}

        # Highest score first; equal scores fall back to snapshot order.
        ordered = sorted(
            scores.items(),
            key=lambda item: (-item[1], snapshot_order[item[0]]),
        )

        return ElectionResults(
            standings=Standing.build_ranking(ordered),
            total_votes=len(election.votes),
            num_candidates=election.num_candidates,
        )
