"""Ballot validation and casting."""

import logging
from collections.abc import Iterable

from core.errors import DuplicateVote, EmptyVote, InvalidCandidate, NoActiveElection
from core.models import ElectionDocument, Vote
from core.voting.base import ScoringSystem
from core.voting.borda import BordaScoring

logger = logging.getLogger(__name__)

# Number of ranked slots a ballot offers; only the first is required.
MAX_CHOICES = 10


def collect_choices(slots: Iterable[str | None]) -> list[str]:
    """Drop empty slots, keeping the order of the filled ones."""
    return [slot for slot in slots if slot]


def cast_vote(
    document: ElectionDocument,
    voter: str,
    slots: Iterable[str | None],
    scoring: ScoringSystem | None = None,
) -> Vote:
    """Validate a ranked submission and append it to the active election.

    Checks run in this order and the first failure rejects the whole
    ballot: an election must be active, the voter must not have voted,
    every filled slot must name a candidate from the election's snapshot,
    and at least one candidate must remain after repeated picks are
    collapsed to their first occurrence.

    Args:
        document: Working copy of the election document
        voter: Member identifier of the voter
        slots: Up to MAX_CHOICES candidate references, empty slots allowed

    Returns:
        The recorded Vote, whose points are the receipt shown to the voter

    Raises:
        NoActiveElection, DuplicateVote, InvalidCandidate, EmptyVote
    """
    election = document.active_election
    if election is None:
        raise NoActiveElection()
    if election.has_voted(voter):
        raise DuplicateVote()

    choices = collect_choices(slots)
    if len(choices) > MAX_CHOICES:
        raise ValueError(f"A ballot has at most {MAX_CHOICES} choices, got {len(choices)}")

    invalid = [c for c in choices if c not in election.candidates]
    if invalid:
        raise InvalidCandidate(invalid)

    preferences = list(dict.fromkeys(choices))
    if not preferences:
        raise EmptyVote()

    scoring = scoring or BordaScoring()
    vote = Vote(
        voter=voter,
        preferences=preferences,
        points=scoring.award(preferences, election.num_candidates),
    )
    election.votes.append(vote)
    logger.info("Recorded vote from %s ranking %d candidates", voter, len(preferences))
    return vote
