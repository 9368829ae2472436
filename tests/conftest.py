"""Shared test helpers."""

import pytest

from core.directory import StaticDirectory
from core.election import ElectionService
from core.models import Election, ElectionDocument, ElectionResults, ElectionStatus, Vote
from core.store import MemoryStore
from core.voting.borda import BordaScoring


def make_election(candidates: list[str], ballots: dict[str, list[str]],
                  active: bool = False) -> Election:
    """Build an Election from a compact ballots table.

    Args:
        candidates: Candidate snapshot, in registration order
        ballots: {voter_id: [preferences, most preferred first]}
        active: Whether the election is still accepting ballots

    Returns:
        Election with Borda points already assigned to every ballot.
    """
    scoring = BordaScoring()
    election = Election(candidates=tuple(candidates))
    for voter, preferences in ballots.items():
        election.votes.append(Vote(
            voter=voter,
            preferences=list(preferences),
            points=scoring.award(list(preferences), len(candidates)),
        ))
    election.status = ElectionStatus.ACTIVE if active else ElectionStatus.ENDED
    return election


def ranking_names(results: ElectionResults) -> list[str]:
    return [s.candidate for s in results.standings]


def ranking_scores(results: ElectionResults) -> list[tuple[int, str, int]]:
    return [(s.rank, s.candidate, s.score) for s in results.standings]


@pytest.fixture
def directory():
    return StaticDirectory({
        "A": "alice",
        "B": "Bob",
        "C": "carol",
        "D": "alicia",
    })


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def service(store, directory):
    return ElectionService(store, directory)


@pytest.fixture
def active_service(store, directory):
    """Service with candidates A, B, C registered and an election running."""
    store.save(ElectionDocument(
        registered_candidates=["A", "B", "C"],
        current_election=Election(candidates=("A", "B", "C")),
    ))
    store.saves = 0
    return ElectionService(store, directory)
