"""Core data models for the candidate registry, ballots and results."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self


class ElectionStatus(Enum):
    ACTIVE = "active"
    ENDED = "ended"


class ElectionPhase(Enum):
    """Where the community is in the election lifecycle.

    NONE means no election has ever been started. An ENDED election stays
    queryable until the next one replaces it.
    """
    NONE = "none"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class PointAward:
    """Points a single ballot gives to one candidate."""
    candidate: str
    points: int

    def to_dict(self) -> dict[str, Any]:
        return {"candidate": self.candidate, "points": self.points}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(candidate=str(data["candidate"]), points=int(data["points"]))


@dataclass
class Vote:
    """One member's ranked ballot.

    Attributes:
        voter: Member identifier of the voter
        preferences: Distinct candidate identifiers, most preferred first
        points: One award per preference, in the same order
    """
    voter: str
    preferences: list[str]
    points: list[PointAward]

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter": self.voter,
            "preferences": list(self.preferences),
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            voter=str(data["voter"]),
            preferences=[str(c) for c in data["preferences"]],
            points=[PointAward.from_dict(p) for p in data["points"]],
        )


@dataclass
class Election:
    """The single current election.

    Attributes:
        candidates: Registry snapshot taken when the election started; never
            changes afterwards
        votes: Ballots in the order they were cast
        status: ACTIVE while ballots are accepted, ENDED afterwards
    """
    candidates: tuple[str, ...]
    votes: list[Vote] = field(default_factory=list)
    status: ElectionStatus = ElectionStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is ElectionStatus.ACTIVE

    @property
    def num_candidates(self) -> int:
        return len(self.candidates)

    def has_voted(self, voter: str) -> bool:
        return any(v.voter == voter for v in self.votes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidates": list(self.candidates),
            "votes": [v.to_dict() for v in self.votes],
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build an election from its JSON form.

        Raises:
            ValueError: If a stored ballot could not have been cast against
                this candidate snapshot
        """
        election = cls(
            candidates=tuple(str(c) for c in data["candidates"]),
            votes=[Vote.from_dict(v) for v in data.get("votes", [])],
            status=ElectionStatus.ACTIVE if data.get("isActive") else ElectionStatus.ENDED,
        )
        election.check_votes()
        return election

    def check_votes(self) -> None:
        """Check every stored ballot against the candidate snapshot."""
        if len(set(self.candidates)) != len(self.candidates):
            raise ValueError("Candidate snapshot contains duplicates")
        voters = set()
        for vote in self.votes:
            if vote.voter in voters:
                raise ValueError(f"Voter {vote.voter} has more than one ballot")
            voters.add(vote.voter)
            if not 1 <= len(vote.preferences) <= len(self.candidates):
                raise ValueError(f"Ballot from {vote.voter} ranks {len(vote.preferences)} candidates")
            if len(set(vote.preferences)) != len(vote.preferences):
                raise ValueError(f"Ballot from {vote.voter} ranks a candidate twice")
            unknown = [c for c in vote.preferences if c not in self.candidates]
            if unknown:
                raise ValueError(f"Ballot from {vote.voter} ranks unknown candidates {unknown}")
            if [p.candidate for p in vote.points] != vote.preferences:
                raise ValueError(f"Points of {vote.voter}'s ballot do not match its preferences")


@dataclass(frozen=True)
class Standing:
    """A candidate's position in the published results.

    Ranks are positional: candidates with equal scores still occupy
    consecutive ranks.
    """
    rank: int
    candidate: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"rank": self.rank, "candidate": self.candidate, "score": self.score}

    @classmethod
    def build_ranking(cls, ordered: list[tuple[str, int]]) -> list[Self]:
        """Build Standings from (candidate, score) pairs already in final order."""
        return [
            cls(rank=position, candidate=candidate, score=score)
            for position, (candidate, score) in enumerate(ordered, start=1)
        ]


@dataclass
class ElectionResults:
    """Outcome of an ended election."""
    standings: list[Standing]
    total_votes: int
    num_candidates: int

    def get_score(self, candidate: str) -> int | None:
        for s in self.standings:
            if s.candidate == candidate:
                return s.score
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_votes": self.total_votes,
            "num_candidates": self.num_candidates,
            "standings": [s.to_dict() for s in self.standings],
        }


@dataclass
class ElectionDocument:
    """The whole persisted state: the registry plus the current election.

    Example:
        >>> document = ElectionDocument.from_dict({
        ...     "registeredCandidates": ["111", "222"],
        ...     "currentElection": None,
        ... })
        >>> document.phase
        <ElectionPhase.NONE: 'none'>
    """
    registered_candidates: list[str] = field(default_factory=list)
    current_election: Election | None = None

    @property
    def phase(self) -> ElectionPhase:
        if self.current_election is None:
            return ElectionPhase.NONE
        if self.current_election.is_active:
            return ElectionPhase.ACTIVE
        return ElectionPhase.ENDED

    @property
    def active_election(self) -> Election | None:
        if self.phase is ElectionPhase.ACTIVE:
            return self.current_election
        return None

    def copy(self) -> Self:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "registeredCandidates": list(self.registered_candidates),
            "currentElection": (
                self.current_election.to_dict() if self.current_election else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a document from its JSON form.

        Raises:
            KeyError, TypeError, ValueError: If the data is not shaped like
                a persisted document
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        election = data.get("currentElection")
        return cls(
            registered_candidates=[str(c) for c in data.get("registeredCandidates", [])],
            current_election=Election.from_dict(election) if election else None,
        )
