"""Abstract base class for scoring systems."""

from abc import ABC, abstractmethod

from core.models import Election, ElectionResults, PointAward


class ScoringSystem(ABC):
    """Abstract base class for scoring systems.

    A scoring system decides how many points each ranked preference is
    worth when a ballot is cast, and how the recorded points are combined
    into a final ranking when the election ends.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this scoring system."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this scoring system works."""
        return ""

    @abstractmethod
    def award(self, preferences: list[str], num_candidates: int) -> list[PointAward]:
        """Assign points to a validated, deduplicated preference list.

        Args:
            preferences: Distinct candidates, most preferred first
            num_candidates: Size of the election's candidate snapshot

        Returns:
            One PointAward per preference, in preference order
        """
        pass

    @abstractmethod
    def calculate(self, election: Election) -> ElectionResults:
        """Combine the election's recorded points into a ranking."""
        pass
