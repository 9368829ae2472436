"""ElectionService: the single owner of the election document."""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TypeVar

from core import ballot, lifecycle, registry
from core.directory import MemberDirectory, StaticDirectory
from core.models import Election, ElectionDocument, ElectionPhase, ElectionResults, Vote
from core.store import StateStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Discord caps autocomplete responses at 25 choices.
MAX_SUGGESTIONS = 25


class ElectionService:
    """Runs every election operation against one in-memory document.

    Mutations are applied to a copy of the document, persisted, and only
    then swapped in. The precondition checks, the mutation and the save
    all happen under one lock with nothing in between that could yield to
    another command, so two commands can never both pass a check before
    either commits. A failed operation leaves the document untouched.
    """

    def __init__(self, store: StateStore, directory: MemberDirectory | None = None):
        self.store = store
        self.directory = directory or StaticDirectory()
        self._lock = threading.Lock()
        self._document = store.load()

    @property
    def document(self) -> ElectionDocument:
        """A copy of the current document, safe to inspect."""
        return self._document.copy()

    def _commit(self, operation: Callable[[ElectionDocument], T]) -> T:
        with self._lock:
            working = self._document.copy()
            outcome = operation(working)
            self.store.save(working)
            self._document = working
            return outcome

    def register_candidate(self, candidate: str) -> None:
        self._commit(lambda doc: registry.register_candidate(doc, candidate))

    def start_election(self, is_admin: bool) -> Election:
        return self._commit(lambda doc: lifecycle.start_election(doc, is_admin))

    def end_election(self, is_admin: bool) -> Election:
        return self._commit(lambda doc: lifecycle.end_election(doc, is_admin))

    def cast_vote(self, voter: str, slots: Iterable[str | None]) -> Vote:
        slots = list(slots)
        return self._commit(lambda doc: ballot.cast_vote(doc, voter, slots))

    def get_results(self) -> ElectionResults:
        with self._lock:
            return lifecycle.get_results(self._document)

    def suggest_candidates(self, partial: str) -> list[tuple[str, str]]:
        """Suggest active-election candidates whose display name contains `partial`.

        Matching is case-insensitive. Returns (candidate id, display name)
        pairs in snapshot order, at most MAX_SUGGESTIONS of them, and an
        empty list when no election is accepting ballots.
        """
        with self._lock:
            if self._document.phase is not ElectionPhase.ACTIVE:
                return []
            candidates = self._document.current_election.candidates

        needle = partial.lower()
        suggestions = []
        for candidate in candidates:
            name = self.directory.resolve(candidate)
            if needle in name.lower():
                suggestions.append((candidate, name))
                if len(suggestions) == MAX_SUGGESTIONS:
                    break
        return suggestions
