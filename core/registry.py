"""Candidate registry: the members eligible to appear on the next ballot."""

import logging

from core.errors import AlreadyRegistered
from core.models import ElectionDocument

logger = logging.getLogger(__name__)


def register_candidate(document: ElectionDocument, candidate: str) -> None:
    """Append a candidate to the registry.

    Entries are kept in first-registration order and are never removed.
    Registering does not touch an election that is already running; its
    candidate snapshot was taken when it started.

    Raises:
        AlreadyRegistered: If the candidate is already in the registry
    """
    if candidate in document.registered_candidates:
        raise AlreadyRegistered()
    document.registered_candidates.append(candidate)
    logger.info("Registered candidate %s (%d total)",
                candidate, len(document.registered_candidates))
