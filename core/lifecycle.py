"""Election lifecycle: NONE -> ACTIVE -> ENDED, restarted by the next start."""

import logging

from core.errors import ElectionAlreadyActive, InsufficientPermission, NoActiveElection, NoResultsAvailable
from core.models import Election, ElectionDocument, ElectionPhase, ElectionResults, ElectionStatus
from core.voting.borda import BordaScoring

logger = logging.getLogger(__name__)


def start_election(document: ElectionDocument, is_admin: bool) -> Election:
    """Open a new election over a snapshot of the registry.

    Replaces an ended election, if there is one.

    Raises:
        InsufficientPermission: If the requester is not an administrator
        ElectionAlreadyActive: If an election is already accepting ballots
    """
    if not is_admin:
        raise InsufficientPermission()
    if document.phase is ElectionPhase.ACTIVE:
        raise ElectionAlreadyActive()

    election = Election(candidates=tuple(document.registered_candidates))
    document.current_election = election
    logger.info("Started election with %d candidates", election.num_candidates)
    return election


def end_election(document: ElectionDocument, is_admin: bool) -> Election:
    """Stop accepting ballots for the active election.

    Raises:
        InsufficientPermission: If the requester is not an administrator
        NoActiveElection: If no election is accepting ballots
    """
    if not is_admin:
        raise InsufficientPermission()
    election = document.active_election
    if election is None:
        raise NoActiveElection()

    election.status = ElectionStatus.ENDED
    logger.info("Ended election after %d votes", len(election.votes))
    return election


def get_results(document: ElectionDocument) -> ElectionResults:
    """Tally the ended election.

    Raises:
        NoResultsAvailable: If no election exists or it is still active
    """
    match document.phase:
        case ElectionPhase.ENDED:
            return BordaScoring().calculate(document.current_election)
        case ElectionPhase.NONE | ElectionPhase.ACTIVE:
            raise NoResultsAvailable()
