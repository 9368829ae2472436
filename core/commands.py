"""Command dispatch: the boundary between the chat platform and the core.

Every command the bot offers is a member of the closed `Command`
enumeration, and `dispatch` handles each one explicitly. Domain errors
become replies with their own message; anything else is logged and
answered with a generic failure so one bad command never takes the
process down.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, assert_never

from core.election import ElectionService
from core.errors import AuthorizationError, ElectionError, InsufficientPermission
from core.models import Election, ElectionResults, Vote

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "❌ An error occurred!"


class Command(Enum):
    REGISTER = "register"
    VOTE = "vote"
    ELECTION_START = "election start"
    ELECTION_END = "election end"
    ELECTION_RESULTS = "election results"

    @property
    def requires_admin(self) -> bool:
        return self.value.startswith("election ")


@dataclass
class CommandRequest:
    """A command issued by a member.

    Attributes:
        command: Which command was invoked
        user_id: Member identifier of the caller
        is_admin: Whether the platform granted the caller administrator rights
        choices: Ballot slots for VOTE, in slot order; empty slots are None
    """
    command: Command
    user_id: str
    is_admin: bool = False
    choices: list[str | None] = field(default_factory=list)


@dataclass
class Reply:
    content: str
    ephemeral: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "ephemeral": self.ephemeral}


def mention(member_id: str) -> str:
    return f"<@{member_id}>"


def format_registered() -> str:
    return "You are now registered as a candidate!"


def format_started(election: Election) -> str:
    n = election.num_candidates
    return (
        f"🗳️ New election started with {n} candidates!\n"
        f"Candidates: {' '.join(mention(c) for c in election.candidates)}\n\n"
        f"**How to vote:**\n"
        f"Use `/vote` and select candidates in order of preference\n"
        f"1st choice gets {n} points\n"
        f"2nd choice gets {n - 1} points\n"
        f"And so on..."
    )


def format_ended() -> str:
    return "🏁 Election ended! Use `/election results` to see the outcome"


def format_receipt(vote: Vote) -> str:
    lines = [
        f"{i}. {award.points} pts: {mention(award.candidate)}"
        for i, award in enumerate(vote.points, start=1)
    ]
    return "✅ Vote recorded!\nYour ranking:\n" + "\n".join(lines)


def format_results(results: ElectionResults) -> str:
    lines = [
        f"{s.rank}. {mention(s.candidate)}: {s.score} points"
        for s in results.standings
    ]
    return (
        f"🏆 **Election Results**\n"
        f"Total votes cast: {results.total_votes}\n"
        f"Number of candidates: {results.num_candidates}\n\n"
        + "\n".join(lines)
    )


def _is_private(command: Command, error: ElectionError) -> bool:
    # Ballot traffic and permission failures are only shown to the caller.
    return command is Command.VOTE or isinstance(error, AuthorizationError)


def _handle(service: ElectionService, request: CommandRequest) -> Reply:
    if request.command.requires_admin and not request.is_admin:
        raise InsufficientPermission()

    match request.command:
        case Command.REGISTER:
            service.register_candidate(request.user_id)
            return Reply(format_registered())
        case Command.VOTE:
            vote = service.cast_vote(request.user_id, request.choices)
            return Reply(format_receipt(vote), ephemeral=True)
        case Command.ELECTION_START:
            election = service.start_election(request.is_admin)
            return Reply(format_started(election))
        case Command.ELECTION_END:
            service.end_election(request.is_admin)
            return Reply(format_ended())
        case Command.ELECTION_RESULTS:
            return Reply(format_results(service.get_results()))
        case _:
            assert_never(request.command)


def dispatch(service: ElectionService, request: CommandRequest) -> Reply:
    """Run a command and build the reply to send back to the caller."""
    try:
        return _handle(service, request)
    except ElectionError as e:
        logger.info("Rejected %s from %s: %s",
                    request.command.value, request.user_id, e.kind)
        return Reply(str(e), ephemeral=_is_private(request.command, e))
    except Exception:
        logger.exception("Failed to handle %s from %s",
                         request.command.value, request.user_id)
        return Reply(GENERIC_FAILURE, ephemeral=True)
