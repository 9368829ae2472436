"""Exceptions raised by the election core.

Every domain error carries the message shown to the member who issued the
command. Domain errors never mutate state: an operation that raises one
commits nothing.
"""


class ElectionError(Exception):
    """Base class for errors reported back to the caller verbatim."""

    message = "Something went wrong."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(ElectionError):
    """The caller's input conflicts with the current state."""
    pass


class StateError(ElectionError):
    """A lifecycle precondition is not met."""
    pass


class AuthorizationError(ElectionError):
    """The caller lacks the capability the operation requires."""
    pass


class AlreadyRegistered(ValidationError):
    message = "You are already registered!"


class DuplicateVote(ValidationError):
    message = "You already voted!"


class InvalidCandidate(ValidationError):
    """Raised when a ballot names references outside the candidate snapshot.

    The whole ballot is rejected, not just the offending entries.
    """

    def __init__(self, invalid: list[str]):
        self.invalid = list(invalid)
        super().__init__(
            f"Invalid candidates: {', '.join(self.invalid)}\n"
            f"Please select from the list."
        )


class EmptyVote(ValidationError):
    message = "No valid candidates provided!"


class NoActiveElection(StateError):
    message = "No active election!"


class ElectionAlreadyActive(StateError):
    message = "Election already in progress!"


class NoResultsAvailable(StateError):
    message = "No results available!"


class InsufficientPermission(AuthorizationError):
    message = "Insufficient permissions!"


class StoreError(Exception):
    """Raised when the election document cannot be persisted."""
    pass


class ConfigError(Exception):
    """Raised when a required setting is missing."""
    pass
