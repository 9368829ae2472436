"""Display-name lookup for member identifiers.

The core works on identifiers only; a directory turns them into names for
autocomplete suggestions.
"""

from abc import ABC, abstractmethod


class MemberDirectory(ABC):
    """Abstract base class for member directories."""

    @abstractmethod
    def display_name(self, member_id: str) -> str | None:
        """Return the member's display name, or None if it is unknown."""
        pass

    def resolve(self, member_id: str) -> str:
        """Return the display name, falling back to the raw identifier."""
        return self.display_name(member_id) or member_id


class StaticDirectory(MemberDirectory):
    """Directory backed by a fixed mapping of identifier -> name."""

    def __init__(self, names: dict[str, str] | None = None):
        self.names = dict(names or {})

    def display_name(self, member_id: str) -> str | None:
        return self.names.get(member_id)
