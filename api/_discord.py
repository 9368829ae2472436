"""Discord REST glue: command schemas, registration, user lookup and signatures."""

import logging
import time
from typing import Any, Self

import httpx
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from core.ballot import MAX_CHOICES
from core.config import Settings
from core.directory import MemberDirectory

logger = logging.getLogger(__name__)

API_BASE = "https://discord.com/api/v10"

# Permission bit granting every other permission in a guild.
ADMINISTRATOR = 1 << 3

# Application command option types
SUB_COMMAND = 1
STRING = 3


class DiscordAPIError(Exception):
    """Error talking to the Discord REST API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def has_admin_permission(permissions: str | int | None) -> bool:
    """Check a member's permission bitfield (sent as a decimal string)."""
    if permissions is None:
        return False
    try:
        return bool(int(permissions) & ADMINISTRATOR)
    except (TypeError, ValueError):
        return False


def verify_signature(public_key: str, signature: str, timestamp: str, body: bytes) -> bool:
    """Check that an interaction request was signed by Discord.

    Discord signs the timestamp header concatenated with the raw body.
    """
    try:
        key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key))
        key.verify(bytes.fromhex(signature), timestamp.encode("utf-8") + body)
    except (InvalidSignature, ValueError):
        return False
    return True


def _choice_description(i: int) -> str:
    if i == 1:
        return "Your first choice"
    suffix = {2: "nd", 3: "rd"}.get(i, "th")
    return f"Your {i}{suffix} choice"


def build_vote_command(num_registered: int) -> dict[str, Any]:
    """Build the /vote schema with one choice per registered candidate.

    There is always at least one (required) choice and never more than a
    ballot can hold.
    """
    num_choices = max(1, min(num_registered, MAX_CHOICES))
    return {
        "name": "vote",
        "description": "Rank candidates by preference (1st choice gets most points)",
        "options": [
            {
                "type": STRING,
                "name": f"choice_{i}",
                "description": _choice_description(i),
                "autocomplete": True,
                "required": i == 1,
            }
            for i in range(1, num_choices + 1)
        ],
    }


def build_commands(num_registered: int) -> list[dict[str, Any]]:
    """Build every slash command the bot offers."""
    return [
        {"name": "register", "description": "Register as a candidate"},
        build_vote_command(num_registered),
        {
            "name": "election",
            "description": "Manage elections",
            "options": [
                {"type": SUB_COMMAND, "name": "start", "description": "Start new election"},
                {"type": SUB_COMMAND, "name": "end", "description": "End current election"},
                {"type": SUB_COMMAND, "name": "results", "description": "Show election results"},
            ],
        },
    ]


class DiscordClient:
    """Minimal bot client over the Discord REST API."""

    def __init__(self, token: str, application_id: str | None = None,
                 http: httpx.Client | None = None):
        self.application_id = application_id
        self.http = http or httpx.Client(base_url=API_BASE, timeout=10.0)
        self.http.headers["Authorization"] = f"Bot {token}"

    @classmethod
    def from_settings(cls, settings: Settings, http: httpx.Client | None = None) -> Self:
        return cls(
            token=settings.require("discord_token"),
            application_id=settings.application_id,
            http=http,
        )

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DiscordAPIError(
                f"HTTP error {e.response.status_code} from {method} {path}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise DiscordAPIError(f"Error calling {method} {path}: {e}") from e
        return response.json()

    def get_user(self, user_id: str) -> dict[str, Any]:
        return self._request("GET", f"/users/{user_id}")

    def set_commands(self, commands: list[dict[str, Any]],
                     guild_id: str | None = None) -> list[dict[str, Any]]:
        """Overwrite the application's commands globally or in one guild."""
        if not self.application_id:
            raise DiscordAPIError("An application id is required to register commands")
        path = f"/applications/{self.application_id}/commands"
        if guild_id:
            path = f"/applications/{self.application_id}/guilds/{guild_id}/commands"
        return self._request("PUT", path, json=commands)


class DiscordDirectory(MemberDirectory):
    """Resolves member ids to usernames, remembering every lookup.

    Failed lookups are remembered for `retry_after` seconds, and a rate
    limit response pauses every lookup for that long, so autocomplete falls
    back to raw ids instead of waiting on Discord.
    """

    def __init__(self, client: DiscordClient, retry_after: float = 60.0,
                 clock=time.monotonic):
        self.client = client
        self.retry_after = retry_after
        self.clock = clock
        self._cache: dict[str, str | None] = {}
        self._failed: dict[str, float] = {}
        self._paused_until = 0.0

    def display_name(self, member_id: str) -> str | None:
        if member_id in self._cache:
            return self._cache[member_id]

        now = self.clock()
        if now < self._paused_until or now < self._failed.get(member_id, 0.0):
            return None

        try:
            name = self.client.get_user(member_id).get("username")
        except DiscordAPIError as e:
            logger.warning("Could not resolve user %s: %s", member_id, e)
            self._failed[member_id] = now + self.retry_after
            if e.status_code == 429:
                self._paused_until = now + self.retry_after
            return None

        self._failed.pop(member_id, None)
        self._cache[member_id] = name
        return name


def register_commands(client: DiscordClient, num_registered: int,
                      guild_id: str | None = None) -> list[dict[str, Any]]:
    """Publish the commands to the test guild (if any) and globally."""
    commands = build_commands(num_registered)
    if guild_id:
        client.set_commands(commands, guild_id=guild_id)
        logger.info("Commands registered in test guild %s", guild_id)
    client.set_commands(commands)
    logger.info("Global commands registered")
    return commands
