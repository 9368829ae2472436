"""Vercel serverless function receiving Discord interactions."""

import json
import logging
import sys
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any

# Add the project root to the path so we can import core modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from api._discord import DiscordClient, DiscordDirectory, has_admin_permission, verify_signature  # noqa: E402
from core.ballot import MAX_CHOICES  # noqa: E402
from core.commands import Command, CommandRequest, dispatch  # noqa: E402
from core.config import Settings, configure_logging  # noqa: E402
from core.election import ElectionService  # noqa: E402
from core.errors import ConfigError  # noqa: E402
from core.store import JsonFileStore  # noqa: E402

logger = logging.getLogger(__name__)


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    APPLICATION_COMMAND_AUTOCOMPLETE = 4


# Interaction callback types
PONG = 1
CHANNEL_MESSAGE_WITH_SOURCE = 4
AUTOCOMPLETE_RESULT = 8

EPHEMERAL = 1 << 6


class InteractionError(ValueError):
    """Raised when an interaction payload cannot be understood."""
    pass


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return settings


@lru_cache(maxsize=1)
def get_service() -> ElectionService:
    """Build the process-wide service on first use."""
    settings = get_settings()
    directory = None
    if settings.discord_token:
        directory = DiscordDirectory(DiscordClient.from_settings(settings))
    return ElectionService(JsonFileStore(settings.data_path), directory)


def handler(request):
    """Handle an incoming Discord interaction.

    Accepts POST requests signed by Discord with a JSON interaction body:
    - PING, answered with PONG
    - slash commands (register, vote, election start|end|results)
    - autocomplete requests for the vote choices

    Returns the interaction response as JSON.
    """
    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        body = request.body
        if isinstance(body, str):
            body = body.encode("utf-8")

        public_key = get_settings().require("public_key")
        signature = get_header(request, "X-Signature-Ed25519")
        timestamp = get_header(request, "X-Signature-Timestamp")
        if not signature or not timestamp or not verify_signature(
            public_key, signature, timestamp, body
        ):
            return create_response({"error": "Invalid request signature"}, status=401)

        payload = json.loads(body.decode("utf-8"))
        return create_response(handle_interaction(payload))

    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except InteractionError as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except ConfigError as e:
        logger.error("Interaction endpoint is misconfigured: %s", e)
        return create_response(
            {"error": "Internal error"},
            status=500,
        )
    except Exception:
        logger.exception("Unhandled error processing interaction")
        return create_response(
            {"error": "Internal error"},
            status=500,
        )


def handle_interaction(payload: dict[str, Any]) -> dict[str, Any]:
    """Turn an interaction payload into the interaction response body."""
    match payload.get("type"):
        case InteractionType.PING:
            return {"type": PONG}
        case InteractionType.APPLICATION_COMMAND:
            reply = dispatch(get_service(), parse_command(payload))
            data: dict[str, Any] = {"content": reply.content}
            if reply.ephemeral:
                data["flags"] = EPHEMERAL
            return {"type": CHANNEL_MESSAGE_WITH_SOURCE, "data": data}
        case InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
            partial = focused_value(payload).removeprefix("@")
            suggestions = get_service().suggest_candidates(partial)
            return {
                "type": AUTOCOMPLETE_RESULT,
                "data": {
                    "choices": [
                        {"name": f"@{name}", "value": candidate_id}
                        for candidate_id, name in suggestions
                    ],
                },
            }
        case other:
            raise InteractionError(f"Unsupported interaction type: {other}")


def parse_command(payload: dict[str, Any]) -> CommandRequest:
    """Build a CommandRequest from an APPLICATION_COMMAND interaction."""
    data = payload.get("data") or {}
    name = data.get("name")
    options = data.get("options") or []

    if name == "election":
        if not options:
            raise InteractionError("Missing election subcommand")
        name = f"election {options[0].get('name')}"
    try:
        command = Command(name)
    except ValueError:
        raise InteractionError(f"Unknown command: {name}") from None

    member = payload.get("member")
    if member:
        user = member.get("user") or {}
        is_admin = has_admin_permission(member.get("permissions"))
    else:
        # Direct messages carry no guild member and no guild permissions
        user = payload.get("user") or {}
        is_admin = False
    if "id" not in user:
        raise InteractionError("Interaction has no user")

    choices: list[str | None] = []
    if command is Command.VOTE:
        values = {o.get("name"): o.get("value") for o in options}
        choices = [values.get(f"choice_{i}") for i in range(1, MAX_CHOICES + 1)]

    return CommandRequest(
        command=command,
        user_id=str(user["id"]),
        is_admin=is_admin,
        choices=choices,
    )


def focused_value(payload: dict[str, Any]) -> str:
    """Return the text typed so far in the option being autocompleted."""
    for option in (payload.get("data") or {}).get("options") or []:
        if option.get("focused"):
            return str(option.get("value") or "")
    return ""


def get_header(request, name: str) -> str | None:
    headers = request.headers
    return headers.get(name) or headers.get(name.lower())


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
