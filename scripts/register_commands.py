"""Publish the bot's slash commands to Discord.

The /vote command offers one choice per registered candidate, so run this
again after candidates register and before starting an election.

Usage:
    python scripts/register_commands.py
    python scripts/register_commands.py --data data.json --guild 123456789
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from api._discord import DiscordAPIError, DiscordClient, register_commands  # noqa: E402
from core.config import Settings, configure_logging  # noqa: E402
from core.errors import ConfigError  # noqa: E402
from core.store import JsonFileStore  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Register the election slash commands")
    parser.add_argument("--data", type=Path, default=settings.data_path,
                        help=f"Election data file (default: {settings.data_path})")
    parser.add_argument("--guild", default=settings.guild_id,
                        help="Test guild that also receives the commands")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    document = JsonFileStore(args.data).load()
    num_registered = len(document.registered_candidates)

    try:
        client = DiscordClient.from_settings(settings)
        commands = register_commands(client, num_registered, guild_id=args.guild)
    except (ConfigError, DiscordAPIError) as e:
        print(f"Error registering commands: {e}", file=sys.stderr)
        return 1

    print(f"Registered {len(commands)} commands for {num_registered} candidates")
    return 0


if __name__ == "__main__":
    sys.exit(main())
