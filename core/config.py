"""Settings read from the environment, and logging setup."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from core.errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """Deployment settings.

    Attributes:
        data_path: Where the election document is persisted
        discord_token: Bot token for REST calls
        application_id: Discord application id, for command registration
        public_key: Hex-encoded Ed25519 key that signs incoming interactions
        guild_id: Optional test guild that also receives the commands
        log_level: Name of the root logging level
    """
    data_path: Path = Path("data.json")
    discord_token: str | None = None
    application_id: str | None = None
    public_key: str | None = None
    guild_id: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        env = os.environ if environ is None else environ
        return cls(
            data_path=Path(env.get("DATA_PATH") or "data.json"),
            discord_token=env.get("DISCORD_TOKEN") or None,
            application_id=env.get("DISCORD_APPLICATION_ID") or None,
            public_key=env.get("DISCORD_PUBLIC_KEY") or None,
            guild_id=env.get("GUILD_ID") or None,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    def require(self, name: str) -> str:
        """Return a setting that must be present for the current operation."""
        value = getattr(self, name)
        if not value:
            raise ConfigError(f"Missing required setting: {name}")
        return value


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
