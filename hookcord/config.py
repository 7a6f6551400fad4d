"""Settings read from the environment (and a .env file when present)."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from hookcord.errors import ConfigError


DISCORD_API_BASE_URL = "https://discord.com/api/v10"


@dataclass(frozen=True)
class Settings:
    public_key: str
    application_id: Optional[str] = None
    bot_token: Optional[str] = None
    guild_id: Optional[str] = None  # Optional, for faster dev updates
    api_base_url: str = DISCORD_API_BASE_URL
    register_commands: bool = True

    @property
    def can_register_commands(self) -> bool:
        return bool(self.register_commands and self.bot_token and self.application_id)


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    - DISCORD_PUBLIC_KEY (required): hex Ed25519 key used to verify requests
    - DISCORD_APP_ID, DISCORD_BOT_TOKEN: needed to register commands
    - DISCORD_GUILD_ID: register as guild commands (instant updates) instead of global
    - DISCORD_API_BASE_URL, DISCORD_REGISTER_COMMANDS
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    public_key = environ.get("DISCORD_PUBLIC_KEY")
    if not public_key:
        raise ConfigError("Set DISCORD_PUBLIC_KEY env var")

    return Settings(
        public_key=public_key,
        application_id=environ.get("DISCORD_APP_ID") or None,
        bot_token=environ.get("DISCORD_BOT_TOKEN") or None,
        guild_id=environ.get("DISCORD_GUILD_ID") or None,
        api_base_url=environ.get("DISCORD_API_BASE_URL") or DISCORD_API_BASE_URL,
        register_commands=_flag(environ.get("DISCORD_REGISTER_COMMANDS"), True),
    )
