"""FastAPI application serving the Discord interactions endpoint."""
from contextlib import asynccontextmanager
import logging
from typing import Optional, Sequence

from fastapi import Depends, FastAPI

from hookcord.commands import ApplicationCommand
from hookcord.config import Settings, load_settings
from hookcord.dependencies import get_settings
from hookcord.discord_router import router as discord_router
from hookcord.pipeline import InteractionBot
from hookcord.rest import DiscordClient


logger = logging.getLogger(__name__)


async def register_commands(
    settings: Settings, commands: Sequence[ApplicationCommand]
) -> None:
    """
    Register Discord slash commands on startup.

    - If DISCORD_GUILD_ID is set: register as guild commands (instant updates)
    - Else: register as global commands (slower propagation)
    """
    async with DiscordClient(
        bot_token=settings.bot_token,
        application_id=settings.application_id,
        base_url=settings.api_base_url,
    ) as client:
        if settings.guild_id:
            registered = await client.overwrite_guild_commands(settings.guild_id, commands)
        else:
            registered = await client.overwrite_global_commands(commands)

    scope = "guild" if settings.guild_id else "global"
    logger.info("Registered %d commands (%s)", len(registered), scope)


def create_app(
    bot: Optional[InteractionBot] = None,
    *,
    settings: Optional[Settings] = None,
    commands: Sequence[ApplicationCommand] = (),
) -> FastAPI:
    """
    Build the application.

    With no arguments, settings come from the environment and the bot has
    no handlers, so every interaction gets a fallback response. Serve with
    `uvicorn --factory hookcord.main:create_app`.
    """
    if settings is None:
        settings = Settings(public_key=bot.public_key) if bot is not None else load_settings()
    if bot is None:
        bot = InteractionBot(settings.public_key)
    commands = list(commands)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: register commands on startup."""
        if not commands:
            logger.debug("No commands to register")
        elif settings.can_register_commands:
            await register_commands(settings, commands)
        else:
            logger.warning(
                "Skipping command registration: DISCORD_BOT_TOKEN and DISCORD_APP_ID are required"
            )
        yield

    app = FastAPI(
        title="Hookcord",
        description="Discord interactions webhook endpoint",
        lifespan=lifespan,
    )
    app.state.bot = bot
    app.state.settings = settings

    # Include Discord interactions router
    app.include_router(discord_router, prefix="/discord")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "hookcord"}

    @app.get("/health")
    async def health(current: Settings = Depends(get_settings)):
        """Health check endpoint, reporting which optional settings are set."""
        return {
            "status": "healthy",
            "bot_token_set": bool(current.bot_token),
            "app_id_set": bool(current.application_id),
        }

    return app
