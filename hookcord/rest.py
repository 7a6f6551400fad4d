"""Async client for the parts of Discord's REST API used by interaction bots."""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

from hookcord.commands import ApplicationCommand, decode_command
from hookcord.config import DISCORD_API_BASE_URL
from hookcord.errors import DiscordAPIError
from hookcord.responses import MessageCallbackData


logger = logging.getLogger(__name__)


class DiscordClient:
    """
    Command CRUD and interaction follow-ups.

    Requests are sent once; errors are raised as DiscordAPIError and never
    retried.
    """

    def __init__(
        self,
        *,
        bot_token: str,
        application_id: str,
        base_url: str = DISCORD_API_BASE_URL,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.application_id = str(application_id)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={"Authorization": f"Bot {bot_token}"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "DiscordClient":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        response = await self._client.request(method, path, json=json)
        if response.status_code >= 400:
            logger.warning(
                "Discord API %s %s failed: %s %s",
                method,
                path,
                response.status_code,
                response.text,
            )
            raise DiscordAPIError(
                f"Discord API {method} {path} failed: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _commands_path(self, guild_id: Optional[str] = None) -> str:
        if guild_id:
            return f"/applications/{self.application_id}/guilds/{guild_id}/commands"
        return f"/applications/{self.application_id}/commands"

    async def _get_commands(self, guild_id: Optional[str]) -> List[ApplicationCommand]:
        payload = await self._request("GET", self._commands_path(guild_id))
        return [decode_command(item) for item in payload or []]

    async def _create_command(
        self, command: ApplicationCommand, guild_id: Optional[str]
    ) -> ApplicationCommand:
        payload = await self._request(
            "POST", self._commands_path(guild_id), json=command.to_payload()
        )
        return decode_command(payload)

    async def _overwrite_commands(
        self, commands: Sequence[ApplicationCommand], guild_id: Optional[str]
    ) -> List[ApplicationCommand]:
        payload = await self._request(
            "PUT",
            self._commands_path(guild_id),
            json=[command.to_payload() for command in commands],
        )
        return [decode_command(item) for item in payload or []]

    async def get_global_commands(self) -> List[ApplicationCommand]:
        return await self._get_commands(None)

    async def get_guild_commands(self, guild_id: str) -> List[ApplicationCommand]:
        return await self._get_commands(guild_id)

    async def create_global_command(self, command: ApplicationCommand) -> ApplicationCommand:
        return await self._create_command(command, None)

    async def create_guild_command(
        self, guild_id: str, command: ApplicationCommand
    ) -> ApplicationCommand:
        return await self._create_command(command, guild_id)

    async def overwrite_global_commands(
        self, commands: Sequence[ApplicationCommand]
    ) -> List[ApplicationCommand]:
        """Replace the global command list. Existing commands not listed are deleted."""
        return await self._overwrite_commands(commands, None)

    async def overwrite_guild_commands(
        self, guild_id: str, commands: Sequence[ApplicationCommand]
    ) -> List[ApplicationCommand]:
        """Replace a guild's command list. Existing commands not listed are deleted."""
        return await self._overwrite_commands(commands, guild_id)

    async def edit_original_response(
        self,
        interaction_token: str,
        data: Union[MessageCallbackData, Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        """Fill in the message of a deferred response."""
        if isinstance(data, MessageCallbackData):
            data = data.model_dump(mode="json", exclude_none=True)
        return await self._request(
            "PATCH",
            f"/webhooks/{self.application_id}/{interaction_token}/messages/@original",
            json=data,
        )
