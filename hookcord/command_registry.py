"""Registry for slash command handlers, routed by command name."""
import inspect
from typing import Callable, Dict, List, Optional, Union

from hookcord.commands import ApplicationCommand, CommandDetails
from hookcord.interactions import ApplicationCommandInteraction
from hookcord.models import Embed
from hookcord.pipeline import FALLBACK_COLOR, Handler
from hookcord.responses import InteractionResponse, respond_with_embed


class CommandRegistry:
    """
    Routes application commands to handlers by name.

    An instance is itself a command handler, so it can be passed straight
    to `InteractionBot(command_handler=...)`.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}
        self._definitions: Dict[str, ApplicationCommand] = {}

    def register(self, command: Union[str, CommandDetails]) -> Callable[[Handler], Handler]:
        """Decorator to register a command handler, optionally with its definition."""
        if isinstance(command, CommandDetails):
            name = command.name
        else:
            name = command

        def decorator(func: Handler) -> Handler:
            if name in self._handlers:
                raise ValueError(f"Command '/{name}' is already registered")
            self._handlers[name] = func
            if isinstance(command, CommandDetails):
                self._definitions[name] = command
            return func
        return decorator

    def get(self, name: str) -> Optional[Handler]:
        return self._handlers.get(name)

    def definitions(self) -> List[ApplicationCommand]:
        """Command definitions attached at registration, for syncing with Discord."""
        return list(self._definitions.values())

    async def __call__(self, interaction: ApplicationCommandInteraction) -> InteractionResponse:
        command_name = interaction.data.name
        handler = self._handlers.get(command_name)
        if handler is None:
            return respond_with_embed(
                Embed(
                    title="Unknown Command",
                    description=f"Command `/{command_name}` is not recognized.",
                    color=FALLBACK_COLOR,
                )
            )
        result = handler(interaction)
        if inspect.isawaitable(result):
            result = await result
        return result
