"""Application command definitions sent to and received from Discord's API."""
from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import field_validator

from hookcord.models import ApplicationCommandOptionType, ApplicationCommandType, DiscordModel
from hookcord.snowflake import Snowflake
from hookcord.tagged import TaggedDecoder


# Fields Discord assigns; never sent when creating or overwriting commands
SERVER_ASSIGNED_FIELDS = {"id", "application_id", "version"}


class OptionChoice(DiscordModel):
    """Predefined choice for STRING, INTEGER and NUMBER options, also used for autocomplete."""
    name: str
    name_localizations: Optional[Dict[str, str]] = None
    value: Union[str, int, float]


def _check_choices(choices: Optional[List[OptionChoice]], kinds: tuple, label: str) -> Optional[List[OptionChoice]]:
    for choice in choices or []:
        if isinstance(choice.value, bool) or not isinstance(choice.value, kinds):
            raise ValueError(f"{label} option choices must have {label.lower()} values")
    return choices


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

OPTIONS: TaggedDecoder = TaggedDecoder("application command option")
OptionField = OPTIONS.annotation()


class CommandOption(DiscordModel):
    name: str  # 1-32 characters
    name_localizations: Optional[Dict[str, str]] = None
    description: str  # 1-100 characters
    description_localizations: Optional[Dict[str, str]] = None


class ValueOption(CommandOption):
    required: Optional[bool] = None


@OPTIONS.register(ApplicationCommandOptionType.SUB_COMMAND)
class SubcommandOption(CommandOption):
    type: Literal[1] = 1
    options: Optional[List[OptionField]] = None

    @field_validator("options")
    @classmethod
    def children_are_values(cls, options: Optional[List[Any]]) -> Optional[List[Any]]:
        for option in options or []:
            if isinstance(option, (SubcommandOption, SubcommandGroupOption)):
                raise ValueError("subcommand options cannot contain subcommands or groups")
        return options


@OPTIONS.register(ApplicationCommandOptionType.SUB_COMMAND_GROUP)
class SubcommandGroupOption(CommandOption):
    type: Literal[2] = 2
    options: Optional[List[OptionField]] = None

    @field_validator("options")
    @classmethod
    def children_are_subcommands(cls, options: Optional[List[Any]]) -> Optional[List[Any]]:
        for option in options or []:
            if not isinstance(option, SubcommandOption):
                raise ValueError("subcommand group options must all be subcommands")
        return options


@OPTIONS.register(ApplicationCommandOptionType.STRING)
class StringOption(ValueOption):
    type: Literal[3] = 3
    choices: Optional[List[OptionChoice]] = None
    min_length: Optional[int] = None  # 0-6000
    max_length: Optional[int] = None  # 1-6000
    autocomplete: Optional[bool] = None

    @field_validator("choices")
    @classmethod
    def string_choices(cls, choices: Optional[List[OptionChoice]]) -> Optional[List[OptionChoice]]:
        return _check_choices(choices, (str,), "String")


@OPTIONS.register(ApplicationCommandOptionType.INTEGER)
class IntegerOption(ValueOption):
    type: Literal[4] = 4
    choices: Optional[List[OptionChoice]] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    autocomplete: Optional[bool] = None

    @field_validator("choices")
    @classmethod
    def integer_choices(cls, choices: Optional[List[OptionChoice]]) -> Optional[List[OptionChoice]]:
        return _check_choices(choices, (int,), "Integer")


@OPTIONS.register(ApplicationCommandOptionType.BOOLEAN)
class BooleanOption(ValueOption):
    type: Literal[5] = 5


@OPTIONS.register(ApplicationCommandOptionType.USER)
class UserOption(ValueOption):
    type: Literal[6] = 6


@OPTIONS.register(ApplicationCommandOptionType.CHANNEL)
class ChannelOption(ValueOption):
    type: Literal[7] = 7
    channel_types: Optional[List[int]] = None


@OPTIONS.register(ApplicationCommandOptionType.ROLE)
class RoleOption(ValueOption):
    type: Literal[8] = 8


@OPTIONS.register(ApplicationCommandOptionType.MENTIONABLE)
class MentionableOption(ValueOption):
    type: Literal[9] = 9


@OPTIONS.register(ApplicationCommandOptionType.NUMBER)
class NumberOption(ValueOption):
    type: Literal[10] = 10
    choices: Optional[List[OptionChoice]] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    autocomplete: Optional[bool] = None

    @field_validator("choices")
    @classmethod
    def number_choices(cls, choices: Optional[List[OptionChoice]]) -> Optional[List[OptionChoice]]:
        return _check_choices(choices, (int, float), "Number")


@OPTIONS.register(ApplicationCommandOptionType.ATTACHMENT)
class AttachmentOption(ValueOption):
    type: Literal[11] = 11


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

COMMANDS: TaggedDecoder = TaggedDecoder("application command")


class CommandDetails(DiscordModel):
    """Fields shared by every command type."""
    id: Optional[Snowflake] = None
    application_id: Optional[Snowflake] = None
    guild_id: Optional[Snowflake] = None  # Absent for global commands
    name: str
    name_localizations: Optional[Dict[str, str]] = None
    default_member_permissions: Optional[str] = None  # Permission bit set as a string
    dm_permission: Optional[bool] = None
    nsfw: Optional[bool] = None
    version: Optional[Snowflake] = None

    @field_validator("default_member_permissions", mode="before")
    @classmethod
    def permissions_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for creating or overwriting this command."""
        return self.model_dump(mode="json", exclude_none=True, exclude=SERVER_ASSIGNED_FIELDS)


@COMMANDS.register(ApplicationCommandType.CHAT_INPUT)
class ChatInputCommand(CommandDetails):
    type: Literal[1] = 1
    description: str
    description_localizations: Optional[Dict[str, str]] = None
    options: Optional[List[OptionField]] = None  # Max 25


@COMMANDS.register(ApplicationCommandType.USER)
class UserCommand(CommandDetails):
    type: Literal[2] = 2
    description: str = ""


@COMMANDS.register(ApplicationCommandType.MESSAGE)
class MessageCommand(CommandDetails):
    type: Literal[3] = 3
    description: str = ""


ApplicationCommand = Union[ChatInputCommand, UserCommand, MessageCommand]


def chat_input_command(
    name: str,
    description: str,
    options: Optional[Sequence[Any]] = None,
    **details: Any,
) -> ChatInputCommand:
    """Create a slash command definition."""
    return ChatInputCommand(
        name=name,
        description=description,
        options=list(options) if options is not None else None,
        **details,
    )


def user_command(name: str, **details: Any) -> UserCommand:
    return UserCommand(name=name, **details)


def message_command(name: str, **details: Any) -> MessageCommand:
    return MessageCommand(name=name, **details)


def decode_command(value: Any) -> ApplicationCommand:
    """Decode a command object returned by Discord's API."""
    return COMMANDS.decode(value)
