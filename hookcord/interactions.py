"""Inbound interaction payloads and their tagged decoders."""
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import Field, field_validator

from hookcord.components import ActionRow, ComponentField, collect_text_inputs
from hookcord.models import (
    ApplicationCommandType,
    Attachment,
    Channel,
    DiscordModel,
    Embed,
    Member,
    Role,
    User,
)
from hookcord.snowflake import Snowflake
from hookcord.tagged import TaggedDecoder


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class Message(DiscordModel):
    """Partial message, as attached to component interactions."""
    id: Snowflake
    channel_id: Snowflake
    author: Optional[User] = None
    content: str = ""
    timestamp: Optional[datetime] = None
    edited_timestamp: Optional[datetime] = None
    embeds: List[Embed] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    components: List[ComponentField] = Field(default_factory=list)
    flags: Optional[int] = None


# ---------------------------------------------------------------------------
# Options sent with an invoked command
# ---------------------------------------------------------------------------

DATA_OPTIONS: TaggedDecoder = TaggedDecoder("application command interaction data option")
DataOptionField = DATA_OPTIONS.annotation()


class DataOption(DiscordModel):
    name: str
    focused: Optional[bool] = None  # Set on the option being autocompleted


@DATA_OPTIONS.register(1)
class SubcommandDataOption(DataOption):
    type: Literal[1] = 1
    options: List[DataOptionField] = Field(default_factory=list)

    @field_validator("options")
    @classmethod
    def children_are_values(cls, options: List[Any]) -> List[Any]:
        for option in options:
            if isinstance(option, (SubcommandDataOption, SubcommandGroupDataOption)):
                raise ValueError("subcommand options cannot contain subcommands or groups")
        return options


@DATA_OPTIONS.register(2)
class SubcommandGroupDataOption(DataOption):
    type: Literal[2] = 2
    options: List[DataOptionField] = Field(default_factory=list)

    @field_validator("options")
    @classmethod
    def children_are_subcommands(cls, options: List[Any]) -> List[Any]:
        for option in options:
            if not isinstance(option, SubcommandDataOption):
                raise ValueError("subcommand group options must all be subcommands")
        return options


@DATA_OPTIONS.register(3)
class StringDataOption(DataOption):
    type: Literal[3] = 3
    value: str


@DATA_OPTIONS.register(4)
class IntegerDataOption(DataOption):
    type: Literal[4] = 4
    value: Union[int, str]  # Partial text while focused during autocomplete


@DATA_OPTIONS.register(5)
class BooleanDataOption(DataOption):
    type: Literal[5] = 5
    value: bool


@DATA_OPTIONS.register(6)
class UserDataOption(DataOption):
    type: Literal[6] = 6
    value: Snowflake


@DATA_OPTIONS.register(7)
class ChannelDataOption(DataOption):
    type: Literal[7] = 7
    value: Snowflake


@DATA_OPTIONS.register(8)
class RoleDataOption(DataOption):
    type: Literal[8] = 8
    value: Snowflake


@DATA_OPTIONS.register(9)
class MentionableDataOption(DataOption):
    type: Literal[9] = 9
    value: Snowflake


@DATA_OPTIONS.register(10)
class NumberDataOption(DataOption):
    type: Literal[10] = 10
    value: Union[float, str]  # Partial text while focused during autocomplete


@DATA_OPTIONS.register(11)
class AttachmentDataOption(DataOption):
    type: Literal[11] = 11
    value: Snowflake


# ---------------------------------------------------------------------------
# Interaction data
# ---------------------------------------------------------------------------

class ResolvedData(DiscordModel):
    """Full objects for the IDs referenced by options or targets."""
    users: Optional[Dict[Snowflake, User]] = None
    members: Optional[Dict[Snowflake, Member]] = None
    roles: Optional[Dict[Snowflake, Role]] = None
    channels: Optional[Dict[Snowflake, Channel]] = None
    messages: Optional[Dict[Snowflake, Message]] = None
    attachments: Optional[Dict[Snowflake, Attachment]] = None


class ApplicationCommandData(DiscordModel):
    id: Snowflake
    name: str
    type: ApplicationCommandType
    resolved: Optional[ResolvedData] = None
    options: Optional[List[DataOptionField]] = None
    guild_id: Optional[Snowflake] = None
    target_id: Optional[Snowflake] = None  # User and message commands

    @field_validator("options")
    @classmethod
    def single_invoked_subcommand(cls, options: Optional[List[Any]]) -> Optional[List[Any]]:
        # Either one subcommand (or group) or only value options
        nested = [
            option
            for option in options or []
            if isinstance(option, (SubcommandDataOption, SubcommandGroupDataOption))
        ]
        if nested and len(options) > 1:
            raise ValueError("a subcommand or group must be the only top-level option")
        return options

    def _innermost(self) -> Tuple[Tuple[str, ...], List[Any]]:
        path = [self.name]
        options = list(self.options or [])
        while options and isinstance(
            options[0], (SubcommandGroupDataOption, SubcommandDataOption)
        ):
            path.append(options[0].name)
            options = list(options[0].options)
        return tuple(path), options

    def command_path(self) -> Tuple[str, ...]:
        """Command name followed by the invoked group and subcommand names."""
        return self._innermost()[0]

    def option_values(self) -> Dict[str, Any]:
        """Values of the options passed to the invoked (sub)command."""
        return {option.name: option.value for option in self._innermost()[1]}

    def focused_option(self) -> Optional[DataOption]:
        for option in self._innermost()[1]:
            if option.focused:
                return option
        return None


class MessageComponentData(DiscordModel):
    custom_id: str
    component_type: int
    values: Optional[List[str]] = None  # Select menus only
    resolved: Optional[ResolvedData] = None


class ModalSubmitData(DiscordModel):
    custom_id: str
    components: List[ComponentField]

    def submitted_values(self) -> Dict[str, str]:
        return collect_text_inputs(
            [row for row in self.components if isinstance(row, ActionRow)]
        )


# ---------------------------------------------------------------------------
# Interactions
# ---------------------------------------------------------------------------

class InteractionBase(DiscordModel):
    """Header fields shared by every interaction type."""
    id: Snowflake
    application_id: Snowflake
    guild_id: Optional[Snowflake] = None
    channel: Optional[Channel] = None
    channel_id: Optional[Snowflake] = None
    member: Optional[Member] = None  # Invoked in a guild
    user: Optional[User] = None  # Invoked in a DM
    token: str
    version: int
    app_permissions: Optional[str] = None
    locale: Optional[str] = None
    guild_locale: Optional[str] = None

    @property
    def invoking_user(self) -> Optional[User]:
        if self.member is not None and self.member.user is not None:
            return self.member.user
        return self.user

    @property
    def user_id(self) -> Optional[Snowflake]:
        user = self.invoking_user
        return user.id if user is not None else None


class PingInteraction(InteractionBase):
    type: Literal[1] = 1


class ApplicationCommandInteraction(InteractionBase):
    type: Literal[2] = 2
    data: ApplicationCommandData


class MessageComponentInteraction(InteractionBase):
    type: Literal[3] = 3
    data: MessageComponentData
    message: Optional[Message] = None


class AutocompleteInteraction(InteractionBase):
    type: Literal[4] = 4
    data: ApplicationCommandData


class ModalSubmitInteraction(InteractionBase):
    type: Literal[5] = 5
    data: ModalSubmitData
    message: Optional[Message] = None


Interaction = Union[
    PingInteraction,
    ApplicationCommandInteraction,
    MessageComponentInteraction,
    AutocompleteInteraction,
    ModalSubmitInteraction,
]

INTERACTIONS: TaggedDecoder = TaggedDecoder(
    "interaction",
    {
        InteractionType.PING: PingInteraction,
        InteractionType.APPLICATION_COMMAND: ApplicationCommandInteraction,
        InteractionType.MESSAGE_COMPONENT: MessageComponentInteraction,
        InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE: AutocompleteInteraction,
        InteractionType.MODAL_SUBMIT: ModalSubmitInteraction,
    },
)


def decode_interaction(raw: Union[bytes, str]) -> Interaction:
    """Decode a raw webhook body into its interaction variant."""
    return INTERACTIONS.decode_json(raw)
