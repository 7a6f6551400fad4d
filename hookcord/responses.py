"""Interaction responses and their wire encoding."""
from enum import IntEnum
from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from hookcord.commands import OptionChoice
from hookcord.components import ActionRow
from hookcord.models import AllowedMentions, DiscordModel, Embed, MessageFlags, PartialAttachment


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


class MessageCallbackData(DiscordModel):
    tts: Optional[bool] = None
    content: Optional[str] = None
    embeds: Optional[List[Embed]] = None  # Max 10
    allowed_mentions: Optional[AllowedMentions] = None
    flags: Optional[int] = None  # Only SUPPRESS_EMBEDS and EPHEMERAL
    components: Optional[List[ActionRow]] = None
    attachments: Optional[List[PartialAttachment]] = None


class AutocompleteCallbackData(DiscordModel):
    choices: List[OptionChoice]  # Max 25


class ModalCallbackData(DiscordModel):
    custom_id: str
    title: str  # Max 45 characters
    components: List[ActionRow]  # 1-5 rows


class Pong(DiscordModel):
    """ACK a ping."""
    type: Literal[1] = 1


class ChannelMessageWithSource(DiscordModel):
    """Respond with a message."""
    type: Literal[4] = 4
    data: MessageCallbackData


class DeferredChannelMessageWithSource(DiscordModel):
    """ACK now and edit the response later; the user sees a loading state."""
    type: Literal[5] = 5


class DeferredUpdateMessage(DiscordModel):
    """Components only: ACK now and edit the original message later."""
    type: Literal[6] = 6


class UpdateMessage(DiscordModel):
    """Components only: edit the message the component is attached to."""
    type: Literal[7] = 7
    data: MessageCallbackData


class ApplicationCommandAutocompleteResult(DiscordModel):
    type: Literal[8] = 8
    data: AutocompleteCallbackData


class Modal(DiscordModel):
    type: Literal[9] = 9
    data: ModalCallbackData


InteractionResponse = Union[
    Pong,
    ChannelMessageWithSource,
    DeferredChannelMessageWithSource,
    DeferredUpdateMessage,
    UpdateMessage,
    ApplicationCommandAutocompleteResult,
    Modal,
]

RESPONSE_TYPES = (
    Pong,
    ChannelMessageWithSource,
    DeferredChannelMessageWithSource,
    DeferredUpdateMessage,
    UpdateMessage,
    ApplicationCommandAutocompleteResult,
    Modal,
)


def encode_response(response: InteractionResponse) -> Dict[str, Any]:
    """
    Serialize a response to its `{type, data}` wire form.

    Variants without a payload produce `{"type": N}` with no `data` key.
    Unset optional fields inside `data` are omitted.
    """
    if not isinstance(response, RESPONSE_TYPES):
        raise TypeError(f"Not an interaction response: {type(response).__name__}")
    return response.model_dump(mode="json", exclude_none=True)


def _message_data(
    content: Optional[str],
    embeds: Optional[Sequence[Embed]],
    components: Optional[Sequence[ActionRow]],
    ephemeral: bool,
) -> MessageCallbackData:
    return MessageCallbackData(
        content=content,
        embeds=list(embeds) if embeds is not None else None,
        components=list(components) if components is not None else None,
        flags=int(MessageFlags.EPHEMERAL) if ephemeral else None,
    )


def respond_with_message(
    content: str,
    *,
    embeds: Optional[Sequence[Embed]] = None,
    components: Optional[Sequence[ActionRow]] = None,
    ephemeral: bool = False,
) -> ChannelMessageWithSource:
    return ChannelMessageWithSource(data=_message_data(content, embeds, components, ephemeral))


def respond_with_embed(embed: Embed, *, ephemeral: bool = False) -> ChannelMessageWithSource:
    return ChannelMessageWithSource(data=_message_data(None, [embed], None, ephemeral))


def update_message(
    content: Optional[str] = None,
    *,
    embeds: Optional[Sequence[Embed]] = None,
    components: Optional[Sequence[ActionRow]] = None,
) -> UpdateMessage:
    return UpdateMessage(data=_message_data(content, embeds, components, False))


def respond_with_autocomplete_choices(
    choices: Sequence[OptionChoice],
) -> ApplicationCommandAutocompleteResult:
    return ApplicationCommandAutocompleteResult(
        data=AutocompleteCallbackData(choices=list(choices))
    )


def respond_with_modal(
    custom_id: str, title: str, components: Sequence[ActionRow]
) -> Modal:
    return Modal(data=ModalCallbackData(custom_id=custom_id, title=title, components=list(components)))
