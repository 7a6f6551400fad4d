"""Message components: action rows, buttons, select menus and text inputs."""
from enum import IntEnum
from typing import Dict, List, Literal, Optional

from pydantic import Field

from hookcord.models import DiscordModel, PartialEmoji
from hookcord.tagged import TaggedDecoder


COMPONENTS: TaggedDecoder = TaggedDecoder("component")
ComponentField = COMPONENTS.annotation()


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    STRING_SELECT = 3
    TEXT_INPUT = 4
    USER_SELECT = 5
    ROLE_SELECT = 6
    MENTIONABLE_SELECT = 7
    CHANNEL_SELECT = 8


class ButtonStyle(IntEnum):
    PRIMARY = 1  # Blurple
    SECONDARY = 2  # Grey
    SUCCESS = 3  # Green
    DANGER = 4  # Red
    LINK = 5  # Grey, navigates to URL


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


@COMPONENTS.register(ComponentType.ACTION_ROW)
class ActionRow(DiscordModel):
    """Container for other components."""
    type: Literal[1] = 1
    components: List[ComponentField] = Field(default_factory=list)


@COMPONENTS.register(ComponentType.BUTTON)
class Button(DiscordModel):
    type: Literal[2] = 2
    style: int = 1  # ButtonStyle
    label: Optional[str] = None
    emoji: Optional[PartialEmoji] = None
    custom_id: Optional[str] = None  # Required unless style is LINK
    url: Optional[str] = None  # LINK buttons only
    disabled: Optional[bool] = None


class SelectOption(DiscordModel):
    label: str
    value: str
    description: Optional[str] = None
    emoji: Optional[PartialEmoji] = None
    default: Optional[bool] = None


class SelectMenu(DiscordModel):
    """Fields shared by every select menu type."""
    type: int
    custom_id: str
    options: Optional[List[SelectOption]] = None  # String selects only
    channel_types: Optional[List[int]] = None  # Channel selects only
    placeholder: Optional[str] = None
    min_values: Optional[int] = None
    max_values: Optional[int] = None
    disabled: Optional[bool] = None


@COMPONENTS.register(ComponentType.STRING_SELECT)
class StringSelect(SelectMenu):
    type: Literal[3] = 3


@COMPONENTS.register(ComponentType.USER_SELECT)
class UserSelect(SelectMenu):
    type: Literal[5] = 5


@COMPONENTS.register(ComponentType.ROLE_SELECT)
class RoleSelect(SelectMenu):
    type: Literal[6] = 6


@COMPONENTS.register(ComponentType.MENTIONABLE_SELECT)
class MentionableSelect(SelectMenu):
    type: Literal[7] = 7


@COMPONENTS.register(ComponentType.CHANNEL_SELECT)
class ChannelSelect(SelectMenu):
    type: Literal[8] = 8


@COMPONENTS.register(ComponentType.TEXT_INPUT)
class TextInput(DiscordModel):
    """
    Text input inside a modal.

    In a modal submission Discord only sends `custom_id` and `value`, so
    `style` and `label` are optional here.
    """
    type: Literal[4] = 4
    custom_id: str
    style: Optional[int] = None
    label: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    required: Optional[bool] = None
    value: Optional[str] = None
    placeholder: Optional[str] = None


def collect_text_inputs(rows: List[ActionRow]) -> Dict[str, str]:
    """Map each submitted text input's custom_id to its value."""
    values: Dict[str, str] = {}
    for row in rows:
        children = row.components if isinstance(row, ActionRow) else [row]
        for component in children:
            if isinstance(component, TextInput):
                values[component.custom_id] = component.value or ""
    return values
