"""Pydantic models for the Discord objects carried by interactions."""
from datetime import datetime
from enum import IntEnum, IntFlag
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hookcord.snowflake import Snowflake


class DiscordModel(BaseModel):
    """Base class for all Discord payload models."""
    model_config = ConfigDict(frozen=True, extra="ignore")


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1  # Slash command
    USER = 2  # Right click on a user
    MESSAGE = 3  # Right click on a message


class ApplicationCommandOptionType(IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


class ChannelType(IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_ANNOUNCEMENT = 5
    ANNOUNCEMENT_THREAD = 10
    PUBLIC_THREAD = 11
    PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15
    GUILD_MEDIA = 16


class MessageFlags(IntFlag):
    """Message flags; only SUPPRESS_EMBEDS and EPHEMERAL may be set on responses."""
    CROSSPOSTED = 1 << 0
    IS_CROSSPOST = 1 << 1
    SUPPRESS_EMBEDS = 1 << 2
    SOURCE_MESSAGE_DELETED = 1 << 3
    URGENT = 1 << 4
    HAS_THREAD = 1 << 5
    EPHEMERAL = 1 << 6
    LOADING = 1 << 7
    SUPPRESS_NOTIFICATIONS = 1 << 12


class User(DiscordModel):
    """Discord user."""
    id: Snowflake
    username: str
    discriminator: Optional[str] = None
    global_name: Optional[str] = None
    avatar: Optional[str] = None
    bot: Optional[bool] = None
    system: Optional[bool] = None
    public_flags: Optional[int] = None


class Member(DiscordModel):
    """Guild member; `user` is absent in resolved data."""
    user: Optional[User] = None
    nick: Optional[str] = None
    avatar: Optional[str] = None
    roles: List[Snowflake] = Field(default_factory=list)
    joined_at: Optional[datetime] = None
    premium_since: Optional[datetime] = None
    deaf: Optional[bool] = None
    mute: Optional[bool] = None
    flags: Optional[int] = None
    pending: Optional[bool] = None
    permissions: Optional[str] = None  # Bit set, serialized as a string
    communication_disabled_until: Optional[datetime] = None


class Role(DiscordModel):
    id: Snowflake
    name: str
    color: int = 0
    hoist: bool = False
    icon: Optional[str] = None
    unicode_emoji: Optional[str] = None
    position: int = 0
    permissions: str = "0"
    managed: bool = False
    mentionable: bool = False
    flags: Optional[int] = None


class Channel(DiscordModel):
    """Partial channel as sent with interactions and resolved data."""
    id: Snowflake
    type: int
    guild_id: Optional[Snowflake] = None
    name: Optional[str] = None
    topic: Optional[str] = None
    nsfw: Optional[bool] = None
    position: Optional[int] = None
    parent_id: Optional[Snowflake] = None
    last_message_id: Optional[Snowflake] = None
    rate_limit_per_user: Optional[int] = None
    permissions: Optional[str] = None
    flags: Optional[int] = None


class Attachment(DiscordModel):
    id: Snowflake
    filename: str
    description: Optional[str] = None
    content_type: Optional[str] = None
    size: int
    url: str
    proxy_url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    ephemeral: Optional[bool] = None


class PartialAttachment(DiscordModel):
    """Attachment reference sent back in a response."""
    id: int
    filename: Optional[str] = None
    description: Optional[str] = None


class PartialEmoji(DiscordModel):
    id: Optional[Snowflake] = None
    name: Optional[str] = None
    animated: Optional[bool] = None


class EmbedFooter(DiscordModel):
    text: str
    icon_url: Optional[str] = None
    proxy_icon_url: Optional[str] = None


class EmbedImage(DiscordModel):
    url: str
    proxy_url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


class EmbedThumbnail(DiscordModel):
    url: str
    proxy_url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


class EmbedVideo(DiscordModel):
    url: Optional[str] = None
    proxy_url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


class EmbedProvider(DiscordModel):
    name: Optional[str] = None
    url: Optional[str] = None


class EmbedAuthor(DiscordModel):
    name: str
    url: Optional[str] = None
    icon_url: Optional[str] = None
    proxy_icon_url: Optional[str] = None


class EmbedField(DiscordModel):
    name: str
    value: str
    inline: Optional[bool] = None


class Embed(DiscordModel):
    """Rich embed. Messages may carry other embed types; responses always send `rich`."""
    type: str = "rich"
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    timestamp: Optional[datetime] = None
    color: Optional[int] = None
    footer: Optional[EmbedFooter] = None
    image: Optional[EmbedImage] = None
    thumbnail: Optional[EmbedThumbnail] = None
    video: Optional[EmbedVideo] = None
    provider: Optional[EmbedProvider] = None
    author: Optional[EmbedAuthor] = None
    fields: Optional[List[EmbedField]] = None


class AllowedMentions(DiscordModel):
    parse: Optional[List[str]] = None  # "roles", "users", "everyone"
    roles: Optional[List[Snowflake]] = None
    users: Optional[List[Snowflake]] = None
    replied_user: Optional[bool] = None
