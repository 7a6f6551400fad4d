from __future__ import annotations

import pytest
from pydantic import ValidationError

from hookcord.commands import (
    ChatInputCommand,
    IntegerOption,
    MessageCommand,
    NumberOption,
    OptionChoice,
    StringOption,
    SubcommandGroupOption,
    SubcommandOption,
    UserCommand,
    chat_input_command,
    decode_command,
    message_command,
    user_command,
)
from hookcord.errors import SchemaMismatch, UnknownVariant
from hookcord.snowflake import Snowflake


def _session_command() -> ChatInputCommand:
    return chat_input_command(
        "session",
        "Manage time tracking sessions",
        options=[
            SubcommandOption(
                name="in",
                description="Clock in to a new session",
                options=[
                    StringOption(name="subject", description="Subject/topic name", required=True),
                    StringOption(name="goal", description="Session goal or purpose", required=False),
                ],
            ),
            SubcommandOption(name="status", description="Show current session status"),
        ],
    )


def test_chat_input_payload() -> None:
    payload = _session_command().to_payload()

    assert payload == {
        "type": 1,
        "name": "session",
        "description": "Manage time tracking sessions",
        "options": [
            {
                "type": 1,
                "name": "in",
                "description": "Clock in to a new session",
                "options": [
                    {
                        "type": 3,
                        "name": "subject",
                        "description": "Subject/topic name",
                        "required": True,
                    },
                    {
                        "type": 3,
                        "name": "goal",
                        "description": "Session goal or purpose",
                        "required": False,
                    },
                ],
            },
            {"type": 1, "name": "status", "description": "Show current session status"},
        ],
    }


def test_payload_leaves_out_server_assigned_fields() -> None:
    command = decode_command(
        {
            "id": "1052358444704862218",
            "application_id": "1052322265397739523",
            "version": "1052358444704862219",
            "guild_id": "798662131062931547",
            "type": 1,
            "name": "ping",
            "description": "Ping the bot",
            "default_member_permissions": None,
        }
    )

    assert isinstance(command, ChatInputCommand)
    assert command.id == Snowflake.parse("1052358444704862218")
    assert command.to_payload() == {
        "type": 1,
        "name": "ping",
        "description": "Ping the bot",
        "guild_id": "798662131062931547",
    }


def test_user_and_message_commands() -> None:
    assert user_command("High Five").to_payload() == {
        "type": 2,
        "name": "High Five",
        "description": "",
    }
    assert isinstance(message_command("Bookmark"), MessageCommand)
    assert isinstance(
        decode_command({"type": 2, "name": "High Five", "description": ""}), UserCommand
    )


def test_default_member_permissions_sent_as_string() -> None:
    command = chat_input_command("ban", "Ban a member", default_member_permissions=4)

    assert command.to_payload()["default_member_permissions"] == "4"


def test_decode_option_tree() -> None:
    command = decode_command(
        {
            "type": 1,
            "name": "alloc",
            "description": "Manage weekly time allocations",
            "options": [
                {
                    "type": 2,
                    "name": "weekly",
                    "description": "Weekly allocations",
                    "options": [
                        {
                            "type": 1,
                            "name": "set",
                            "description": "Set weekly allocation for a subject",
                            "options": [
                                {
                                    "type": 10,
                                    "name": "hours",
                                    "description": "Hours allocated per week",
                                    "required": True,
                                    "min_value": 0,
                                }
                            ],
                        }
                    ],
                }
            ],
        }
    )

    group = command.options[0]
    assert isinstance(group, SubcommandGroupOption)
    subcommand = group.options[0]
    assert isinstance(subcommand, SubcommandOption)
    hours = subcommand.options[0]
    assert isinstance(hours, NumberOption)
    assert hours.min_value == 0


def test_subcommand_group_rejects_leaf_children() -> None:
    with pytest.raises(ValidationError):
        SubcommandGroupOption(
            name="weekly",
            description="Weekly allocations",
            options=[StringOption(name="subject", description="Subject name")],
        )


def test_subcommand_rejects_nested_subcommands() -> None:
    with pytest.raises(SchemaMismatch):
        decode_command(
            {
                "type": 1,
                "name": "alloc",
                "description": "Allocations",
                "options": [
                    {
                        "type": 1,
                        "name": "set",
                        "description": "Set",
                        "options": [{"type": 1, "name": "deeper", "description": "No"}],
                    }
                ],
            }
        )


def test_choice_values_match_option_type() -> None:
    StringOption(
        name="colour",
        description="Colour",
        choices=[OptionChoice(name="Red", value="red")],
    )
    IntegerOption(
        name="count",
        description="Count",
        choices=[OptionChoice(name="One", value=1)],
    )

    with pytest.raises(ValidationError):
        StringOption(
            name="colour",
            description="Colour",
            choices=[OptionChoice(name="One", value=1)],
        )
    with pytest.raises(ValidationError):
        IntegerOption(
            name="count",
            description="Count",
            choices=[OptionChoice(name="Red", value="red")],
        )


def test_unknown_command_type() -> None:
    with pytest.raises(UnknownVariant):
        decode_command({"type": 9, "name": "odd"})
