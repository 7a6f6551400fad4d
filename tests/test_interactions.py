from __future__ import annotations

import json
from typing import Any, Dict

import pytest
from pydantic import ValidationError

from hookcord.components import StringSelect
from hookcord.errors import InvalidJson, MissingDiscriminant, SchemaMismatch, UnknownVariant
from hookcord.interactions import (
    ApplicationCommandInteraction,
    AutocompleteInteraction,
    IntegerDataOption,
    MessageComponentInteraction,
    ModalSubmitInteraction,
    PingInteraction,
    StringDataOption,
    SubcommandDataOption,
    SubcommandGroupDataOption,
    UserDataOption,
    decode_interaction,
)
from hookcord.models import ApplicationCommandType
from hookcord.snowflake import Snowflake


def _body(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_ping_interaction(ping_payload: Dict[str, Any]) -> None:
    interaction = decode_interaction(_body(ping_payload))

    assert isinstance(interaction, PingInteraction)
    assert interaction.id == Snowflake.parse("786008729715212338")
    assert interaction.version == 1


def test_command_interaction(command_payload: Dict[str, Any]) -> None:
    interaction = decode_interaction(_body(command_payload))

    assert isinstance(interaction, ApplicationCommandInteraction)
    assert interaction.data.name == "cardsearch"
    assert interaction.data.type == ApplicationCommandType.CHAT_INPUT
    option = interaction.data.options[0]
    assert isinstance(option, StringDataOption)
    assert option.value == "The Gitrog Monster"
    assert interaction.data.option_values() == {"cardname": "The Gitrog Monster"}
    assert interaction.user_id == Snowflake.parse("53908232506183680")


def test_real_signed_interaction_decodes(signed_body: bytes) -> None:
    interaction = decode_interaction(signed_body)

    assert isinstance(interaction, ApplicationCommandInteraction)
    assert interaction.data.name == "ping"
    assert interaction.channel is not None
    assert interaction.channel.name == "bot-stuff"
    assert interaction.member is not None
    assert interaction.member.roles == [Snowflake.parse("943607715639484456")]
    assert interaction.invoking_user.username == "BlueFrog"


def test_user_in_dm_is_invoking_user(ping_payload: Dict[str, Any]) -> None:
    ping_payload.pop("member")
    ping_payload["user"] = {"id": "80351110224678912", "username": "Nelly"}

    interaction = decode_interaction(_body(ping_payload))

    assert interaction.invoking_user.username == "Nelly"


def test_component_interaction(component_payload: Dict[str, Any]) -> None:
    interaction = decode_interaction(_body(component_payload))

    assert isinstance(interaction, MessageComponentInteraction)
    assert interaction.data.custom_id == "colour-select"
    assert interaction.data.values == ["red", "blue"]
    assert interaction.message is not None
    select = interaction.message.components[0].components[0]
    assert isinstance(select, StringSelect)
    assert [option.value for option in select.options] == ["red", "blue"]


def test_autocomplete_interaction(autocomplete_payload: Dict[str, Any]) -> None:
    interaction = decode_interaction(_body(autocomplete_payload))

    assert isinstance(interaction, AutocompleteInteraction)
    focused = interaction.data.focused_option()
    assert focused is not None
    assert focused.name == "cardname"


def test_modal_submit_interaction(modal_payload: Dict[str, Any]) -> None:
    interaction = decode_interaction(_body(modal_payload))

    assert isinstance(interaction, ModalSubmitInteraction)
    assert interaction.data.submitted_values() == {"comment": "Nice bot"}


def test_subcommand_path_and_values(command_payload: Dict[str, Any]) -> None:
    command_payload["data"]["name"] = "alloc"
    command_payload["data"]["options"] = [
        {
            "type": 2,
            "name": "weekly",
            "options": [
                {
                    "type": 1,
                    "name": "set",
                    "options": [
                        {"type": 4, "name": "hours", "value": 5},
                        {"type": 6, "name": "owner", "value": "53908232506183680"},
                    ],
                }
            ],
        }
    ]

    interaction = decode_interaction(_body(command_payload))
    group = interaction.data.options[0]

    assert isinstance(group, SubcommandGroupDataOption)
    assert isinstance(group.options[0], SubcommandDataOption)
    assert isinstance(group.options[0].options[0], IntegerDataOption)
    assert isinstance(group.options[0].options[1], UserDataOption)
    assert interaction.data.command_path() == ("alloc", "weekly", "set")
    assert interaction.data.option_values() == {
        "hours": 5,
        "owner": Snowflake.parse("53908232506183680"),
    }


def test_subcommand_group_children_must_be_subcommands(
    command_payload: Dict[str, Any],
) -> None:
    command_payload["data"]["options"] = [
        {
            "type": 2,
            "name": "weekly",
            "options": [{"type": 3, "name": "subject", "value": "maths"}],
        }
    ]

    with pytest.raises(SchemaMismatch):
        decode_interaction(_body(command_payload))


def test_subcommand_children_must_be_leaves(command_payload: Dict[str, Any]) -> None:
    command_payload["data"]["options"] = [
        {
            "type": 1,
            "name": "set",
            "options": [{"type": 1, "name": "inner", "options": []}],
        }
    ]

    with pytest.raises(SchemaMismatch):
        decode_interaction(_body(command_payload))


def test_unknown_interaction_type(ping_payload: Dict[str, Any]) -> None:
    ping_payload["type"] = 99

    with pytest.raises(UnknownVariant) as excinfo:
        decode_interaction(_body(ping_payload))

    assert excinfo.value.tag == 99


def test_missing_type(ping_payload: Dict[str, Any]) -> None:
    ping_payload.pop("type")

    with pytest.raises(MissingDiscriminant):
        decode_interaction(_body(ping_payload))


def test_command_without_data_is_schema_mismatch(ping_payload: Dict[str, Any]) -> None:
    ping_payload["type"] = 2

    with pytest.raises(SchemaMismatch):
        decode_interaction(_body(ping_payload))


def test_unknown_option_type_is_schema_mismatch(command_payload: Dict[str, Any]) -> None:
    command_payload["data"]["options"] = [{"type": 77, "name": "odd", "value": 1}]

    with pytest.raises(SchemaMismatch):
        decode_interaction(_body(command_payload))


def test_malformed_snowflake_is_schema_mismatch(ping_payload: Dict[str, Any]) -> None:
    ping_payload["id"] = "12ab"

    with pytest.raises(SchemaMismatch):
        decode_interaction(_body(ping_payload))


def test_invalid_json_body() -> None:
    with pytest.raises(InvalidJson):
        decode_interaction(b"not json")


def test_decoded_interactions_are_frozen(ping_payload: Dict[str, Any]) -> None:
    interaction = decode_interaction(_body(ping_payload))

    with pytest.raises(ValidationError):
        interaction.token = "other"


def test_deeply_nested_body_is_invalid_json() -> None:
    with pytest.raises(InvalidJson):
        decode_interaction(b"[" * 200000)


def test_subcommand_must_be_the_only_top_level_option(
    command_payload: Dict[str, Any],
) -> None:
    command_payload["data"]["options"] = [
        {"type": 3, "name": "subject", "value": "maths"},
        {"type": 1, "name": "set", "options": []},
    ]

    with pytest.raises(SchemaMismatch):
        decode_interaction(_body(command_payload))
