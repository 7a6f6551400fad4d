from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from nacl.signing import SigningKey

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def signed_body() -> bytes:
    return (FIXTURES / "signed_command.json").read_bytes()


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def public_key(signing_key: SigningKey) -> str:
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def sign(signing_key: SigningKey) -> Callable[[bytes, str], Dict[str, str]]:
    def _sign(body: bytes, timestamp: str = "1700000000") -> Dict[str, str]:
        signature = signing_key.sign(timestamp.encode("utf-8") + body).signature
        return {
            "X-Signature-Ed25519": signature.hex(),
            "X-Signature-Timestamp": timestamp,
        }

    return _sign


def _header(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": "786008729715212338",
        "application_id": "1052322265397739523",
        "token": "A_UNIQUE_TOKEN",
        "version": 1,
        "guild_id": "290926798626357999",
        "channel_id": "645027906669510667",
        "app_permissions": "442368",
        "locale": "en-US",
        "guild_locale": "en-US",
        "member": {
            "user": {
                "id": "53908232506183680",
                "username": "Mason",
                "avatar": "a_d5efa99b3eeaa7dd43acca82f5692432",
                "discriminator": "1337",
                "public_flags": 131141,
            },
            "roles": ["539082325061836999"],
            "premium_since": None,
            "permissions": "2147483647",
            "pending": False,
            "nick": None,
            "mute": False,
            "joined_at": "2017-03-13T19:19:14.040000+00:00",
            "is_pending": False,
            "deaf": False,
            "flags": 0,
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def ping_payload() -> Dict[str, Any]:
    return _header(type=1)


@pytest.fixture
def command_payload() -> Dict[str, Any]:
    return _header(
        type=2,
        data={
            "options": [
                {"type": 3, "name": "cardname", "value": "The Gitrog Monster"}
            ],
            "type": 1,
            "name": "cardsearch",
            "id": "771825006014889984",
        },
    )


@pytest.fixture
def component_payload() -> Dict[str, Any]:
    return _header(
        type=3,
        data={
            "custom_id": "colour-select",
            "component_type": 3,
            "values": ["red", "blue"],
        },
        message={
            "id": "1100155827400229026",
            "channel_id": "645027906669510667",
            "content": "Pick colours",
            "components": [
                {
                    "type": 1,
                    "components": [
                        {
                            "type": 3,
                            "custom_id": "colour-select",
                            "options": [
                                {"label": "Red", "value": "red"},
                                {"label": "Blue", "value": "blue"},
                            ],
                        }
                    ],
                }
            ],
        },
    )


@pytest.fixture
def autocomplete_payload() -> Dict[str, Any]:
    return _header(
        type=4,
        data={
            "id": "771825006014889984",
            "name": "cardsearch",
            "type": 1,
            "options": [
                {"type": 3, "name": "cardname", "value": "Gitr", "focused": True}
            ],
        },
    )


@pytest.fixture
def modal_payload() -> Dict[str, Any]:
    return _header(
        type=5,
        data={
            "custom_id": "feedback",
            "components": [
                {
                    "type": 1,
                    "components": [
                        {"type": 4, "custom_id": "comment", "value": "Nice bot"}
                    ],
                }
            ],
        },
    )
