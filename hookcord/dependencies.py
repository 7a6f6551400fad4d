"""FastAPI dependencies for the interactions endpoint."""
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from hookcord.config import Settings
from hookcord.errors import InvalidSignature, MissingHeader
from hookcord.pipeline import SIGNATURE_HEADER, TIMESTAMP_HEADER, InteractionBot


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_bot(request: Request) -> InteractionBot:
    return request.app.state.bot


async def verify_discord_request(
    request: Request,
    bot: InteractionBot = Depends(get_bot),
    x_signature_ed25519: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    x_signature_timestamp: Optional[str] = Header(None, alias=TIMESTAMP_HEADER),
) -> bytes:
    """
    Verify the Discord request signature and return the raw body.

    The body is returned unparsed; it is only decoded once its signature
    has been checked.
    """
    raw_body = await request.body()

    try:
        bot.authenticate(x_signature_ed25519, x_signature_timestamp, raw_body)
    except (MissingHeader, InvalidSignature) as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    return raw_body
