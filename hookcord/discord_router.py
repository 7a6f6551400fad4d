"""Discord interaction router."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hookcord.dependencies import get_bot, verify_discord_request
from hookcord.pipeline import InteractionBot


router = APIRouter()


@router.post("/interactions")
async def discord_interactions(
    raw_body: bytes = Depends(verify_discord_request),
    bot: InteractionBot = Depends(get_bot),
):
    """Handle all Discord interactions."""
    result = await bot.respond(raw_body)
    return JSONResponse(result.body, status_code=result.status_code)
