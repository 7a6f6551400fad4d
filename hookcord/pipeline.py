"""Interaction bot: verify, decode, dispatch and encode one webhook request."""
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from hookcord.auth import verify_signature
from hookcord.errors import DecodeError, InvalidSignature, MissingHeader, NoHandlerRegistered
from hookcord.interactions import Interaction, InteractionType, PingInteraction, decode_interaction
from hookcord.models import Embed
from hookcord.responses import (
    InteractionResponse,
    Pong,
    encode_response,
    respond_with_autocomplete_choices,
    respond_with_embed,
)


logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"

FALLBACK_COLOR = 0xF04747

Handler = Callable[[Any], Union[InteractionResponse, Awaitable[InteractionResponse]]]


class PipelineState(str, Enum):
    RECEIVED = "received"
    SIGNATURE_CHECKED = "signature_checked"
    DECODED = "decoded"
    DISPATCHED = "dispatched"
    RESPONDED = "responded"
    REJECTED = "rejected"


@dataclass(frozen=True)
class WebhookResult:
    """Status code and JSON body to send back to Discord."""
    status_code: int
    body: Dict[str, Any]
    state: PipelineState


_HANDLER_NAMES = {
    InteractionType.APPLICATION_COMMAND: "command",
    InteractionType.MESSAGE_COMPONENT: "component",
    InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE: "autocomplete",
    InteractionType.MODAL_SUBMIT: "modal",
}


class InteractionBot:
    """
    Answers Discord interaction webhooks.

    Each request goes through:
    RECEIVED -> SIGNATURE_CHECKED -> DECODED -> DISPATCHED -> RESPONDED
    and ends in REJECTED with 401 when the signature is missing or invalid,
    or 400 when the body cannot be decoded.

    Pings are answered with Pong without calling a handler. Handlers may be
    plain or async callables; exactly one is called per request. Nothing is
    kept between requests.
    """

    def __init__(
        self,
        public_key: str,
        *,
        command_handler: Optional[Handler] = None,
        component_handler: Optional[Handler] = None,
        autocomplete_handler: Optional[Handler] = None,
        modal_handler: Optional[Handler] = None,
    ) -> None:
        self.public_key = public_key
        self._handlers: Dict[InteractionType, Handler] = {}
        if command_handler is not None:
            self.on_command(command_handler)
        if component_handler is not None:
            self.on_component(component_handler)
        if autocomplete_handler is not None:
            self.on_autocomplete(autocomplete_handler)
        if modal_handler is not None:
            self.on_modal_submit(modal_handler)

    def on_command(self, handler: Handler) -> Handler:
        """Register the handler for slash, user and message commands."""
        self._handlers[InteractionType.APPLICATION_COMMAND] = handler
        return handler

    def on_component(self, handler: Handler) -> Handler:
        self._handlers[InteractionType.MESSAGE_COMPONENT] = handler
        return handler

    def on_autocomplete(self, handler: Handler) -> Handler:
        self._handlers[InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE] = handler
        return handler

    def on_modal_submit(self, handler: Handler) -> Handler:
        self._handlers[InteractionType.MODAL_SUBMIT] = handler
        return handler

    def authenticate(
        self,
        signature: Optional[str],
        timestamp: Optional[str],
        body: bytes,
    ) -> None:
        """Check the signature headers against the raw body."""
        if not signature:
            raise MissingHeader(SIGNATURE_HEADER)
        if not timestamp:
            raise MissingHeader(TIMESTAMP_HEADER)
        verify_signature(self.public_key, signature, timestamp, body)

    async def process(self, headers: Mapping[str, str], body: bytes) -> WebhookResult:
        """Run the whole pipeline for one request."""
        normalized = {key.lower(): value for key, value in headers.items()}
        try:
            self.authenticate(
                normalized.get(SIGNATURE_HEADER.lower()),
                normalized.get(TIMESTAMP_HEADER.lower()),
                body,
            )
        except (MissingHeader, InvalidSignature) as e:
            logger.warning("Rejected interaction request: %s", e)
            return WebhookResult(401, {"detail": str(e)}, PipelineState.REJECTED)
        logger.debug("Interaction request %s", PipelineState.SIGNATURE_CHECKED.value)
        return await self.respond(body)

    async def respond(self, body: bytes) -> WebhookResult:
        """Decode, dispatch and encode a body whose signature is already checked."""
        try:
            interaction = decode_interaction(body)
        except DecodeError as e:
            logger.warning("Rejected undecodable interaction: %s", e)
            return WebhookResult(400, {"detail": str(e)}, PipelineState.REJECTED)
        logger.debug("Interaction %s %s", interaction.id, PipelineState.DECODED.value)

        response = await self.dispatch(interaction)
        logger.debug("Interaction %s %s", interaction.id, PipelineState.DISPATCHED.value)

        return WebhookResult(200, encode_response(response), PipelineState.RESPONDED)

    async def dispatch(self, interaction: Interaction) -> InteractionResponse:
        """Call the handler registered for the interaction's type."""
        if isinstance(interaction, PingInteraction):
            return Pong()

        kind = InteractionType(interaction.type)
        try:
            handler = self._handler_for(kind)
        except NoHandlerRegistered as e:
            logger.info("%s; answering with a fallback response", e)
            return self._fallback_response(kind)

        result = handler(interaction)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _handler_for(self, kind: InteractionType) -> Handler:
        handler = self._handlers.get(kind)
        if handler is None:
            raise NoHandlerRegistered(_HANDLER_NAMES[kind])
        return handler

    def _fallback_response(self, kind: InteractionType) -> InteractionResponse:
        if kind == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
            return respond_with_autocomplete_choices([])
        return respond_with_embed(
            Embed(title=f"No {_HANDLER_NAMES[kind]} handler", color=FALLBACK_COLOR)
        )
