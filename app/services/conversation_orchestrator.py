"""One inbound message in, one reply out."""

from __future__ import annotations

from typing import Any, Optional

from app.core.session_key import build_session_id, channel_id_from_conversation_id
from app.core.values import has_coordinates, optional_str, to_float
from app.exceptions import MessageValidationError, SessionStoreUnavailableError
from app.infra.logging_config import get_logger
from app.schemas.intent import IntentResult
from app.schemas.whatsapp import (
    LOCATION_TURN_TEXT,
    InboundMessage,
    MessageKind,
    WhatsAppResponse,
)
from app.services.action_dispatcher import ActionDispatcher
from app.services.intent_classifier import IntentClassifier
from app.services.session_store import SessionStore

logger = get_logger(__name__)

UNSUPPORTED_MESSAGE = (
    "Desculpe, não consigo processar este tipo de mensagem. "
    "Por favor, envie um texto ou sua localização."
)
GENERIC_ERROR_MESSAGE = (
    "Desculpe, ocorreu um erro ao processar sua mensagem. "
    "Tente novamente em alguns instantes."
)
TRY_AGAIN_LATER_MESSAGE = (
    "Desculpe, estamos com instabilidade no momento. Por favor, tente novamente mais tarde."
)


class ConversationOrchestrator:
    """
    Validates the message, consults the session store, classifies, dispatches
    and records the turn. Every path returns a well-formed reply.
    """

    def __init__(
        self,
        session_store: SessionStore,
        classifier: IntentClassifier,
        dispatcher: ActionDispatcher,
    ) -> None:
        self._sessions = session_store
        self._classifier = classifier
        self._dispatcher = dispatcher

    async def process_message(self, message: InboundMessage) -> WhatsAppResponse:
        try:
            return await self._process(message)
        except MessageValidationError as e:
            logger.warning("Rejected inbound message %s: %s", message.message_id, e)
            return WhatsAppResponse(message=GENERIC_ERROR_MESSAGE, wait_for_response=False)
        except SessionStoreUnavailableError:
            logger.exception("Session bootstrap failed for message %s", message.message_id)
            return WhatsAppResponse(message=TRY_AGAIN_LATER_MESSAGE, wait_for_response=False)
        except Exception:
            logger.exception("Failed to process message %s", message.message_id)
            return WhatsAppResponse(message=GENERIC_ERROR_MESSAGE, wait_for_response=False)

    async def _process(self, message: InboundMessage) -> WhatsAppResponse:
        channel_id = self.resolve_channel_id(message)
        if message.kind is None:
            raise MessageValidationError("Tipo da mensagem é obrigatório.")
        if message.kind == MessageKind.UNSUPPORTED:
            return WhatsAppResponse(message=UNSUPPORTED_MESSAGE, wait_for_response=True)

        # Raises InvalidArgumentError before any session write.
        location = self.extract_location(message)
        text = self.turn_text(message)

        session_id = build_session_id(channel_id)
        session = await self._sessions.get_or_create_session(session_id, channel_id)

        decision = await self._sessions.can_skip_model(text, session)
        if decision.skip and decision.reply:
            await self._sessions.update_session_context(session_id, decision.intent)
            await self._sessions.append_message(
                session_id, text, decision.intent, decision.reply, False
            )
            logger.info("Answered session %s without the model (%s)", session_id, decision.intent)
            return WhatsAppResponse(message=decision.reply, wait_for_response=True)

        result = await self._classifier.classify(text, session.last_intent)
        await self._sessions.update_session_context(session_id, result.conversation_context)

        if result.action_codes:
            params = self.build_params(session.session_data, location, channel_id, text)
            response = await self._dispatcher.dispatch(result.action_codes, params, channel_id)
            side_data = dict(response.data)
            if side_data:
                await self._sessions.update_session_context(
                    session_id, result.conversation_context, side_data
                )
            response.conversation_context = result.conversation_context
            response.data = {**result.data, **side_data}
        else:
            response = result.to_response()

        await self._sessions.append_message(
            session_id,
            text,
            self.logged_intent(result),
            response.message,
            True,
        )
        return response

    @staticmethod
    def resolve_channel_id(message: InboundMessage) -> str:
        channel_id = optional_str(message.channel_id) or channel_id_from_conversation_id(
            message.conversation_id
        )
        if not channel_id:
            raise MessageValidationError("Número de telefone do usuário é obrigatório.")
        return channel_id

    @staticmethod
    def turn_text(message: InboundMessage) -> str:
        if message.kind == MessageKind.LOCATION:
            return LOCATION_TURN_TEXT
        return message.text or ""

    @staticmethod
    def extract_location(message: InboundMessage) -> Optional[dict[str, float]]:
        """Coordinates of a location share, or cached in ``context_data`` of a text message."""
        if message.kind == MessageKind.LOCATION:
            return {
                "latitude": to_float(message.latitude),
                "longitude": to_float(message.longitude),
            }
        if has_coordinates(message.context_data):
            return {
                "latitude": to_float(message.context_data["latitude"]),
                "longitude": to_float(message.context_data["longitude"]),
            }
        return None

    @staticmethod
    def build_params(
        session_data: Optional[dict[str, Any]],
        location: Optional[dict[str, float]],
        channel_id: str,
        text: str,
    ) -> dict[str, Any]:
        """Session data, then coordinates, then phone number and text; later entries win."""
        params: dict[str, Any] = dict(session_data or {})
        if location:
            params.update(location)
        params["phone_number"] = channel_id
        params["message"] = text
        return params

    @staticmethod
    def logged_intent(result: IntentResult) -> Optional[str]:
        if result.action_codes:
            return str(result.action_codes[0])
        return result.conversation_context
