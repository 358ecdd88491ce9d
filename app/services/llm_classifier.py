"""Classification through the chat model, used when no keyword rule matches."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from app.core.action_codes import describe_catalog
from app.infra.logging_config import get_logger
from app.schemas.intent import ClassificationReply, IntentResult
from app.workers.llm import ChatModelAdapter

logger = get_logger(__name__)

FALLBACK_MESSAGE = "Desculpe, não consegui entender sua solicitação. Pode reformular?"
NO_CONTEXT = "nenhum"

REQUIRED_FIELDS = ("message", "codes", "wait_for_response")

PROMPT_TEMPLATE = """Você é um assistente de WhatsApp para um sistema de delivery de comida.

Analise a mensagem do usuário e retorne um JSON com:
- message: resposta direta ao usuário
- codes: lista de códigos de ações a serem executadas (separados por vírgula)
- wait_for_response: se deve aguardar resposta do usuário
- conversation_context: contexto para próxima interação

CÓDIGOS DISPONÍVEIS:
{catalog}

CONTEXTO ATUAL: {context}

MENSAGEM DO USUÁRIO: {message}

Exemplo de resposta:
{{
  "message": "Para encontrar restaurantes próximos, preciso da sua localização. Pode compartilhar?",
  "codes": "1001",
  "wait_for_response": true,
  "conversation_context": "waiting_location"
}}"""


def build_classification_prompt(text: str, conversation_context: Optional[str]) -> str:
    return PROMPT_TEMPLATE.format(
        catalog=describe_catalog(),
        context=conversation_context or NO_CONTEXT,
        message=text,
    )


def parse_action_codes(raw: Any) -> list[int]:
    """
    Parse a comma-separated code list. Non-numeric tokens are dropped and
    order is kept: ``"1001, 2001,x,3001"`` gives ``[1001, 2001, 3001]``.
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        tokens = [str(token) for token in raw]
    else:
        tokens = str(raw).split(",")
    codes: list[int] = []
    for token in tokens:
        token = token.strip()
        digits = token[1:] if token.startswith("-") else token
        if not (digits.isascii() and digits.isdigit()):
            continue
        codes.append(int(token))
    return codes


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "sim", "yes")
    return bool(value)


def fallback_result() -> IntentResult:
    return IntentResult(
        reply_message=FALLBACK_MESSAGE,
        action_codes=[],
        wait_for_response=True,
    )


class LLMClassifierAdapter:
    """Builds the classification prompt, calls the chat model and parses its reply."""

    def __init__(
        self, chat_model: ChatModelAdapter, timeout_seconds: Optional[float] = None
    ) -> None:
        self._chat_model = chat_model
        self._timeout_seconds = timeout_seconds

    async def classify_with_model(
        self, text: str, conversation_context: Optional[str] = None
    ) -> IntentResult:
        prompt = build_classification_prompt(text, conversation_context)
        try:
            payload = await asyncio.wait_for(
                self._chat_model.complete(prompt, ClassificationReply),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Chat model timed out after %ss, using fallback reply",
                self._timeout_seconds,
            )
            return fallback_result()
        except Exception:
            logger.exception("Chat model call failed, using fallback reply")
            return fallback_result()
        return self.parse_model_payload(payload)

    def parse_model_payload(self, payload: Any) -> IntentResult:
        if isinstance(payload, dict) and isinstance(payload.get("response"), dict):
            payload = payload["response"]
        if not isinstance(payload, dict):
            logger.warning("Chat model returned a non-object payload: %r", payload)
            return fallback_result()
        missing = [name for name in REQUIRED_FIELDS if name not in payload]
        if missing:
            logger.warning("Chat model payload is missing fields: %s", ", ".join(missing))
            return fallback_result()

        message = payload.get("message")
        if not isinstance(message, str) or not message.strip():
            return fallback_result()
        context = payload.get("conversation_context")
        return IntentResult(
            reply_message=message,
            action_codes=parse_action_codes(payload.get("codes")),
            wait_for_response=_parse_bool(payload.get("wait_for_response")),
            conversation_context=str(context) if context else None,
        )
