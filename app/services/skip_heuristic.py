"""
Session-driven short-circuit: answers a turn without the language model.

Matching is on the whole normalized message, never on substrings, so that a
request such as "restaurante próximo" or "quero ver o cardápio" always
reaches the classifier.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from app.core.action_codes import ActionCode
from app.schemas.session import ConversationMessageRead, ConversationSessionRead, SkipDecision
from app.schemas.whatsapp import LOCATION_TURN_TEXT

CONFIRMATION_WORDS = frozenset(
    {"sim", "ok", "okay", "certo", "beleza", "tá", "ta", "blz", "👍", "✅", "tudo bem", "valeu"}
)
CONFIRMATION_REPLY = "Entendi! Posso ajudar com mais alguma coisa?"

CONTINUATION_WORDS = frozenset(
    {"mais", "outros", "outras", "próximo", "proximo", "seguinte", "continua", "continuar", "mais opções"}
)
NAVIGATION_WORDS = {
    "próxima página": ("proxima_pagina", "Aqui está a próxima página de resultados..."),
    "página seguinte": ("proxima_pagina", "Aqui está a próxima página de resultados..."),
    "avançar": ("proxima_pagina", "Aqui está a próxima página de resultados..."),
    "anterior": ("pagina_anterior", "Aqui está a página anterior..."),
    "página anterior": ("pagina_anterior", "Aqui está a página anterior..."),
    "voltar": ("pagina_anterior", "Aqui está a página anterior..."),
}

# last_intent -> (next intent, reply)
CONTINUATION_REPLIES = {
    "waiting_location_for_restaurants": (
        "buscar_mais_restaurantes",
        "Vou buscar mais restaurantes próximos...",
    ),
    "buscar_restaurantes": ("buscar_mais_restaurantes", "Vou buscar mais restaurantes próximos..."),
    "menu_selection": ("buscar_mais_categorias", "Aqui estão mais categorias disponíveis..."),
    "buscar_categorias": ("buscar_mais_categorias", "Aqui estão mais categorias disponíveis..."),
    "buscar_promocoes": ("buscar_mais_promocoes", "Vou mostrar mais promoções ativas..."),
}
DEFAULT_CONTINUATION = ("continuar_conversa", "Posso ajudar com mais alguma coisa?")

ORDINALS = {
    "primeiro": 0,
    "o primeiro": 0,
    "1": 0,
    "segundo": 1,
    "o segundo": 1,
    "2": 1,
    "terceiro": 2,
    "o terceiro": 2,
    "3": 2,
}
ORDINAL_NAMES = ("primeiro", "segundo", "terceiro")
REFERENCE_NOT_FOUND = (
    "referencia_nao_encontrada",
    "Desculpe, não encontrei essa referência. Pode ser mais específico?",
)

# Logged intents after which found_companies is still the list on screen.
LISTING_INTENTS = frozenset(
    {str(int(ActionCode.SEARCH_NEARBY_RESTAURANTS)), "detalhes_restaurante", REFERENCE_NOT_FOUND[0]}
)

_TRAILING_PUNCTUATION = ".!?,;"


def normalize(text: Optional[str]) -> str:
    return " ".join((text or "").lower().split()).strip(_TRAILING_PUNCTUATION).strip()


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SkipHeuristic:
    """
    Checked in order: confirmation, continuation, navigation, reference to a
    restaurant listed by the previous turn, and a repeat of the previous message.
    """

    def __init__(self, repeat_window: timedelta = timedelta(minutes=10)) -> None:
        self._repeat_window = repeat_window

    def decide(
        self,
        text: Optional[str],
        session: ConversationSessionRead,
        last_message: Optional[ConversationMessageRead] = None,
        now: Optional[datetime] = None,
    ) -> SkipDecision:
        message = normalize(text)
        if not message:
            return SkipDecision()

        if message in CONFIRMATION_WORDS:
            return SkipDecision(skip=True, intent="confirmation", reply=CONFIRMATION_REPLY)

        if session.last_intent:
            if message in CONTINUATION_WORDS:
                intent, reply = CONTINUATION_REPLIES.get(session.last_intent, DEFAULT_CONTINUATION)
                return SkipDecision(skip=True, intent=intent, reply=reply)
            if message in NAVIGATION_WORDS:
                intent, reply = NAVIGATION_WORDS[message]
                return SkipDecision(skip=True, intent=intent, reply=reply)

        listed = last_message is not None and last_message.intent in LISTING_INTENTS
        if message in ORDINALS and listed:
            companies = session.session_data.get("found_companies")
            if isinstance(companies, list) and companies:
                return self._reference(ORDINALS[message], companies)

        return self._repeat(
            message, session, last_message, now or datetime.now(timezone.utc)
        )

    def _reference(self, index: int, companies: list[Any]) -> SkipDecision:
        if index >= len(companies):
            intent, reply = REFERENCE_NOT_FOUND
            return SkipDecision(skip=True, intent=intent, reply=reply)
        return SkipDecision(
            skip=True,
            intent="detalhes_restaurante",
            reply=f"Detalhes do {ORDINAL_NAMES[index]} restaurante: {companies[index]}",
        )

    def _repeat(
        self,
        message: str,
        session: ConversationSessionRead,
        last_message: Optional[ConversationMessageRead],
        now: datetime,
    ) -> SkipDecision:
        if last_message is None or not last_message.response:
            return SkipDecision()
        if self._repeat_window <= timedelta(0):
            return SkipDecision()
        if message == normalize(LOCATION_TURN_TEXT):
            return SkipDecision()
        if normalize(last_message.message) != message:
            return SkipDecision()
        if now - _aware(last_message.created_at) > self._repeat_window:
            return SkipDecision()
        return SkipDecision(
            skip=True,
            intent=session.last_intent or last_message.intent or "repeticao",
            reply=last_message.response,
        )
