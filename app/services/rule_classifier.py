"""Keyword rules that classify common requests without calling the language model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from app.core.action_codes import ActionCode
from app.schemas.intent import IntentResult


@dataclass(frozen=True)
class KeywordRule:
    """
    A rule matches when the text contains any keyword of ``any_of`` and,
    if ``all_of`` is set, at least one keyword of every group in it.
    """

    name: str
    any_of: tuple[str, ...]
    reply_message: str
    action_codes: tuple[int, ...]
    wait_for_response: bool
    conversation_context: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
    all_of: tuple[tuple[str, ...], ...] = ()

    def matches(self, text: str) -> bool:
        if not any(keyword in text for keyword in self.any_of):
            return False
        return all(any(keyword in text for keyword in group) for group in self.all_of)

    def to_result(self) -> IntentResult:
        return IntentResult(
            reply_message=self.reply_message,
            action_codes=list(self.action_codes),
            wait_for_response=self.wait_for_response,
            conversation_context=self.conversation_context,
            data={
                key: list(value) if isinstance(value, (list, tuple)) else value
                for key, value in self.data.items()
            },
        )


# Order matters: "restaurante perto com menu" must resolve to the nearby search.
DEFAULT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        name="nearby_restaurants",
        any_of=("restaurante",),
        all_of=(("próximo", "perto"),),
        reply_message=(
            "Para encontrar restaurantes próximos, preciso da sua localização. "
            "Por favor, compartilhe sua localização atual."
        ),
        action_codes=(ActionCode.SEARCH_NEARBY_RESTAURANTS,),
        wait_for_response=True,
        conversation_context="waiting_location_for_restaurants",
        data={
            "waiting_for_location": True,
            "pending_codes": (int(ActionCode.SEARCH_NEARBY_RESTAURANTS),),
        },
    ),
    KeywordRule(
        name="menu",
        any_of=("cardápio", "menu", "pratos"),
        reply_message="Vou buscar o cardápio para você. Qual tipo de comida você prefere?",
        action_codes=(ActionCode.SEARCH_MENU,),
        wait_for_response=True,
        conversation_context="menu_selection",
    ),
    KeywordRule(
        name="operating_hours",
        any_of=("horário", "funcionamento", "aberto"),
        reply_message="Vou verificar os horários de funcionamento dos restaurantes próximos.",
        action_codes=(ActionCode.CHECK_OPERATING_HOURS,),
        wait_for_response=False,
    ),
    KeywordRule(
        name="order",
        any_of=("pedido", "fazer pedido", "comprar"),
        reply_message=(
            "Para fazer um pedido, preciso saber qual restaurante você quer. "
            "Vou mostrar as opções próximas."
        ),
        action_codes=(ActionCode.START_ORDER,),
        wait_for_response=True,
        conversation_context="order_selection",
    ),
    KeywordRule(
        name="promotions",
        any_of=("promoção", "desconto", "oferta"),
        reply_message="Vou verificar as promoções disponíveis nos restaurantes próximos.",
        action_codes=(ActionCode.SEARCH_PROMOTIONS,),
        wait_for_response=False,
    ),
)


class RuleBasedClassifier:
    """First matching rule wins. ``None`` means the text needs the language model."""

    def __init__(self, rules: tuple[KeywordRule, ...] = DEFAULT_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[KeywordRule, ...]:
        return self._rules

    def classify(self, text: Optional[str]) -> Optional[IntentResult]:
        lowered = (text or "").lower()
        if not lowered:
            return None
        for rule in self._rules:
            if rule.matches(lowered):
                return rule.to_result()
        return None
