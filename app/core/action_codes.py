"""
Action code catalog.

Every action the pipeline can execute is listed here once. The LLM prompt
describes exactly these codes and the dispatcher registers one handler per
code; tests keep both in sync with this table.
"""

from __future__ import annotations

from enum import IntEnum


class ActionCode(IntEnum):
    SEARCH_NEARBY_RESTAURANTS = 1001
    SEARCH_MENU = 2001
    SEARCH_MENU_ITEMS = 2002
    CHECK_OPERATING_HOURS = 3001
    START_ORDER = 4001
    SEARCH_PROMOTIONS = 5001
    SEARCH_COUPONS = 5002
    SEARCH_BY_CUISINE = 6001
    SEARCH_RESTAURANTS_BY_TAG = 6002
    CHECK_ORDER_STATUS = 7001
    CANCEL_ORDER = 8001
    HUMAN_SUPPORT = 9001


# One-line descriptions, in the order they are presented to the model.
ACTION_DESCRIPTIONS: dict[ActionCode, str] = {
    ActionCode.SEARCH_NEARBY_RESTAURANTS: "Buscar restaurantes próximos (requer localização)",
    ActionCode.SEARCH_MENU: "Buscar cardápio/menu",
    ActionCode.SEARCH_MENU_ITEMS: "Buscar itens do menu por categoria",
    ActionCode.CHECK_OPERATING_HOURS: "Verificar horários de funcionamento",
    ActionCode.START_ORDER: "Iniciar processo de pedido",
    ActionCode.SEARCH_PROMOTIONS: "Buscar promoções/descontos",
    ActionCode.SEARCH_COUPONS: "Buscar cupons",
    ActionCode.SEARCH_BY_CUISINE: "Buscar por tipo de culinária",
    ActionCode.SEARCH_RESTAURANTS_BY_TAG: "Buscar restaurantes por tags/culinária",
    ActionCode.CHECK_ORDER_STATUS: "Verificar status de pedido",
    ActionCode.CANCEL_ORDER: "Cancelar pedido",
    ActionCode.HUMAN_SUPPORT: "Falar com atendente humano",
}

# Codes whose reply asks the user for missing input (location, menu category,
# restaurant choice for an order). A turn that runs any of them waits for an answer.
NEEDS_REPLY_CODES: frozenset[int] = frozenset(
    {
        ActionCode.SEARCH_NEARBY_RESTAURANTS,
        ActionCode.SEARCH_MENU,
        ActionCode.START_ORDER,
    }
)


def describe_catalog() -> str:
    """Render the catalog as ``<code> - <description>`` lines."""
    return "\n".join(
        f"{int(code)} - {description}"
        for code, description in ACTION_DESCRIPTIONS.items()
    )
