"""Cuisine types (catalog tags) and restaurants by tag."""

from __future__ import annotations

from app.core.action_codes import ActionCode
from app.schemas.intent import DispatchResult
from app.services.action_handlers.base import ActionContext, ActionHandler
from app.services.action_handlers.formatting import cuisine_emoji

TAGS_PAGE_SIZE = 20

CUISINE_HEADER = "🍕 *Tipos de culinária disponíveis:*\n\n"
CUISINE_QUESTION = "\nQual tipo de comida você prefere?"

# Shown when the tenant has no tags yet.
STATIC_CUISINES = (
    "🍕 Italiana",
    "🍜 Japonesa",
    "🥘 Brasileira",
    "🌮 Mexicana",
    "🍔 Americana",
    "🥙 Árabe",
    "🍛 Indiana",
    "🥡 Chinesa",
    "🍣 Sushi",
    "🍖 Churrasco",
    "🥗 Vegetariana",
    "🌱 Vegana",
)


class CuisineTypesHandler(ActionHandler):
    codes = (ActionCode.SEARCH_BY_CUISINE,)
    error_message = "Desculpe, ocorreu um erro ao buscar tipos de culinária. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        page = await context.catalog.tags(
            name=None, page=1, page_size=TAGS_PAGE_SIZE, sort_by="name", sort_order="asc"
        )
        if not page.items:
            message = CUISINE_HEADER
            message += "".join(f"• {cuisine}\n" for cuisine in STATIC_CUISINES)
            return DispatchResult(message=message + CUISINE_QUESTION, wait_for_response=True)

        message = CUISINE_HEADER
        for tag in page.items:
            message += f"• {cuisine_emoji(tag.name)} {tag.name}"
            if tag.description:
                message += f" - {tag.description}"
            message += "\n"
        return DispatchResult(
            message=message + CUISINE_QUESTION,
            wait_for_response=True,
            side_data={"available_tags": [tag.id for tag in page.items]},
        )


class RestaurantsByTagHandler(ActionHandler):
    codes = (ActionCode.SEARCH_RESTAURANTS_BY_TAG,)
    error_message = "Desculpe, ocorreu um erro ao buscar restaurantes. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        tag_name = context.text_param("tag_name")
        if not tag_name:
            return DispatchResult(
                message="Por favor, especifique qual tipo de culinária você está procurando.",
                wait_for_response=True,
            )
        # TODO: query companies by tag once the catalog API exposes that filter.
        return DispatchResult(
            message=(
                f"🍽️ *Restaurantes com culinária {tag_name}:*\n\n"
                f"Estamos buscando restaurantes que servem {tag_name}.\n"
                "Para encontrar restaurantes específicos, use a busca por localização."
            ),
            wait_for_response=True,
        )
