"""Menu browsing: categories and menu items."""

from __future__ import annotations

from app.core.action_codes import ActionCode
from app.schemas.intent import DispatchResult
from app.services.action_handlers.base import ActionContext, ActionHandler
from app.services.action_handlers.formatting import format_currency

CATEGORIES_PAGE_SIZE = 20
CATEGORIES_SHOWN = 10
MENU_ITEMS_PAGE_SIZE = 15

CATEGORIES_HEADER = "🍽️ *Categorias disponíveis:*\n\n"


class MenuCategoriesHandler(ActionHandler):
    codes = (ActionCode.SEARCH_MENU,)
    error_message = "Desculpe, ocorreu um erro ao buscar o cardápio. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        page = await context.catalog.categories(
            is_active=True,
            page=1,
            page_size=CATEGORIES_PAGE_SIZE,
            sort_by="name",
            sort_order="asc",
        )
        if not page.items:
            return DispatchResult(
                message="Desculpe, não há categorias disponíveis no momento. Tente novamente mais tarde.",
                wait_for_response=True,
            )

        message = CATEGORIES_HEADER
        for category in page.items[:CATEGORIES_SHOWN]:
            message += f"• {category.name}"
            if category.description:
                message += f" - {category.description}"
            message += "\n"
        message += "\nDigite o nome da categoria que você quer ver o cardápio."

        return DispatchResult(
            message=message,
            wait_for_response=True,
            side_data={"available_categories": [category.id for category in page.items]},
        )


class MenuItemsHandler(ActionHandler):
    codes = (ActionCode.SEARCH_MENU_ITEMS,)
    error_message = "Desculpe, ocorreu um erro ao buscar o cardápio. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        category_id = context.text_param("category_id")
        page = await context.catalog.menu_items(
            category_ids=[category_id] if category_id else None,
            is_available=True,
            page=1,
            page_size=MENU_ITEMS_PAGE_SIZE,
            sort_by="name",
            sort_order="asc",
        )
        if not page.items:
            return DispatchResult(
                message="Não há itens disponíveis no cardápio no momento. Tente novamente mais tarde.",
                wait_for_response=True,
            )

        message = "🍽️ *Cardápio:*\n\n"
        for item in page.items:
            message += f"🍽️ *{item.name}*\n"
            if item.description:
                message += f"📝 {item.description}\n"
            message += f"💰 {format_currency(item.price)}\n"
            if item.tags:
                message += f"🏷️ {', '.join(tag.name for tag in item.tags)}\n"
            message += "\n"

        return DispatchResult(
            message=message,
            wait_for_response=True,
            side_data={"available_menu_items": [item.id for item in page.items]},
        )
