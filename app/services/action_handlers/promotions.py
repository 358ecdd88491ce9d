"""Active promotions and coupons, soonest to expire first."""

from __future__ import annotations

from app.core.action_codes import ActionCode
from app.schemas.catalog import Coupon, Promotion
from app.schemas.intent import DispatchResult
from app.services.action_handlers.base import ActionContext, ActionHandler
from app.services.action_handlers.formatting import (
    format_currency,
    format_date,
    format_discount,
)

PAGE_SIZE = 10
MAX_RESULTS = 5


def format_promotion(promotion: Promotion) -> str:
    text = f"*{promotion.name}*\n"
    if promotion.description:
        text += f"📝 {promotion.description}\n"
    text += f"💰 Desconto: {format_discount(promotion.discount_type, promotion.discount_value)}\n"
    if promotion.min_order_value is not None:
        text += f"💳 Pedido mínimo: {format_currency(promotion.min_order_value)}\n"
    if promotion.end_date:
        text += f"⏰ Válida até: {format_date(promotion.end_date)}\n"
    return text + "\n"


def format_coupon(coupon: Coupon) -> str:
    text = f"🎫 *{coupon.code}*\n"
    text += f"💰 Desconto: {format_discount(coupon.discount_type, coupon.discount_value)}\n"
    if coupon.min_order_value > 0:
        text += f"💳 Pedido mínimo: {format_currency(coupon.min_order_value)}\n"
    if coupon.end_date:
        text += f"⏰ Válido até: {format_date(coupon.end_date)}\n"
    return text + "\n"


class PromotionsHandler(ActionHandler):
    codes = (ActionCode.SEARCH_PROMOTIONS,)
    error_message = "Desculpe, ocorreu um erro ao buscar promoções. Tente novamente."
    error_wait_for_response = False

    async def handle(self, context: ActionContext) -> DispatchResult:
        page = await context.catalog.promotions(
            is_active=True, page=1, page_size=PAGE_SIZE, sort_by="enddate", sort_order="asc"
        )
        if not page.items:
            return DispatchResult(
                message="Não há promoções ativas no momento. Mas não se preocupe, sempre temos ótimas ofertas!",
            )
        message = "*Promoções ativas:*\n\n"
        message += "".join(format_promotion(p) for p in page.items[:MAX_RESULTS])
        return DispatchResult(
            message=message,
            side_data={"available_promotions": [p.id for p in page.items]},
        )


class CouponsHandler(ActionHandler):
    codes = (ActionCode.SEARCH_COUPONS,)
    error_message = "Desculpe, ocorreu um erro ao buscar cupons. Tente novamente."
    error_wait_for_response = False

    async def handle(self, context: ActionContext) -> DispatchResult:
        page = await context.catalog.coupons(
            is_active=True, page=1, page_size=PAGE_SIZE, sort_by="endDate", sort_order="asc"
        )
        if not page.items:
            return DispatchResult(
                message="Não há cupons disponíveis no momento. Mas não se preocupe, sempre temos ótimas ofertas!",
            )
        message = "🎫 *Cupons disponíveis:*\n\n"
        message += "".join(format_coupon(c) for c in page.items[:MAX_RESULTS])
        return DispatchResult(
            message=message,
            side_data={"available_coupons": [c.id for c in page.items]},
        )
