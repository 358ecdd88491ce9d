"""The customer's own orders, looked up by phone number."""

from __future__ import annotations

from app.core.action_codes import ActionCode
from app.schemas.catalog import OrderStatus
from app.schemas.intent import DispatchResult
from app.services.action_handlers.base import ActionContext, ActionHandler
from app.services.action_handlers.formatting import (
    format_currency,
    format_datetime,
    order_status_emoji,
    payment_status_emoji,
    short_id,
)

RECENT_ORDERS_PAGE_SIZE = 5
CANCELABLE_ORDERS_PAGE_SIZE = 3


class OrderStatusHandler(ActionHandler):
    codes = (ActionCode.CHECK_ORDER_STATUS,)
    error_message = (
        "Desculpe, ocorreu um erro ao verificar o status do seu pedido. Tente novamente."
    )

    async def handle(self, context: ActionContext) -> DispatchResult:
        phone_number = context.phone_number
        page = await context.catalog.orders(
            customer_phone_number=phone_number,
            page=1,
            page_size=RECENT_ORDERS_PAGE_SIZE,
            sort_by="createdAt",
            sort_order="desc",
        )
        if not page.items:
            return DispatchResult(
                message=(
                    f"📋 Não encontrei pedidos para o número {phone_number}. "
                    "Você tem certeza que este é o número correto ou quer fazer um novo pedido?"
                ),
                wait_for_response=True,
            )

        message = "📋 *Seus pedidos recentes:*\n\n"
        for order in page.items:
            message += f"🆔 *Pedido #{short_id(order.id)}*\n"
            message += f"📅 {format_datetime(order.created_at)}\n"
            message += f"💰 {format_currency(order.total_amount)}\n"
            message += f"📊 Status: {order_status_emoji(order.status)} {order.status.value}\n"
            message += (
                f"💳 Pagamento: {payment_status_emoji(order.payment_status)} "
                f"{order.payment_status.value}\n\n"
            )
        return DispatchResult(
            message=message,
            wait_for_response=True,
            side_data={"recent_orders": [order.id for order in page.items]},
        )


class CancelOrderHandler(ActionHandler):
    codes = (ActionCode.CANCEL_ORDER,)
    error_message = "Desculpe, ocorreu um erro ao buscar seus pedidos. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        phone_number = context.phone_number
        page = await context.catalog.orders(
            customer_phone_number=phone_number,
            status=OrderStatus.PENDING.value,
            page=1,
            page_size=CANCELABLE_ORDERS_PAGE_SIZE,
            sort_by="createdAt",
            sort_order="desc",
        )
        if not page.items:
            return DispatchResult(
                message=f"❌ Não há pedidos pendentes para cancelar no número {phone_number}.",
                wait_for_response=False,
            )

        message = "❌ *Pedidos que podem ser cancelados:*\n\n"
        for order in page.items:
            message += f"🆔 *Pedido #{short_id(order.id)}*\n"
            message += f"📅 {format_datetime(order.created_at)}\n"
            message += f"💰 {format_currency(order.total_amount)}\n"
            message += f"📊 Status: {order.status.value}\n\n"
        message += "Digite o número do pedido que deseja cancelar:"
        return DispatchResult(
            message=message,
            wait_for_response=True,
            side_data={"cancelable_orders": [order.id for order in page.items]},
        )
