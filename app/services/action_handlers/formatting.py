"""Text formatting shared by the handlers (pt-BR conventions)."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from app.schemas.catalog import DiscountType, OrderStatus, PaymentStatus

Number = Union[Decimal, float, int]

ORDER_STATUS_EMOJI = {
    OrderStatus.PENDING: "⏳",
    OrderStatus.IN_PRODUCTION: "👨‍🍳",
    OrderStatus.COMPLETED: "✅",
    OrderStatus.CANCELLED: "❌",
}

PAYMENT_STATUS_EMOJI = {
    PaymentStatus.PENDING: "⏳",
    PaymentStatus.PAID: "✅",
    PaymentStatus.FAILED: "❌",
    PaymentStatus.REFUNDED: "↩️",
}

CUISINE_EMOJI = {
    "italiana": "🍕",
    "japonesa": "🍜",
    "brasileira": "🥘",
    "mexicana": "🌮",
    "americana": "🍔",
    "árabe": "🥙",
    "indiana": "🍛",
    "chinesa": "🥡",
    "sushi": "🍣",
    "churrasco": "🍖",
    "vegetariana": "🥗",
    "vegana": "🌱",
    "pizza": "🍕",
    "hambúrguer": "🍔",
    "sashimi": "🍣",
    "temaki": "🍣",
    "sobremesa": "🍰",
    "bebida": "🥤",
    "café": "☕",
}

DEFAULT_CUISINE_EMOJI = "🍽️"


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_currency(value: Number) -> str:
    """``12.5`` -> ``R$ 12.50``."""
    amount = _to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"R$ {amount}"


def format_percentage(value: Number) -> str:
    """``10.00`` -> ``10%``, ``12.5`` -> ``12.5%``."""
    amount = _to_decimal(value)
    if amount == amount.to_integral_value():
        return f"{amount.to_integral_value()}%"
    return f"{amount.normalize():f}%"


def format_discount(discount_type: DiscountType, value: Number) -> str:
    if discount_type == DiscountType.PERCENTAGE:
        return format_percentage(value)
    return format_currency(value)


def format_date(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def format_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else ""


def order_status_emoji(status: OrderStatus) -> str:
    return ORDER_STATUS_EMOJI.get(status, "📋")


def payment_status_emoji(status: PaymentStatus) -> str:
    return PAYMENT_STATUS_EMOJI.get(status, "💳")


def cuisine_emoji(name: str) -> str:
    return CUISINE_EMOJI.get((name or "").strip().lower(), DEFAULT_CUISINE_EMOJI)


def short_id(value: str, length: int = 8) -> str:
    return value[:length]
