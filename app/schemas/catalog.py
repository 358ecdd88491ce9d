"""Read-only catalog views returned by the catalog API."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CatalogModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class DiscountType(str, Enum):
    PERCENTAGE = "Percentage"
    FIXED_AMOUNT = "FixedAmount"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    IN_PRODUCTION = "InProduction"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class Page(_CatalogModel, Generic[T]):
    """Paginated result wrapper."""

    items: list[T] = Field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages


class Address(_CatalogModel):
    street: Optional[str] = None
    number: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class Company(_CatalogModel):
    id: str
    name: str
    phone_number: Optional[str] = None
    slogan: Optional[str] = None
    address: Optional[Address] = None


class Category(_CatalogModel):
    id: str
    name: str
    description: Optional[str] = None


class Tag(_CatalogModel):
    id: str
    name: str
    description: Optional[str] = None


class MenuItem(_CatalogModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal = Decimal("0")
    tags: list[Tag] = Field(default_factory=list)


class Promotion(_CatalogModel):
    id: str
    name: str
    description: Optional[str] = None
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_value: Decimal = Decimal("0")
    min_order_value: Optional[Decimal] = None
    end_date: Optional[datetime] = None


class Coupon(_CatalogModel):
    id: str
    code: str
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_value: Decimal = Decimal("0")
    min_order_value: Decimal = Decimal("0")
    end_date: Optional[datetime] = None


class Order(_CatalogModel):
    id: str
    created_at: datetime
    total_amount: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
