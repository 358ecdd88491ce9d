"""In-memory collaborators for the pipeline."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

import pytest

from app.schemas.catalog import Category, Company, Coupon, MenuItem, Order, Page, Promotion, Tag


def page_of(items: list[Any]) -> Page:
    return Page(items=items, total_count=len(items), page_number=1, page_size=max(len(items), 1))


class FakeCatalog:
    """Returns the configured items and records every query it receives."""

    def __init__(
        self,
        companies: Optional[list[Company]] = None,
        categories: Optional[list[Category]] = None,
        promotions: Optional[list[Promotion]] = None,
        coupons: Optional[list[Coupon]] = None,
        menu_items: Optional[list[MenuItem]] = None,
        tags: Optional[list[Tag]] = None,
        orders: Optional[list[Order]] = None,
    ) -> None:
        self.companies_data = companies or []
        self.categories_data = categories or []
        self.promotions_data = promotions or []
        self.coupons_data = coupons or []
        self.menu_items_data = menu_items or []
        self.tags_data = tags or []
        self.orders_data = orders or []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def called(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for call, kwargs in self.calls if call == name]

    async def companies_within_radius(self, latitude: float, longitude: float, radius_km: float):
        self.calls.append(
            ("companies_within_radius", {"latitude": latitude, "longitude": longitude, "radius_km": radius_km})
        )
        return page_of(self.companies_data)

    async def categories(self, is_active=True, page=1, page_size=20, sort_by="name", sort_order="asc"):
        self.calls.append(
            ("categories", {"is_active": is_active, "page": page, "page_size": page_size, "sort_by": sort_by, "sort_order": sort_order})
        )
        return page_of(self.categories_data)

    async def promotions(self, is_active=True, page=1, page_size=10, sort_by="enddate", sort_order="asc"):
        self.calls.append(
            ("promotions", {"is_active": is_active, "page": page, "page_size": page_size, "sort_by": sort_by, "sort_order": sort_order})
        )
        return page_of(self.promotions_data)

    async def coupons(self, is_active=True, page=1, page_size=10, sort_by="endDate", sort_order="asc"):
        self.calls.append(
            ("coupons", {"is_active": is_active, "page": page, "page_size": page_size, "sort_by": sort_by, "sort_order": sort_order})
        )
        return page_of(self.coupons_data)

    async def menu_items(
        self,
        category_ids: Optional[Sequence[str]] = None,
        is_available=True,
        page=1,
        page_size=15,
        sort_by="name",
        sort_order="asc",
    ):
        self.calls.append(
            ("menu_items", {"category_ids": category_ids, "is_available": is_available, "page": page, "page_size": page_size})
        )
        return page_of(self.menu_items_data)

    async def tags(self, name=None, page=1, page_size=20, sort_by="name", sort_order="asc"):
        self.calls.append(("tags", {"name": name, "page": page, "page_size": page_size}))
        return page_of(self.tags_data)

    async def orders(
        self,
        customer_phone_number: str,
        status=None,
        page=1,
        page_size=5,
        sort_by="createdAt",
        sort_order="desc",
    ):
        self.calls.append(
            (
                "orders",
                {
                    "customer_phone_number": customer_phone_number,
                    "status": status,
                    "page": page,
                    "page_size": page_size,
                    "sort_by": sort_by,
                    "sort_order": sort_order,
                },
            )
        )
        return page_of(self.orders_data)


class FakeChatModel:
    """Returns ``payload`` (or raises ``error``) and counts calls."""

    def __init__(self, payload: Any = None, error: Optional[BaseException] = None, delay: float = 0) -> None:
        self.payload = payload if payload is not None else {}
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []
        self.output_types: list[type] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str, output_type: type) -> dict[str, Any]:
        self.prompts.append(prompt)
        self.output_types.append(output_type)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


class ForbiddenChatModel:
    """Fails the test when the pipeline reaches the language model."""

    async def complete(self, prompt: str, output_type: type) -> dict[str, Any]:
        pytest.fail(f"Chat model must not be called (prompt: {prompt[:60]!r})")
