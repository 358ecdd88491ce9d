"""Read-only catalog queries (companies, categories, promotions, coupons, menu, tags, orders)."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Protocol, Sequence, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from app.config import get_settings
from app.exceptions import CatalogUnavailableError
from app.infra.logging_config import get_logger
from app.schemas.catalog import (
    Category,
    Company,
    Coupon,
    MenuItem,
    Order,
    Page,
    Promotion,
    Tag,
)

logger = get_logger("catalog")

ModelT = TypeVar("ModelT", bound=BaseModel)

COMPANIES_NEARBY_PATH = "/company/nearby"
CATEGORIES_PATH = "/category"
PROMOTIONS_PATH = "/promotion"
COUPONS_PATH = "/coupon"
MENU_ITEMS_PATH = "/menu"
TAGS_PATH = "/tag"
ORDERS_PATH = "/order"


class CatalogQueryFacade(Protocol):
    async def companies_within_radius(
        self, latitude: float, longitude: float, radius_km: float
    ) -> Page[Company]: ...

    async def categories(
        self,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: int = 20,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[Category]: ...

    async def promotions(
        self,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "enddate",
        sort_order: str = "asc",
    ) -> Page[Promotion]: ...

    async def coupons(
        self,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "endDate",
        sort_order: str = "asc",
    ) -> Page[Coupon]: ...

    async def menu_items(
        self,
        category_ids: Optional[Sequence[str]] = None,
        is_available: Optional[bool] = True,
        page: int = 1,
        page_size: int = 15,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[MenuItem]: ...

    async def tags(
        self,
        name: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[Tag]: ...

    async def orders(
        self,
        customer_phone_number: str,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 5,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Page[Order]: ...


def _page_params(page: int, page_size: int, sort_by: str, sort_order: str) -> dict[str, Any]:
    return {
        "pageNumber": page,
        "pageSize": page_size,
        "sortBy": sort_by,
        "sortOrder": sort_order,
    }


def _query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Drop unset filters and render booleans the way the API expects them."""
    rendered: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        rendered[key] = str(value).lower() if isinstance(value, bool) else value
    return rendered


def parse_page(payload: Any, item_model: type[ModelT]) -> Page[ModelT]:
    """
    Parse a paged payload (``items``/``totalCount``/``pageNumber``/``pageSize``).
    A bare JSON list is accepted as a single page.
    """
    if isinstance(payload, list):
        payload = {
            "items": payload,
            "totalCount": len(payload),
            "pageNumber": 1,
            "pageSize": len(payload),
        }
    if not isinstance(payload, dict):
        raise CatalogUnavailableError(
            f"Unexpected catalog payload type: {type(payload).__name__}"
        )
    try:
        return Page[item_model].model_validate(payload)
    except ValidationError as e:
        raise CatalogUnavailableError(f"Invalid catalog payload: {e}") from e


class HttpCatalogFacade:
    """Catalog queries over the platform's REST API, using ``requests`` off the event loop."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.catalog_api_url).rstrip("/")
        self._token = token if token is not None else settings.catalog_api_token
        self._timeout = timeout_seconds or settings.catalog_timeout_seconds

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("Catalog query %s params=%s", url, params)
        try:
            resp = requests.get(
                url,
                params=_query_params(params),
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise CatalogUnavailableError(f"Catalog request to {path} failed: {e}") from e

        if resp.status_code != 200:
            raise CatalogUnavailableError(
                f"HTTP {resp.status_code}: {resp.text[:500] if resp.text else 'no body'}"
            )
        try:
            return resp.json()
        except ValueError as e:
            raise CatalogUnavailableError(f"Invalid JSON: {e}") from e

    async def _query(
        self, path: str, params: dict[str, Any], item_model: type[ModelT]
    ) -> Page[ModelT]:
        payload = await asyncio.to_thread(self._get, path, params)
        return parse_page(payload, item_model)

    async def companies_within_radius(
        self, latitude: float, longitude: float, radius_km: float
    ) -> Page[Company]:
        params = {"latitude": latitude, "longitude": longitude, "radiusKm": radius_km}
        return await self._query(COMPANIES_NEARBY_PATH, params, Company)

    async def categories(
        self,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: int = 20,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[Category]:
        params = {"isActive": is_active, **_page_params(page, page_size, sort_by, sort_order)}
        return await self._query(CATEGORIES_PATH, params, Category)

    async def promotions(
        self,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "enddate",
        sort_order: str = "asc",
    ) -> Page[Promotion]:
        params = {"isActive": is_active, **_page_params(page, page_size, sort_by, sort_order)}
        return await self._query(PROMOTIONS_PATH, params, Promotion)

    async def coupons(
        self,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "endDate",
        sort_order: str = "asc",
    ) -> Page[Coupon]:
        params = {"isActive": is_active, **_page_params(page, page_size, sort_by, sort_order)}
        return await self._query(COUPONS_PATH, params, Coupon)

    async def menu_items(
        self,
        category_ids: Optional[Sequence[str]] = None,
        is_available: Optional[bool] = True,
        page: int = 1,
        page_size: int = 15,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[MenuItem]:
        params = {
            "categoryIds": list(category_ids) if category_ids else None,
            "isAvailable": is_available,
            **_page_params(page, page_size, sort_by, sort_order),
        }
        return await self._query(MENU_ITEMS_PATH, params, MenuItem)

    async def tags(
        self,
        name: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[Tag]:
        params = {"name": name, **_page_params(page, page_size, sort_by, sort_order)}
        return await self._query(TAGS_PATH, params, Tag)

    async def orders(
        self,
        customer_phone_number: str,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 5,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Page[Order]:
        params = {
            "customerPhoneNumber": customer_phone_number,
            "status": status,
            **_page_params(page, page_size, sort_by, sort_order),
        }
        return await self._query(ORDERS_PATH, params, Order)
