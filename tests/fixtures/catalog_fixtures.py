"""Fixtures for catalog entities and the fake catalog."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.schemas.catalog import (
    Address,
    Category,
    Company,
    Coupon,
    DiscountType,
    MenuItem,
    Order,
    OrderStatus,
    PaymentStatus,
    Promotion,
    Tag,
)
from tests.fixtures.fakes import FakeCatalog


@pytest.fixture(scope="function")
def make_company(faker):
    def _make(**overrides) -> Company:
        data = {
            "id": faker.uuid4(),
            "name": faker.company(),
            "phone_number": faker.msisdn(),
            "slogan": faker.catch_phrase(),
            "address": Address(
                street=faker.street_name(),
                number=faker.building_number(),
                neighborhood=faker.city_suffix(),
                city=faker.city(),
            ),
        }
        data.update(overrides)
        return Company(**data)

    return _make


@pytest.fixture(scope="function")
def setup_categories(faker):
    return [
        Category(id=faker.uuid4(), name="Bebidas", description="Sucos e refrigerantes"),
        Category(id=faker.uuid4(), name="Lanches", description=None),
    ]


@pytest.fixture(scope="function")
def setup_promotions(faker):
    return [
        Promotion(
            id=faker.uuid4(),
            name="Semana da Pizza",
            description="Pizzas grandes com desconto",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("15.00"),
            min_order_value=Decimal("40"),
            end_date=datetime(2026, 11, 30, tzinfo=timezone.utc),
        )
    ]


@pytest.fixture(scope="function")
def setup_coupons(faker):
    return [
        Coupon(
            id=faker.uuid4(),
            code="BEMVINDO10",
            discount_type=DiscountType.FIXED_AMOUNT,
            discount_value=Decimal("10"),
            min_order_value=Decimal("0"),
            end_date=datetime(2026, 12, 31, tzinfo=timezone.utc),
        )
    ]


@pytest.fixture(scope="function")
def setup_menu_items(faker):
    return [
        MenuItem(
            id=faker.uuid4(),
            name="X-Burger",
            description="Pão, carne e queijo",
            price=Decimal("25.9"),
            tags=[Tag(id=faker.uuid4(), name="Americana")],
        )
    ]


@pytest.fixture(scope="function")
def setup_orders():
    return [
        Order(
            id="a1b2c3d4e5f6",
            created_at=datetime(2026, 10, 1, 19, 30, tzinfo=timezone.utc),
            total_amount=Decimal("58.4"),
            status=OrderStatus.IN_PRODUCTION,
            payment_status=PaymentStatus.PAID,
        )
    ]


@pytest.fixture(scope="function")
def fake_catalog():
    return FakeCatalog()
