"""
Pytest fixtures. Collaborators are replaced by the fakes in tests/fakes.py;
no network is touched by the test suite.
"""
from typing import List

import pytest

from app.domain.models.product import Product
from app.domain.models.shop import Order, OrderLine
from tests.fakes import FakeRedis


def _product(pid, name, category, price=10.0):
    return Product(
        product_id=pid,
        name=name,
        description=f"{name} description",
        price=price,
        image_url=f"https://img.example.com/{pid}.png",
        category=category,
    )


@pytest.fixture
def catalog() -> List[Product]:
    return [
        _product("p1", "Wireless Headphones", "Electronics", 179.99),
        _product("p2", "Bluetooth Speaker", "Electronics", 59.0),
        _product("p3", "USB-C Charger", "Electronics", 25.5),
        _product("p4", "HDMI Cable", "Electronics", 9.99),
        _product("p5", "Yoga Mat", "Fitness", 30.0),
        _product("p6", "Electric Kettle", "Kitchen", 45.0),
    ]


@pytest.fixture
def order_for_p1() -> Order:
    return Order(order_id="o1", user_id="u1", items=[OrderLine(product_id="p1", quantity=1, price=179.99)], total=179.99)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
