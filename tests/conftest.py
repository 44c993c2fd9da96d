"""Shared pytest fixtures and configuration for all tests."""

import os
from decimal import Decimal

import pytest

# main.py skips application wiring in test mode
os.environ.setdefault("ENVIRONMENT", "test")

from kitchenpos.models.menu_models import (  # noqa: E402
    MenuCreateRequest,
    MenuItemRequest,
    Product,
)


@pytest.fixture
def mango() -> Product:
    """Fixture providing a stored 1000 won mango product."""
    return Product(id=1, name="mango", price=Decimal("1000"))


@pytest.fixture
def chicken() -> Product:
    """Fixture providing a stored 15000 won chicken product."""
    return Product(id=2, name="chicken", price=Decimal("15000"))


@pytest.fixture
def mango_chicken_request() -> MenuCreateRequest:
    """Fixture providing a 17000 won menu of two mangoes and one chicken."""
    return MenuCreateRequest(
        name="mango chicken",
        price=Decimal("17000"),
        menu_group_id=1,
        items=[
            MenuItemRequest(product_id=1, quantity=2),
            MenuItemRequest(product_id=2, quantity=1),
        ],
    )
