"""Unit tests for menu, menu group and product models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from kitchenpos.models.menu_models import (
    MAX_STORED_INTEGER,
    Menu,
    MenuCreateRequest,
    MenuGroup,
    MenuItem,
    MenuItemRequest,
    Product,
)


@pytest.mark.unit
class TestProduct:
    """Test suite for Product model."""

    def test_negative_price_is_invalid(self) -> None:
        """Test that a stored product cannot have a negative price."""
        with pytest.raises(ValidationError):
            Product(name="mango", price=Decimal("-1"))

    def test_empty_name_is_invalid(self) -> None:
        """Test that a product needs a name."""
        with pytest.raises(ValidationError):
            Product(name="", price=Decimal("1000"))

    @pytest.mark.parametrize(
        "price",
        [Decimal("1" * 38 + ".5"), Decimal("1000.005"), Decimal("1E+40")],
    )
    def test_price_beyond_storable_digits_is_invalid(self, price: Decimal) -> None:
        """Test that prices DynamoDB cannot hold exactly are rejected."""
        with pytest.raises(ValidationError):
            Product(name="mango", price=price)

    def test_long_price_is_kept_exactly(self) -> None:
        """Test that a 29 digit price is accepted unchanged."""
        product = Product(name="caviar", price=Decimal("1234567890123456789012345678.9"))

        assert product.price == Decimal("1234567890123456789012345678.9")

    def test_to_dynamodb_item(self) -> None:
        """Test converting a product to a DynamoDB item."""
        product = Product(id=1, name="mango", price=Decimal("1000.50"))

        assert product.to_dynamodb_item() == {
            "product_id": 1,
            "name": "mango",
            "price": Decimal("1000.50"),
        }

    def test_from_dynamodb_item_converts_numbers(self) -> None:
        """Test that DynamoDB Decimal numbers are parsed back to int ids."""
        product = Product.from_dynamodb_item(
            {"product_id": Decimal("7"), "name": "mango", "price": Decimal("1000")}
        )

        assert product.id == 7
        assert isinstance(product.id, int)
        assert product.price == Decimal("1000")


@pytest.mark.unit
class TestMenuGroup:
    """Test suite for MenuGroup model."""

    def test_dynamodb_item_conversion(self) -> None:
        """Test converting a menu group to and from a DynamoDB item."""
        item = MenuGroup(id=2, name="new menus").to_dynamodb_item()

        assert item == {"menu_group_id": 2, "name": "new menus"}
        assert MenuGroup.from_dynamodb_item(
            {"menu_group_id": Decimal("2"), "name": "new menus"}
        ) == MenuGroup(id=2, name="new menus")


@pytest.mark.unit
class TestMenuItem:
    """Test suite for MenuItem model."""

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity: int) -> None:
        """Test that zero or negative quantities are invalid."""
        with pytest.raises(ValidationError):
            MenuItem(product_id=1, quantity=quantity)

    def test_from_dynamodb_item(self) -> None:
        """Test parsing a menu item row."""
        item = MenuItem.from_dynamodb_item(
            {
                "menu_item_id": Decimal("5"),
                "menu_id": Decimal("3"),
                "product_id": Decimal("1"),
                "quantity": Decimal("2"),
            }
        )

        assert item == MenuItem(id=5, menu_id=3, product_id=1, quantity=2)


@pytest.mark.unit
class TestMenu:
    """Test suite for Menu model."""

    def test_items_default_to_empty(self) -> None:
        """Test that a menu can be built without items."""
        menu = Menu(name="mango chicken", price=Decimal("17000"), menu_group_id=1)

        assert menu.items == []
        assert menu.id is None

    def test_to_dynamodb_item_excludes_items(self) -> None:
        """Test that the menu row does not embed its items."""
        menu = Menu(
            id=1,
            name="mango chicken",
            price=Decimal("17000"),
            menu_group_id=1,
            items=[MenuItem(id=1, menu_id=1, product_id=1, quantity=2)],
        )

        assert menu.to_dynamodb_item() == {
            "menu_id": 1,
            "name": "mango chicken",
            "price": Decimal("17000"),
            "menu_group_id": 1,
        }

    def test_from_dynamodb_item_attaches_items(self) -> None:
        """Test parsing a menu row together with its items."""
        items = [MenuItem(id=1, menu_id=1, product_id=1, quantity=2)]

        menu = Menu.from_dynamodb_item(
            {
                "menu_id": Decimal("1"),
                "name": "mango chicken",
                "price": Decimal("17000"),
                "menu_group_id": Decimal("1"),
            },
            items,
        )

        assert menu.id == 1
        assert menu.menu_group_id == 1
        assert menu.items == items


@pytest.mark.unit
class TestMenuCreateRequest:
    """Test suite for MenuCreateRequest model."""

    def test_items_are_required(self) -> None:
        """Test that a menu request needs at least one item."""
        with pytest.raises(ValidationError):
            MenuCreateRequest(name="empty", price=Decimal(0), menu_group_id=1, items=[])

    def test_price_may_be_omitted(self) -> None:
        """Test that price is optional at the schema level."""
        request = MenuCreateRequest(
            name="mango",
            menu_group_id=1,
            items=[MenuItemRequest(product_id=1, quantity=1)],
        )

        assert request.price is None

    def test_negative_price_passes_schema(self) -> None:
        """Test that a negative price is left for the service to reject."""
        request = MenuCreateRequest(
            name="mango",
            price=Decimal("-1"),
            menu_group_id=1,
            items=[MenuItemRequest(product_id=1, quantity=1)],
        )

        assert request.price == Decimal("-1")

    def test_price_beyond_storable_digits_is_invalid(self) -> None:
        """Test that a request price with too many digits fails schema validation."""
        with pytest.raises(ValidationError):
            MenuCreateRequest(
                name="mango",
                price=Decimal("1" * 39),
                menu_group_id=1,
                items=[MenuItemRequest(product_id=1, quantity=1)],
            )

    def test_quantity_beyond_storable_digits_is_invalid(self) -> None:
        """Test that item quantities are bounded to what DynamoDB can store."""
        with pytest.raises(ValidationError):
            MenuItemRequest(product_id=1, quantity=MAX_STORED_INTEGER + 1)

    def test_parses_json_numbers_as_decimal(self) -> None:
        """Test that JSON prices are parsed exactly."""
        request = MenuCreateRequest.model_validate_json(
            '{"name": "gum", "price": "0.30", "menu_group_id": 1,'
            ' "items": [{"product_id": 1, "quantity": 3}]}'
        )

        assert request.price == Decimal("0.30")
