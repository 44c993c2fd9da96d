"""Menu, menu group and product models.

Stored models convert to and from DynamoDB items. DynamoDB returns every
number as a Decimal, so integer fields are coerced back with int().
Request models describe the shape of incoming create requests; business
rules (price checks, reference checks) are enforced by the services.
Prices and request integers are bounded to what DynamoDB stores exactly.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

# DynamoDB numbers hold at most 38 significant digits
PRICE_MAX_DIGITS = 38
PRICE_DECIMAL_PLACES = 2
MAX_STORED_INTEGER = 10**38 - 1


class Product(BaseModel):
    """A sellable unit with a price."""

    id: int | None = Field(None, description="Product identifier, assigned on save")
    name: str = Field(..., description="Product name", min_length=1)
    price: Decimal = Field(
        ...,
        description="Product price",
        ge=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        return {
            "product_id": self.id,
            "name": self.name,
            "price": self.price,
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Product":
        """Create Product from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Product: Parsed model instance
        """
        return cls(
            id=int(item["product_id"]),
            name=item["name"],
            price=Decimal(item["price"]),
        )


class MenuGroup(BaseModel):
    """A named category that menus belong to."""

    id: int | None = Field(None, description="Menu group identifier, assigned on save")
    name: str = Field(..., description="Menu group name", min_length=1)

    def to_dynamodb_item(self) -> dict[str, Any]:
        return {"menu_group_id": self.id, "name": self.name}

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuGroup":
        return cls(id=int(item["menu_group_id"]), name=item["name"])


class MenuItem(BaseModel):
    """Association of a product and a quantity within one menu."""

    id: int | None = Field(None, description="Menu item identifier, assigned on save")
    menu_id: int | None = Field(None, description="Menu this item belongs to")
    product_id: int = Field(..., description="Product referenced by this item")
    quantity: int = Field(..., description="Number of product units in the menu", gt=0)

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        return {
            "menu_item_id": self.id,
            "menu_id": self.menu_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=int(item["menu_item_id"]),
            menu_id=int(item["menu_id"]),
            product_id=int(item["product_id"]),
            quantity=int(item["quantity"]),
        )


class Menu(BaseModel):
    """A sellable combination of products at a fixed price.

    Items are kept in insertion order. The menu row itself is stored without
    its items; repositories attach them when reading.
    """

    id: int | None = Field(None, description="Menu identifier, assigned on save")
    name: str = Field(..., description="Menu name", min_length=1)
    price: Decimal = Field(
        ...,
        description="Menu price",
        ge=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    menu_group_id: int = Field(..., description="Menu group this menu belongs to")
    items: list[MenuItem] = Field(default_factory=list, description="Menu items in order")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert the menu row (without items) to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        return {
            "menu_id": self.id,
            "name": self.name,
            "price": self.price,
            "menu_group_id": self.menu_group_id,
        }

    @classmethod
    def from_dynamodb_item(
        cls, item: dict[str, Any], items: list[MenuItem] | None = None
    ) -> "Menu":
        """Create Menu from a DynamoDB item and its already-parsed items.

        Args:
            item: DynamoDB item dictionary for the menu row
            items: Menu items belonging to this menu

        Returns:
            Menu: Parsed model instance
        """
        return cls(
            id=int(item["menu_id"]),
            name=item["name"],
            price=Decimal(item["price"]),
            menu_group_id=int(item["menu_group_id"]),
            items=items or [],
        )


class ProductCreateRequest(BaseModel):
    """Request body for creating a product."""

    name: str = Field(..., min_length=1)
    price: Decimal | None = Field(
        None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )


class MenuGroupCreateRequest(BaseModel):
    """Request body for creating a menu group."""

    name: str = Field(..., min_length=1)


class MenuItemRequest(BaseModel):
    """One line of a menu creation request."""

    product_id: int = Field(..., le=MAX_STORED_INTEGER)
    quantity: int = Field(..., gt=0, le=MAX_STORED_INTEGER)


class MenuCreateRequest(BaseModel):
    """Request body for creating a menu.

    Price is optional here so that a missing or negative price is reported
    by MenuService as an InvalidArgumentError rather than a schema error.
    """

    name: str = Field(..., min_length=1)
    price: Decimal | None = Field(
        None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    menu_group_id: int = Field(..., le=MAX_STORED_INTEGER)
    items: list[MenuItemRequest] = Field(..., min_length=1)
