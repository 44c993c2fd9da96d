"""Menu service: validates menu creation requests and persists menus."""

import logging
from decimal import MAX_PREC, Decimal, localcontext
from typing import NoReturn

from kitchenpos.exceptions import InvalidArgumentError
from kitchenpos.models.menu_models import Menu, MenuCreateRequest, MenuItem
from kitchenpos.observability.decorators import traced
from kitchenpos.observability.metrics import record_menu_created, record_menu_rejected
from kitchenpos.repositories.base import MenuGroupLookup, MenuPersistence, ProductLookup

logger = logging.getLogger(__name__)


class MenuService:
    """Service for creating and listing menus.

    A menu is accepted only when its price is non-negative, its menu group
    exists, every item references an existing product, and its price equals
    the sum of ``product.price * quantity`` over its items. All checks run
    before anything is written; the menu and its items are then written in
    one transaction.
    """

    def __init__(
        self,
        menu_repository: MenuPersistence,
        menu_group_lookup: MenuGroupLookup,
        product_lookup: ProductLookup,
    ) -> None:
        """Initialize the MenuService.

        Args:
            menu_repository: Storage for menus and menu items
            menu_group_lookup: Existence check for menu groups
            product_lookup: Product lookup by id
        """
        self.menu_repository = menu_repository
        self.menu_group_lookup = menu_group_lookup
        self.product_lookup = product_lookup

    @traced("menu.create")
    def create(self, request: MenuCreateRequest) -> Menu:
        """Validate and persist a new menu.

        Validation stops at the first failing check:
        1. Price is present and non-negative
        2. Menu group exists
        3. Every item's product exists (first missing product wins)
        4. Price equals the exact Decimal sum of the items

        Args:
            request: The menu to create

        Returns:
            The stored menu with ids assigned to it and to each item

        Raises:
            InvalidArgumentError: If any check fails (nothing is written)
            PersistenceError: If storage fails (nothing is written)
        """
        if request.price is None or request.price < 0:
            self._reject("negative_price", f"Menu price must be zero or more, got {request.price}")

        if not self.menu_group_lookup.exists_by_id(request.menu_group_id):
            self._reject("unknown_menu_group", f"Menu group {request.menu_group_id} does not exist")

        total = Decimal(0)
        for item in request.items:
            product = self.product_lookup.find_by_id(item.product_id)
            if product is None:
                self._reject("unknown_product", f"Product {item.product_id} does not exist")
            # Unbounded precision so the sum is never rounded
            with localcontext() as ctx:
                ctx.prec = MAX_PREC
                total += product.price * item.quantity

        if request.price != total:
            self._reject(
                "price_mismatch",
                f"Menu price {request.price} does not match item total {total}",
            )

        with self.menu_repository.transaction():
            menu = self.menu_repository.save(
                Menu(
                    name=request.name,
                    price=request.price,
                    menu_group_id=request.menu_group_id,
                )
            )
            items = [
                self.menu_repository.save_item(
                    MenuItem(menu_id=menu.id, product_id=item.product_id, quantity=item.quantity)
                )
                for item in request.items
            ]

        record_menu_created(request.menu_group_id, len(items))
        logger.info(f"Created menu {menu.id} '{menu.name}' with {len(items)} items")
        return menu.model_copy(update={"items": items})

    @traced("menu.list")
    def list(self) -> list[Menu]:
        """List all menus with their items, in insertion order.

        Returns:
            List of menus, empty list if none exist
        """
        return self.menu_repository.find_all()

    def _reject(self, reason: str, message: str) -> NoReturn:
        record_menu_rejected(reason)
        logger.warning(f"Rejected menu: {message}")
        raise InvalidArgumentError(message, reason=reason)
