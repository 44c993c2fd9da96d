"""Storage interfaces used by the kitchenpos services.

Services depend only on these narrow interfaces; main.py wires in either the
DynamoDB or the in-memory implementation. Lookups follow a simple
return-value convention for expected misses (None/False), while storage
failures raise PersistenceError.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from kitchenpos.models.menu_models import Menu, MenuGroup, MenuItem, Product


class ProductLookup(ABC):
    """Read access to products by identifier."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product | None:
        """Fetch a product.

        Args:
            product_id: Product identifier

        Returns:
            Product if found, None otherwise

        Raises:
            PersistenceError: If the store cannot be read
        """


class MenuGroupLookup(ABC):
    """Existence checks for menu groups."""

    @abstractmethod
    def exists_by_id(self, menu_group_id: int) -> bool:
        """Check whether a menu group exists.

        Args:
            menu_group_id: Menu group identifier

        Returns:
            bool: True if the menu group exists

        Raises:
            PersistenceError: If the store cannot be read
        """


class ProductRepository(ProductLookup):
    """Full product storage: lookup plus create and list."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Store a new product and return it with its assigned id."""

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return all products in insertion order."""


class MenuGroupRepository(MenuGroupLookup):
    """Full menu group storage: existence check plus create and list."""

    @abstractmethod
    def save(self, menu_group: MenuGroup) -> MenuGroup:
        """Store a new menu group and return it with its assigned id."""

    @abstractmethod
    def find_all(self) -> list[MenuGroup]:
        """Return all menu groups in insertion order."""


class MenuPersistence(ABC):
    """Storage for menus and their items.

    Writes issued inside ``transaction()`` are buffered and committed
    together when the block exits normally. If the block raises, nothing is
    written. Identifiers are assigned at save time, before commit, so an
    aborted transaction may leave gaps in the id sequence.
    """

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open an all-or-nothing write scope for the current thread.

        Raises:
            PersistenceError: If a transaction is already open or the commit fails
        """

    @abstractmethod
    def save(self, menu: Menu) -> Menu:
        """Store a menu row (items excluded) and return it with its assigned id."""

    @abstractmethod
    def save_item(self, item: MenuItem) -> MenuItem:
        """Store a menu item and return it with its assigned id."""

    @abstractmethod
    def find_all(self) -> list[Menu]:
        """Return all menus with their items, ordered by id."""


def group_items_by_menu(items: list[MenuItem]) -> dict[int, list[MenuItem]]:
    """Group menu items by their menu id, preserving item id order.

    Args:
        items: Menu items in any order

    Returns:
        dict: Mapping of menu id to its items sorted by item id
    """
    grouped: dict[int, list[MenuItem]] = {}
    for item in sorted(items, key=lambda i: i.id or 0):
        if item.menu_id is None:
            continue
        grouped.setdefault(item.menu_id, []).append(item)
    return grouped
