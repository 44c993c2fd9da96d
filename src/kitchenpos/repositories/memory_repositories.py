"""In-memory repositories.

Used when STORAGE_BACKEND=memory (local development without DynamoDB) and
as fakes in tests. Rows are kept in insertion order; identifiers come from
per-repository counters starting at 1.
"""

import itertools
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from kitchenpos.exceptions import PersistenceError
from kitchenpos.models.menu_models import Menu, MenuGroup, MenuItem, Product
from kitchenpos.repositories.base import (
    MenuGroupRepository,
    MenuPersistence,
    ProductRepository,
    group_items_by_menu,
)

logger = logging.getLogger(__name__)


class InMemoryProductRepository(ProductRepository):
    """Product storage backed by a dict keyed by product id."""

    def __init__(self) -> None:
        self._products: dict[int, Product] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, product: Product) -> Product:
        with self._lock:
            saved = product.model_copy(update={"id": next(self._ids)})
            self._products[saved.id] = saved  # type: ignore[index]
        return saved

    def find_by_id(self, product_id: int) -> Product | None:
        return self._products.get(product_id)

    def find_all(self) -> list[Product]:
        return list(self._products.values())


class InMemoryMenuGroupRepository(MenuGroupRepository):
    """Menu group storage backed by a dict keyed by menu group id."""

    def __init__(self) -> None:
        self._menu_groups: dict[int, MenuGroup] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, menu_group: MenuGroup) -> MenuGroup:
        with self._lock:
            saved = menu_group.model_copy(update={"id": next(self._ids)})
            self._menu_groups[saved.id] = saved  # type: ignore[index]
        return saved

    def exists_by_id(self, menu_group_id: int) -> bool:
        return menu_group_id in self._menu_groups

    def find_all(self) -> list[MenuGroup]:
        return list(self._menu_groups.values())


class InMemoryMenuRepository(MenuPersistence):
    """Menu storage with buffered, all-or-nothing transactions.

    Outside a transaction every save is applied immediately. Inside one,
    saves are staged in a per-thread buffer and applied together on commit.
    """

    def __init__(self) -> None:
        self._menus: dict[int, Menu] = {}
        self._items: dict[int, MenuItem] = {}
        self._menu_ids = itertools.count(1)
        self._item_ids = itertools.count(1)
        self._lock = threading.Lock()
        self._local = threading.local()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Buffer writes and apply them together when the block succeeds.

        Raises:
            PersistenceError: If a transaction is already open on this thread
        """
        if self._pending() is not None:
            raise PersistenceError("Nested menu transactions are not supported")

        self._local.pending = []
        try:
            yield
            self._apply(self._local.pending)
        finally:
            self._local.pending = None

    def save(self, menu: Menu) -> Menu:
        with self._lock:
            saved = menu.model_copy(update={"id": next(self._menu_ids), "items": []})
        self._write(saved)
        return saved

    def save_item(self, item: MenuItem) -> MenuItem:
        with self._lock:
            saved = item.model_copy(update={"id": next(self._item_ids)})
        self._write(saved)
        return saved

    def find_all(self) -> list[Menu]:
        with self._lock:
            menus = list(self._menus.values())
            items = list(self._items.values())

        grouped = group_items_by_menu(items)
        return [
            menu.model_copy(update={"items": grouped.get(menu.id, [])})  # type: ignore[arg-type]
            for menu in sorted(menus, key=lambda m: m.id or 0)
        ]

    def _pending(self) -> list[Menu | MenuItem] | None:
        return getattr(self._local, "pending", None)

    def _write(self, row: Menu | MenuItem) -> None:
        pending = self._pending()
        if pending is not None:
            pending.append(row)
        else:
            self._apply([row])

    def _apply(self, rows: list[Menu | MenuItem]) -> None:
        with self._lock:
            for row in rows:
                if isinstance(row, Menu):
                    self._menus[row.id] = row  # type: ignore[index]
                else:
                    self._items[row.id] = row  # type: ignore[index]
        logger.debug(f"Committed {len(rows)} menu rows")
