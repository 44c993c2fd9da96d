"""DynamoDB repository classes for kitchenpos models.

Each entity kind lives in its own table keyed by a numeric id. Ids come from
an atomic counter table (IdSequence). Expected misses are reported with
simple return values (None/False); ClientErrors are logged and re-raised as
PersistenceError so callers never mistake a storage outage for a miss.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from kitchenpos.exceptions import PersistenceError
from kitchenpos.models.menu_models import Menu, MenuGroup, MenuItem, Product
from kitchenpos.repositories.base import (
    MenuGroupRepository,
    MenuPersistence,
    ProductRepository,
    group_items_by_menu,
)

logger = logging.getLogger(__name__)

# DynamoDB limit on the number of actions in one TransactWriteItems call
MAX_TRANSACTION_ITEMS = 100


def scan_all(table: Table) -> list[dict[str, Any]]:
    """Read every item of a table, following scan pagination.

    Args:
        table: DynamoDB table to scan

    Returns:
        list: All raw items in the table
    """
    items: list[dict[str, Any]] = []
    scan_kwargs: dict[str, Any] = {}

    while True:
        response = table.scan(**scan_kwargs)
        items.extend(response.get("Items", []))

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        scan_kwargs["ExclusiveStartKey"] = last_key


class IdSequence:
    """Atomic integer id generator backed by a DynamoDB counter table.

    Each named sequence is a single item whose ``next_id`` attribute is
    incremented with an ADD update expression.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize sequence.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the counter table
        """
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def next_id(self, sequence_name: str) -> int:
        """Increment and return the named counter.

        Args:
            sequence_name: Counter name (e.g., 'menu')

        Returns:
            int: The newly reserved id

        Raises:
            PersistenceError: If the counter update fails
        """
        try:
            response = self.table.update_item(
                Key={"sequence_name": sequence_name},
                UpdateExpression="ADD next_id :one",
                ExpressionAttributeValues={":one": 1},
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as e:
            logger.error(f"Failed to reserve {sequence_name} id: {e}")
            raise PersistenceError(f"Failed to reserve {sequence_name} id") from e

        return int(response["Attributes"]["next_id"])


class DynamoDBProductRepository(ProductRepository):
    """Repository for products, keyed by product_id."""

    def __init__(
        self,
        dynamodb_resource: DynamoDBServiceResource,
        table_name: str,
        id_sequence: IdSequence,
    ) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the products table
            id_sequence: Id generator for new products
        """
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)
        self.id_sequence = id_sequence

    def save(self, product: Product) -> Product:
        saved = product.model_copy(update={"id": self.id_sequence.next_id("product")})
        try:
            self.table.put_item(Item=saved.to_dynamodb_item())
        except ClientError as e:
            logger.error(f"Failed to save product: {e}")
            raise PersistenceError("Failed to save product") from e
        return saved

    def find_by_id(self, product_id: int) -> Product | None:
        """Retrieve a product by id.

        Args:
            product_id: Product identifier

        Returns:
            Product if found, None otherwise
        """
        try:
            response = self.table.get_item(Key={"product_id": product_id})
        except ClientError as e:
            logger.error(f"Failed to get product {product_id}: {e}")
            raise PersistenceError(f"Failed to get product {product_id}") from e

        if "Item" not in response:
            return None

        return Product.from_dynamodb_item(response["Item"])

    def find_all(self) -> list[Product]:
        try:
            items = scan_all(self.table)
        except ClientError as e:
            logger.error(f"Failed to list products: {e}")
            raise PersistenceError("Failed to list products") from e

        products = [Product.from_dynamodb_item(item) for item in items]
        return sorted(products, key=lambda p: p.id or 0)


class DynamoDBMenuGroupRepository(MenuGroupRepository):
    """Repository for menu groups, keyed by menu_group_id."""

    def __init__(
        self,
        dynamodb_resource: DynamoDBServiceResource,
        table_name: str,
        id_sequence: IdSequence,
    ) -> None:
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)
        self.id_sequence = id_sequence

    def save(self, menu_group: MenuGroup) -> MenuGroup:
        saved = menu_group.model_copy(update={"id": self.id_sequence.next_id("menu_group")})
        try:
            self.table.put_item(Item=saved.to_dynamodb_item())
        except ClientError as e:
            logger.error(f"Failed to save menu group: {e}")
            raise PersistenceError("Failed to save menu group") from e
        return saved

    def exists_by_id(self, menu_group_id: int) -> bool:
        """Check whether a menu group exists.

        Only the key attribute is projected since the row itself is unused.

        Args:
            menu_group_id: Menu group identifier

        Returns:
            bool: True if the menu group exists
        """
        try:
            response = self.table.get_item(
                Key={"menu_group_id": menu_group_id},
                ProjectionExpression="menu_group_id",
            )
        except ClientError as e:
            logger.error(f"Failed to check menu group {menu_group_id}: {e}")
            raise PersistenceError(f"Failed to check menu group {menu_group_id}") from e

        return "Item" in response

    def find_all(self) -> list[MenuGroup]:
        try:
            items = scan_all(self.table)
        except ClientError as e:
            logger.error(f"Failed to list menu groups: {e}")
            raise PersistenceError("Failed to list menu groups") from e

        menu_groups = [MenuGroup.from_dynamodb_item(item) for item in items]
        return sorted(menu_groups, key=lambda g: g.id or 0)


class DynamoDBMenuRepository(MenuPersistence):
    """Repository for menus and menu items.

    Menu rows and item rows live in separate tables. Inside ``transaction()``
    puts are buffered per thread and committed with a single
    TransactWriteItems call, so a menu is never visible without its items.
    """

    def __init__(
        self,
        dynamodb_resource: DynamoDBServiceResource,
        menus_table_name: str,
        menu_items_table_name: str,
        id_sequence: IdSequence,
    ) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            menus_table_name: Name of the menus table
            menu_items_table_name: Name of the menu items table
            id_sequence: Id generator for menus and menu items
        """
        self.dynamodb = dynamodb_resource
        self.menus_table_name = menus_table_name
        self.menu_items_table_name = menu_items_table_name
        self.menus_table: Table = dynamodb_resource.Table(menus_table_name)
        self.menu_items_table: Table = dynamodb_resource.Table(menu_items_table_name)
        self._tables = {
            menus_table_name: self.menus_table,
            menu_items_table_name: self.menu_items_table,
        }
        self.id_sequence = id_sequence
        self._serializer = TypeSerializer()
        self._local = threading.local()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Buffer puts and commit them atomically when the block succeeds.

        Raises:
            PersistenceError: If a transaction is already open on this thread,
                or the commit is rejected by DynamoDB
        """
        if getattr(self._local, "pending", None) is not None:
            raise PersistenceError("Nested menu transactions are not supported")

        self._local.pending = []
        try:
            yield
            self._commit(self._local.pending)
        finally:
            self._local.pending = None

    def save(self, menu: Menu) -> Menu:
        saved = menu.model_copy(update={"id": self.id_sequence.next_id("menu"), "items": []})
        self._put(self.menus_table_name, saved.to_dynamodb_item(), "menu_id")
        return saved

    def save_item(self, item: MenuItem) -> MenuItem:
        saved = item.model_copy(update={"id": self.id_sequence.next_id("menu_item")})
        self._put(self.menu_items_table_name, saved.to_dynamodb_item(), "menu_item_id")
        return saved

    def find_all(self) -> list[Menu]:
        """List all menus with their items.

        Returns:
            list: Menus ordered by id, each with items ordered by id
        """
        try:
            menu_rows = scan_all(self.menus_table)
            item_rows = scan_all(self.menu_items_table)
        except ClientError as e:
            logger.error(f"Failed to list menus: {e}")
            raise PersistenceError("Failed to list menus") from e

        grouped = group_items_by_menu([MenuItem.from_dynamodb_item(row) for row in item_rows])
        menus = [
            Menu.from_dynamodb_item(row, grouped.get(int(row["menu_id"]), []))
            for row in menu_rows
        ]
        return sorted(menus, key=lambda m: m.id or 0)

    def _put(self, table_name: str, item: dict[str, Any], key_name: str) -> None:
        """Write one row now, or stage it if a transaction is open."""
        pending = getattr(self._local, "pending", None)
        if pending is not None:
            pending.append(
                {
                    "Put": {
                        "TableName": table_name,
                        "Item": {k: self._serializer.serialize(v) for k, v in item.items()},
                        "ConditionExpression": f"attribute_not_exists({key_name})",
                    }
                }
            )
            return

        try:
            self._tables[table_name].put_item(Item=item)
        except ClientError as e:
            logger.error(f"Failed to write to {table_name}: {e}")
            raise PersistenceError(f"Failed to write to {table_name}") from e

    def _commit(self, transact_items: list[dict[str, Any]]) -> None:
        if not transact_items:
            return

        if len(transact_items) > MAX_TRANSACTION_ITEMS:
            raise PersistenceError(
                f"Menu transaction has {len(transact_items)} rows, "
                f"limit is {MAX_TRANSACTION_ITEMS}"
            )

        try:
            self.dynamodb.meta.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            logger.error(f"Failed to commit menu transaction: {e}")
            raise PersistenceError("Failed to commit menu transaction") from e

        logger.debug(f"Committed {len(transact_items)} menu rows")
