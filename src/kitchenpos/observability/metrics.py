"""Custom metrics for kitchenpos."""

from opentelemetry import metrics

meter = metrics.get_meter("kitchenpos")

menu_created_counter = meter.create_counter(
    name="kitchenpos_menu_created_total",
    description="Total number of menus created",
    unit="1",
)

menu_rejected_counter = meter.create_counter(
    name="kitchenpos_menu_rejected_total",
    description="Total number of menu creation requests rejected, by reason",
    unit="1",
)

menu_item_count_histogram = meter.create_histogram(
    name="kitchenpos_menu_item_count",
    description="Number of items per created menu",
    unit="1",
)

product_created_counter = meter.create_counter(
    name="kitchenpos_product_created_total",
    description="Total number of products created",
    unit="1",
)

menu_group_created_counter = meter.create_counter(
    name="kitchenpos_menu_group_created_total",
    description="Total number of menu groups created",
    unit="1",
)


def record_menu_created(menu_group_id: int, item_count: int) -> None:
    """Record a successfully created menu.

    Args:
        menu_group_id: Menu group the menu was created in
        item_count: Number of items in the menu
    """
    attributes = {"menu_group_id": menu_group_id}
    menu_created_counter.add(1, attributes)
    menu_item_count_histogram.record(item_count, attributes)


def record_menu_rejected(reason: str) -> None:
    """Record a rejected menu creation request.

    Args:
        reason: Rejection reason code (e.g., 'price_mismatch')
    """
    menu_rejected_counter.add(1, {"reason": reason})


def record_product_created() -> None:
    product_created_counter.add(1)


def record_menu_group_created() -> None:
    menu_group_created_counter.add(1)
