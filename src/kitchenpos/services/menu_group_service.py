"""Menu group service."""

import logging

from kitchenpos.models.menu_models import MenuGroup, MenuGroupCreateRequest
from kitchenpos.observability.decorators import traced
from kitchenpos.observability.metrics import record_menu_group_created
from kitchenpos.repositories.base import MenuGroupRepository

logger = logging.getLogger(__name__)


class MenuGroupService:
    """Service for managing the categories menus are grouped under."""

    def __init__(self, menu_group_repository: MenuGroupRepository) -> None:
        self.menu_group_repository = menu_group_repository

    @traced("menu_group.create")
    def create(self, request: MenuGroupCreateRequest) -> MenuGroup:
        """Register a new menu group.

        Args:
            request: Menu group name

        Returns:
            The stored menu group with its assigned id
        """
        menu_group = self.menu_group_repository.save(MenuGroup(name=request.name))

        record_menu_group_created()
        logger.info(f"Created menu group {menu_group.id} '{menu_group.name}'")
        return menu_group

    @traced("menu_group.list")
    def list(self) -> list[MenuGroup]:
        return self.menu_group_repository.find_all()
