"""Unit tests for MenuGroupService."""

from unittest.mock import MagicMock

import pytest

from kitchenpos.models.menu_models import MenuGroup, MenuGroupCreateRequest
from kitchenpos.repositories.base import MenuGroupRepository
from kitchenpos.services.menu_group_service import MenuGroupService


@pytest.mark.unit
class TestMenuGroupService:
    """Test suite for MenuGroupService."""

    def test_create_menu_group(self) -> None:
        """Test registering a menu group."""
        repo = MagicMock(spec=MenuGroupRepository)
        repo.save.side_effect = lambda group: group.model_copy(update={"id": 3})
        service = MenuGroupService(menu_group_repository=repo)

        menu_group = service.create(MenuGroupCreateRequest(name="new menus"))

        assert menu_group == MenuGroup(id=3, name="new menus")
        repo.save.assert_called_once_with(MenuGroup(name="new menus"))

    def test_list_menu_groups(self) -> None:
        """Test listing menu groups."""
        repo = MagicMock(spec=MenuGroupRepository)
        repo.find_all.return_value = [MenuGroup(id=1, name="new menus")]
        service = MenuGroupService(menu_group_repository=repo)

        assert service.list() == [MenuGroup(id=1, name="new menus")]
