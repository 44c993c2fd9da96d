"""FastAPI application exposing products, menu groups and menus."""

import logging

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from kitchenpos.auth.api_dependencies import require_api_key
from kitchenpos.auth.api_key_validator import APIKeyValidator
from kitchenpos.exceptions import InvalidArgumentError, PersistenceError
from kitchenpos.models.menu_models import (
    Menu,
    MenuCreateRequest,
    MenuGroup,
    MenuGroupCreateRequest,
    Product,
    ProductCreateRequest,
)
from kitchenpos.services.menu_group_service import MenuGroupService
from kitchenpos.services.menu_service import MenuService
from kitchenpos.services.product_service import ProductService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class ErrorResponse(BaseModel):
    """Body returned for rejected or failed requests."""

    detail: str
    reason: str | None = None


def create_app(
    product_service: ProductService,
    menu_group_service: MenuGroupService,
    menu_service: MenuService,
    api_keys: list[str],
) -> FastAPI:
    """Create and configure the FastAPI application.

    Route handlers are plain functions; FastAPI runs them in its worker
    threadpool since the services are synchronous.

    Args:
        product_service: Service for products
        menu_group_service: Service for menu groups
        menu_service: Service for menus
        api_keys: Accepted API keys for create endpoints

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Kitchen POS API",
        description="Products, menu groups and menus for a restaurant point of sale",
        version="1.0.0",
    )

    app.state.product_service = product_service
    app.state.menu_group_service = menu_group_service
    app.state.menu_service = menu_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)

    @app.exception_handler(InvalidArgumentError)
    async def handle_invalid_argument(_request: Request, exc: InvalidArgumentError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(detail=str(exc), reason=exc.reason).model_dump(),
        )

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(_request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error(f"Storage failure while handling request: {exc}")
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(detail="Storage temporarily unavailable").model_dump(),
        )

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate API key."""
        return require_api_key(x_api_key, app.state.api_key_validator)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy")

    @app.post("/api/products", response_model=Product, status_code=201, tags=["Products"])
    def create_product(
        request: ProductCreateRequest,
        _api_key: str = Depends(validate_api_key),
    ) -> Product:
        product: Product = app.state.product_service.create(request)
        return product

    @app.get("/api/products", response_model=list[Product], tags=["Products"])
    def list_products() -> list[Product]:
        products: list[Product] = app.state.product_service.list()
        return products

    @app.post("/api/menu-groups", response_model=MenuGroup, status_code=201, tags=["Menu Groups"])
    def create_menu_group(
        request: MenuGroupCreateRequest,
        _api_key: str = Depends(validate_api_key),
    ) -> MenuGroup:
        menu_group: MenuGroup = app.state.menu_group_service.create(request)
        return menu_group

    @app.get("/api/menu-groups", response_model=list[MenuGroup], tags=["Menu Groups"])
    def list_menu_groups() -> list[MenuGroup]:
        menu_groups: list[MenuGroup] = app.state.menu_group_service.list()
        return menu_groups

    @app.post("/api/menus", response_model=Menu, status_code=201, tags=["Menus"])
    def create_menu(
        request: MenuCreateRequest,
        _api_key: str = Depends(validate_api_key),
    ) -> Menu:
        """Create a menu from existing products.

        Returns:
            The created menu with its items

        Raises:
            InvalidArgumentError: Mapped to 400 when a business rule fails
        """
        logger.info(f"Menu creation requested: '{request.name}' in group {request.menu_group_id}")
        menu: Menu = app.state.menu_service.create(request)
        return menu

    @app.get("/api/menus", response_model=list[Menu], tags=["Menus"])
    def list_menus() -> list[Menu]:
        menus: list[Menu] = app.state.menu_service.list()
        return menus

    return app
