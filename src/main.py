"""Main application entry point for the kitchenpos service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any

import boto3
from fastapi import FastAPI

from kitchenpos.handlers.api_handler import create_app
from kitchenpos.observability import configure_logging, setup_observability
from kitchenpos.repositories.base import MenuGroupRepository, MenuPersistence, ProductRepository
from kitchenpos.repositories.dynamodb_repositories import (
    DynamoDBMenuGroupRepository,
    DynamoDBMenuRepository,
    DynamoDBProductRepository,
    IdSequence,
)
from kitchenpos.repositories.memory_repositories import (
    InMemoryMenuGroupRepository,
    InMemoryMenuRepository,
    InMemoryProductRepository,
)
from kitchenpos.services.menu_group_service import MenuGroupService
from kitchenpos.services.menu_service import MenuService
from kitchenpos.services.product_service import ProductService

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """The storage backends the services are wired to."""

    products: ProductRepository
    menu_groups: MenuGroupRepository
    menus: MenuPersistence


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB accepts any credentials
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "dummy"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "dummy"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def create_repositories() -> Repositories:
    """Create repositories for the backend named by STORAGE_BACKEND.

    Returns:
        Repositories for products, menu groups and menus

    Raises:
        ValueError: If STORAGE_BACKEND names an unknown backend
    """
    backend = os.getenv("STORAGE_BACKEND", "dynamodb").lower()

    if backend == "memory":
        logger.warning("Using in-memory storage - data is lost on restart")
        return Repositories(
            products=InMemoryProductRepository(),
            menu_groups=InMemoryMenuGroupRepository(),
            menus=InMemoryMenuRepository(),
        )

    if backend != "dynamodb":
        raise ValueError(f"Unknown STORAGE_BACKEND '{backend}', expected 'dynamodb' or 'memory'")

    dynamodb_resource = get_dynamodb_resource()

    products_table = os.getenv("DYNAMODB_PRODUCTS_TABLE", "kitchenpos-products")
    menu_groups_table = os.getenv("DYNAMODB_MENU_GROUPS_TABLE", "kitchenpos-menu-groups")
    menus_table = os.getenv("DYNAMODB_MENUS_TABLE", "kitchenpos-menus")
    menu_items_table = os.getenv("DYNAMODB_MENU_ITEMS_TABLE", "kitchenpos-menu-items")
    sequences_table = os.getenv("DYNAMODB_SEQUENCES_TABLE", "kitchenpos-sequences")

    id_sequence = IdSequence(dynamodb_resource=dynamodb_resource, table_name=sequences_table)

    logger.info(
        f"DynamoDB tables configured - products: {products_table}, "
        f"menu groups: {menu_groups_table}, menus: {menus_table}, "
        f"menu items: {menu_items_table}, sequences: {sequences_table}"
    )

    return Repositories(
        products=DynamoDBProductRepository(
            dynamodb_resource=dynamodb_resource,
            table_name=products_table,
            id_sequence=id_sequence,
        ),
        menu_groups=DynamoDBMenuGroupRepository(
            dynamodb_resource=dynamodb_resource,
            table_name=menu_groups_table,
            id_sequence=id_sequence,
        ),
        menus=DynamoDBMenuRepository(
            dynamodb_resource=dynamodb_resource,
            menus_table_name=menus_table,
            menu_items_table_name=menu_items_table,
            id_sequence=id_sequence,
        ),
    )


def get_api_keys() -> list[str]:
    """Read accepted API keys from ADMIN_API_KEY (comma separated).

    Returns:
        List of API keys, or a development key if none is configured
    """
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - using development key")
        api_keys = ["dummy-key-for-development"]

    return api_keys


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates repositories for the configured storage backend
    3. Creates services
    4. Creates the FastAPI app
    5. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing kitchenpos service...")

    repositories = create_repositories()

    product_service = ProductService(product_repository=repositories.products)
    menu_group_service = MenuGroupService(menu_group_repository=repositories.menu_groups)
    menu_service = MenuService(
        menu_repository=repositories.menus,
        menu_group_lookup=repositories.menu_groups,
        product_lookup=repositories.products,
    )

    logger.info("Services initialized")

    app = create_app(
        product_service=product_service,
        menu_group_service=menu_group_service,
        menu_service=menu_service,
        api_keys=get_api_keys(),
    )

    setup_observability(app)

    logger.info("Kitchenpos service initialized successfully")
    return app


# Skip wiring during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
