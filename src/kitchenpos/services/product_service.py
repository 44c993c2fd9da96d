"""Product service for registering and listing products."""

import logging

from kitchenpos.exceptions import InvalidArgumentError
from kitchenpos.models.menu_models import Product, ProductCreateRequest
from kitchenpos.observability.decorators import traced
from kitchenpos.observability.metrics import record_product_created
from kitchenpos.repositories.base import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing products."""

    def __init__(self, product_repository: ProductRepository) -> None:
        """Initialize the ProductService.

        Args:
            product_repository: Repository for storing products
        """
        self.product_repository = product_repository

    @traced("product.create")
    def create(self, request: ProductCreateRequest) -> Product:
        """Register a new product.

        Args:
            request: Product name and price

        Returns:
            The stored product with its assigned id

        Raises:
            InvalidArgumentError: If the price is missing or negative
        """
        if request.price is None or request.price < 0:
            logger.warning(f"Rejected product '{request.name}' with price {request.price}")
            raise InvalidArgumentError(
                f"Product price must be zero or more, got {request.price}",
                reason="negative_price",
            )

        product = self.product_repository.save(Product(name=request.name, price=request.price))

        record_product_created()
        logger.info(f"Created product {product.id} '{product.name}'")
        return product

    @traced("product.list")
    def list(self) -> list[Product]:
        return self.product_repository.find_all()
