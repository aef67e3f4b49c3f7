"""Business operations on the product catalogue."""

from __future__ import annotations

from besart.product_repository import ProductRepository
from besart.product_types import (
    FindProductByIdOutput,
    GetProductInput,
    ProductListInput,
    ProductListOutputItem,
)


class ProductService:
    """Lists products and shows product details."""

    def __init__(self, repository: ProductRepository) -> None:
        self.repository = repository

    def product_list(self, input: ProductListInput) -> list[ProductListOutputItem]:
        """Return the products for the requested page."""
        return self.repository.get_products(GetProductInput.from_list_input(input))

    def product_detail(self, product_id: str) -> FindProductByIdOutput:
        """Return the details of one product."""
        return self.repository.find_product_by_id(product_id)