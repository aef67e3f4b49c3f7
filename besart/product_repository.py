"""Read access to the product catalogue."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine

from besart.order_types import ProductNotFoundError
from besart.product_types import FindProductByIdOutput, GetProductInput, ProductListOutputItem

_SELECT_PRODUCTS = text(
    "SELECT id, name, image, original_price, discounted_price, rating FROM public.products"
)

_SELECT_PRODUCT_BY_ID = text(
    "SELECT description, dimension, discounted_price, id, image, medium, name, "
    "original_price, rating FROM public.products WHERE id = :id"
)

_REQUIRED_LIST_COLUMNS = ("id", "name", "image", "original_price")


class ProductRepository:
    """Queries the ``products`` table."""

    def __init__(self, db: Engine) -> None:
        self.db = db

    def get_products(self, input: GetProductInput) -> list[ProductListOutputItem]:
        """Return every product.

        Paging in ``input`` is not applied. If a row cannot be read, an empty
        list is returned.
        """
        with self.db.connect() as conn:
            rows = conn.execute(_SELECT_PRODUCTS).mappings().all()

        items = []
        for row in rows:
            if any(row[column] is None for column in _REQUIRED_LIST_COLUMNS):
                return []
            items.append(
                ProductListOutputItem(
                    id=str(row["id"]),
                    name=str(row["name"]),
                    image=str(row["image"]),
                    original_price=int(row["original_price"]),
                    discounted_price=(
                        None if row["discounted_price"] is None else int(row["discounted_price"])
                    ),
                    rating=None if row["rating"] is None else float(row["rating"]),
                )
            )
        return items

    def find_product_by_id(self, product_id: str) -> FindProductByIdOutput:
        """Return one product.

        Raises ProductNotFoundError when no product has this id, and
        ValueError when one of its columns is NULL.
        """
        with self.db.connect() as conn:
            row = conn.execute(_SELECT_PRODUCT_BY_ID, {"id": product_id}).mappings().first()
        if row is None:
            raise ProductNotFoundError()
        return FindProductByIdOutput.from_row(row)