"""Value types used by the product catalogue."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class ProductListInput:
    """Which page of products to list."""

    page: int
    page_size: int


@dataclass
class GetProductInput:
    """Paging parameters handed to the product repository."""

    page: int
    page_size: int

    @classmethod
    def from_list_input(cls, input: ProductListInput) -> "GetProductInput":
        """Build repository input from a listing request."""
        return cls(page=input.page, page_size=input.page_size)


@dataclass
class ProductListOutputItem:
    """One product in a listing; price discount and rating may be absent."""

    id: str
    name: str
    image: str
    original_price: int
    discounted_price: Optional[int] = None
    rating: Optional[float] = None


@dataclass
class FindProductByIdOutput:
    """Full details of one product."""

    description: str
    dimension: str
    discounted_price: int
    id: str
    image: str
    medium: str
    name: str
    original_price: int
    rating: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FindProductByIdOutput":
        """Build a product from a database row keyed by column name.

        Raises ValueError for a NULL value or a column with no matching field.
        """
        names = [f.name for f in fields(cls)]
        unknown = set(row) - set(names)
        if unknown:
            raise ValueError(f"missing destination name {sorted(unknown)[0]}")
        values = {}
        for f in fields(cls):
            value = row[f.name]
            if value is None:
                raise ValueError(f"column {f.name} is NULL")
            values[f.name] = int(value) if f.type == "int" else str(value)
        return cls(**values)