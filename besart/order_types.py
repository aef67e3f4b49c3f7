"""Value types used by the order workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


class ProductNotFoundError(LookupError):
    """Raised when an order refers to a product that does not exist."""

    def __init__(self, message: str = "product is not found") -> None:
        super().__init__(message)


@dataclass
class OrderItem:
    """A product and the quantity requested for it."""

    product_id: str
    quantity: int


@dataclass
class ShippingInfo:
    """Where an order is shipped to."""

    full_name: str
    address: str
    phone_no: str
    notes: Optional[str] = None


@dataclass
class CreateOrderInput:
    """What a customer submits to place an order."""

    user_id: str
    shipping_info: ShippingInfo
    order_items: list[OrderItem] = field(default_factory=list)


@dataclass
class OrderItemRepo:
    """An order item as stored in the ``order_items`` table."""

    id: str
    order_id: str
    product_id: str
    quantity: int
    created_at: int
    created_by: str

    def to_row(self) -> dict[str, Any]:
        """Return the item keyed by its column names."""
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "created_at": self.created_at,
            "created_by": self.created_by,
        }


@dataclass
class CreateOrderRepoInput:
    """An order as stored in the ``orders`` table, with its items."""

    id: str
    user_id: str
    status: str
    full_name: str
    address: str
    phone_no: str
    notes: Optional[str]
    created_at: int
    created_by: str
    order_items: list[OrderItemRepo] = field(default_factory=list)

    def to_row(self) -> dict[str, Any]:
        """Return the order keyed by its column names; items are not included."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "status": self.status,
            "receiver_full_name": self.full_name,
            "receiver_address": self.address,
            "receiver_phone_no": self.phone_no,
            "shipping_notes": self.notes,
            "created_at": self.created_at,
            "created_by": self.created_by,
        }


@dataclass
class UpdateStatusInput:
    """A request to change an order's status."""

    status: str
    user_id: str
    order_id: str


@dataclass
class UpdateOrderStatusInput:
    """A status change as written to the ``orders`` table."""

    order_id: str
    status: str
    updated_at: int
    updated_by: str

    def to_row(self) -> dict[str, Any]:
        """Return the change keyed by its column names."""
        return {
            "id": self.order_id,
            "status": self.status,
            "updated_at": self.updated_at,
            "updated_by": self.updated_by,
        }


@dataclass
class ListOrderInput:
    """Which page of a user's orders to list."""

    user_id: str
    page: int
    page_size: int


@dataclass
class OrderOutput:
    """One order in a listing."""

    id: str
    status: str
    total_amount: int


@dataclass
class Pagination:
    """Paging information for a listing."""

    page: int
    page_size: int
    total_data: int


@dataclass
class ListOrderOutput:
    """A page of orders with its paging information."""

    data: list[OrderOutput]
    pagination: Pagination


@dataclass
class OrderItemDetail:
    """An order item together with the product it refers to."""

    id: str
    product_image: str
    product_name: str
    quantity: int
    product_price: int


@dataclass
class DetailOrderOutput:
    """Full details of one order."""

    id: str
    order_time: int
    status: str
    shipping_info: ShippingInfo
    order_items: list[OrderItemDetail] = field(default_factory=list)