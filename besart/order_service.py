"""Business operations on orders."""

from __future__ import annotations

import time
import uuid

from besart.order_repository import OrderRepository
from besart.order_types import (
    CreateOrderInput,
    CreateOrderRepoInput,
    DetailOrderOutput,
    ListOrderInput,
    ListOrderOutput,
    OrderItemDetail,
    OrderItemRepo,
    ProductNotFoundError,
    ShippingInfo,
    UpdateOrderStatusInput,
    UpdateStatusInput,
)
from besart.product_repository import ProductRepository

OPEN_STATUS = "open"


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class OrderService:
    """Places, lists, shows and updates orders."""

    def __init__(self, repository: OrderRepository, product_repository: ProductRepository) -> None:
        self.repository = repository
        self.product_repository = product_repository

    def create_order(self, input: CreateOrderInput) -> str:
        """Place an order and return its new id.

        Raises ProductNotFoundError when any item refers to an unknown product.
        """
        for item in input.order_items:
            try:
                self.product_repository.find_product_by_id(item.product_id)
            except Exception as exc:
                raise ProductNotFoundError() from exc

        order_id = str(uuid.uuid4())
        order = CreateOrderRepoInput(
            id=order_id,
            user_id=input.user_id,
            status=OPEN_STATUS,
            full_name=input.shipping_info.full_name,
            address=input.shipping_info.address,
            phone_no=input.shipping_info.phone_no,
            notes=input.shipping_info.notes,
            created_at=_now_millis(),
            created_by=input.user_id,
            order_items=[
                OrderItemRepo(
                    id=str(uuid.uuid4()),
                    order_id=order_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    created_at=_now_millis(),
                    created_by=input.user_id,
                )
                for item in input.order_items
            ],
        )
        self.repository.create_order(order)
        return order_id

    def detail_order(self, user_id: str, order_id: str) -> DetailOrderOutput:
        """Return an order owned by ``user_id`` with product details for its items.

        Items whose product cannot be found are shown with empty product data.
        """
        order = self.repository.find_order_by_id_and_user_id(order_id, user_id)

        items = []
        for order_item in order.order_items:
            try:
                product = self.product_repository.find_product_by_id(order_item.product_id)
                image, name, price = product.image, product.name, product.discounted_price
            except Exception:
                image, name, price = "", "", 0
            items.append(
                OrderItemDetail(
                    id=order_item.id,
                    product_image=image,
                    product_name=name,
                    quantity=order_item.quantity,
                    product_price=int(price),
                )
            )

        return DetailOrderOutput(
            id=order.id,
            order_time=order.created_at,
            status=order.status,
            shipping_info=ShippingInfo(
                full_name=order.full_name,
                address=order.address,
                phone_no=order.phone_no,
                notes=order.notes,
            ),
            order_items=items,
        )

    def list_order(self, input: ListOrderInput) -> ListOrderOutput:
        """Return one page of a user's orders."""
        return self.repository.get_order_by_user_id(input)

    def update_status(self, input: UpdateStatusInput) -> None:
        """Change the status of an order owned by the requesting user."""
        self.repository.find_order_by_id_and_user_id(input.order_id, input.user_id)
        self.repository.update_order_status_by_id(
            UpdateOrderStatusInput(
                order_id=input.order_id,
                status=input.status,
                updated_at=_now_millis(),
                updated_by=input.user_id,
            )
        )