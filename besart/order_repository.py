"""Persistence of orders and their items."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine

from besart.order_types import (
    CreateOrderRepoInput,
    ListOrderInput,
    ListOrderOutput,
    OrderItemRepo,
    OrderOutput,
    Pagination,
    UpdateOrderStatusInput,
)

_INSERT_ORDER = text(
    "INSERT INTO public.orders(id, user_id, status, receiver_full_name, receiver_address, "
    "receiver_phone_no, shipping_notes, created_at, created_by) "
    "VALUES(:id, :user_id, :status, :receiver_full_name, :receiver_address, "
    ":receiver_phone_no, :shipping_notes, :created_at, :created_by)"
)

_INSERT_ITEM = text(
    "INSERT INTO public.order_items(id, order_id, product_id, quantity, created_at, created_by) "
    "VALUES(:id, :order_id, :product_id, :quantity, :created_at, :created_by)"
)

_SELECT_ORDER = text(
    "SELECT id, user_id, status, receiver_full_name, receiver_address, receiver_phone_no, "
    "shipping_notes, created_at, created_by FROM public.orders "
    "WHERE id = :order_id AND user_id = :user_id"
)

_SELECT_ITEMS = text(
    "SELECT id, order_id, product_id, quantity, created_at, created_by "
    "FROM public.order_items WHERE order_id = :order_id"
)

_SELECT_USER_ORDERS = text(
    """
    SELECT a.id, a.status, (
        SELECT SUM(oi.quantity * COALESCE(p.discounted_price, p.original_price, 0))
        FROM public.order_items oi
            JOIN public.products p ON oi.product_id = p.id
        WHERE oi.order_id = a.id
    ) total_amount
    FROM public.orders a
    WHERE user_id = :user_id
    LIMIT :limit OFFSET :offset
    """
)

_COUNT_USER_ORDERS = text(
    "SELECT count(1) total_data FROM public.orders WHERE user_id = :user_id"
)

_UPDATE_STATUS = text(
    "UPDATE public.orders SET status = :status, updated_at = :updated_at, "
    "updated_by = :updated_by WHERE id = :id"
)


class OrderNotFoundError(LookupError):
    """Raised when no order matches the requested id and owner."""

    def __init__(self, message: str = "order is not found") -> None:
        super().__init__(message)


class OrderRepository:
    """Reads and writes the ``orders`` and ``order_items`` tables."""

    def __init__(self, db: Engine) -> None:
        self.db = db

    def create_order(self, input: CreateOrderRepoInput) -> None:
        """Store an order and its items in one transaction."""
        with self.db.begin() as conn:
            conn.execute(_INSERT_ORDER, input.to_row())
            for item in input.order_items:
                conn.execute(_INSERT_ITEM, item.to_row())

    def find_order_by_id_and_user_id(self, order_id: str, user_id: str) -> CreateOrderRepoInput:
        """Return an order owned by ``user_id`` with its items.

        Raises OrderNotFoundError when there is no such order.
        """
        with self.db.connect() as conn:
            row = (
                conn.execute(_SELECT_ORDER, {"order_id": order_id, "user_id": user_id})
                .mappings()
                .first()
            )
            if row is None:
                raise OrderNotFoundError()
            item_rows = conn.execute(_SELECT_ITEMS, {"order_id": order_id}).mappings().all()

        return CreateOrderRepoInput(
            id=row["id"],
            user_id=row["user_id"],
            status=row["status"],
            full_name=row["receiver_full_name"],
            address=row["receiver_address"],
            phone_no=row["receiver_phone_no"],
            notes=row["shipping_notes"],
            created_at=int(row["created_at"]),
            created_by=row["created_by"],
            order_items=[
                OrderItemRepo(
                    id=item["id"],
                    order_id=item["order_id"],
                    product_id=item["product_id"],
                    quantity=int(item["quantity"]),
                    created_at=int(item["created_at"]),
                    created_by=item["created_by"],
                )
                for item in item_rows
            ],
        )

    def get_order_by_user_id(self, input: ListOrderInput) -> ListOrderOutput:
        """Return one page of a user's orders with their totals.

        Raises ValueError when an order has no items, so no total.
        """
        offset = (input.page - 1) * input.page_size
        with self.db.connect() as conn:
            rows = (
                conn.execute(
                    _SELECT_USER_ORDERS,
                    {"user_id": input.user_id, "limit": input.page_size, "offset": offset},
                )
                .mappings()
                .all()
            )
            total_data = conn.execute(_COUNT_USER_ORDERS, {"user_id": input.user_id}).scalar_one()

        orders = []
        for row in rows:
            if row["total_amount"] is None:
                raise ValueError(f"order {row['id']} has no total amount")
            orders.append(
                OrderOutput(id=row["id"], status=row["status"], total_amount=int(row["total_amount"]))
            )

        return ListOrderOutput(
            data=orders,
            pagination=Pagination(
                page=input.page, page_size=input.page_size, total_data=int(total_data)
            ),
        )

    def update_order_status_by_id(self, input: UpdateOrderStatusInput) -> None:
        """Set an order's status and record who changed it and when."""
        with self.db.begin() as conn:
            conn.execute(_UPDATE_STATUS, input.to_row())