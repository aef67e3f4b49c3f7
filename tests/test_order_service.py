import time
import uuid

import pytest

from besart.order_repository import OrderNotFoundError
from besart.order_service import OrderService
from besart.order_types import (
    CreateOrderInput,
    ListOrderInput,
    ListOrderOutput,
    OrderItem,
    OrderOutput,
    Pagination,
    ProductNotFoundError,
    ShippingInfo,
    UpdateStatusInput,
)
from besart.product_types import FindProductByIdOutput


def _product(product_id, name, price):
    return FindProductByIdOutput(
        description="d",
        dimension="x",
        discounted_price=price,
        id=product_id,
        image=f"{name}.png",
        medium="oil",
        name=name,
        original_price=price + 10,
        rating=4,
    )


class FakeProductRepository:
    def __init__(self, *products):
        self.products = {p.id: p for p in products}

    def find_product_by_id(self, product_id):
        try:
            return self.products[product_id]
        except KeyError:
            raise ProductNotFoundError() from None


class FakeOrderRepository:
    def __init__(self):
        self.orders = {}
        self.updates = []
        self.list_requests = []

    def create_order(self, input):
        self.orders[input.id] = input

    def find_order_by_id_and_user_id(self, order_id, user_id):
        order = self.orders.get(order_id)
        if order is None or order.user_id != user_id:
            raise OrderNotFoundError()
        return order

    def get_order_by_user_id(self, input):
        self.list_requests.append(input)
        return ListOrderOutput(
            data=[OrderOutput(id="o1", status="open", total_amount=5)],
            pagination=Pagination(page=input.page, page_size=input.page_size, total_data=1),
        )

    def update_order_status_by_id(self, input):
        self.updates.append(input)


SHIPPING = ShippingInfo(full_name="Jane Doe", address="1 Example Street", phone_no="555-0100")


def _service(*products):
    return OrderService(FakeOrderRepository(), FakeProductRepository(*products))


def test_create_order_stores_open_order():
    service = _service(_product("p1", "A", 80))
    before = time.time_ns() // 1_000_000

    order_id = service.create_order(
        CreateOrderInput(user_id="u1", shipping_info=SHIPPING, order_items=[OrderItem("p1", 2)])
    )

    after = time.time_ns() // 1_000_000
    assert str(uuid.UUID(order_id)) == order_id
    stored = service.repository.orders[order_id]
    assert stored.status == "open"
    assert stored.created_by == "u1"
    assert stored.full_name == SHIPPING.full_name
    assert before <= stored.created_at <= after
    assert [(i.order_id, i.product_id, i.quantity) for i in stored.order_items] == [
        (order_id, "p1", 2)
    ]
    assert stored.order_items[0].id != order_id


def test_create_order_unknown_product():
    service = _service(_product("p1", "A", 80))

    with pytest.raises(ProductNotFoundError):
        service.create_order(
            CreateOrderInput(
                user_id="u1",
                shipping_info=SHIPPING,
                order_items=[OrderItem("p1", 1), OrderItem("missing", 1)],
            )
        )
    assert service.repository.orders == {}


def test_detail_order_maps_products():
    service = _service(_product("p1", "A", 80))
    order_id = service.create_order(
        CreateOrderInput(
            user_id="u1",
            shipping_info=SHIPPING,
            order_items=[OrderItem("p1", 2)],
        )
    )
    service.product_repository.products.clear()
    service.product_repository.products["p1"] = _product("p1", "A", 80)

    detail = service.detail_order("u1", order_id)

    stored = service.repository.orders[order_id]
    assert detail.id == order_id
    assert detail.order_time == stored.created_at
    assert detail.status == "open"
    assert detail.shipping_info == SHIPPING
    assert [(i.product_name, i.product_image, i.quantity, i.product_price) for i in detail.order_items] == [
        ("A", "A.png", 2, 80)
    ]


def test_detail_order_missing_product_gives_empty_item():
    service = _service(_product("p1", "A", 80))
    order_id = service.create_order(
        CreateOrderInput(user_id="u1", shipping_info=SHIPPING, order_items=[OrderItem("p1", 3)])
    )
    service.product_repository.products.clear()

    detail = service.detail_order("u1", order_id)

    assert [(i.product_name, i.product_image, i.quantity, i.product_price) for i in detail.order_items] == [
        ("", "", 3, 0)
    ]


def test_detail_order_wrong_user():
    service = _service(_product("p1", "A", 80))
    order_id = service.create_order(
        CreateOrderInput(user_id="u1", shipping_info=SHIPPING, order_items=[OrderItem("p1", 1)])
    )

    with pytest.raises(OrderNotFoundError):
        service.detail_order("u2", order_id)


def test_list_order_passes_through():
    service = _service()
    request = ListOrderInput(user_id="u1", page=1, page_size=10)

    result = service.list_order(request)

    assert service.repository.list_requests == [request]
    assert result.pagination.page_size == 10
    assert [o.id for o in result.data] == ["o1"]


def test_update_status_records_change():
    service = _service(_product("p1", "A", 80))
    order_id = service.create_order(
        CreateOrderInput(user_id="u1", shipping_info=SHIPPING, order_items=[OrderItem("p1", 1)])
    )
    before = time.time_ns() // 1_000_000

    service.update_status(UpdateStatusInput(status="paid", user_id="u1", order_id=order_id))

    [update] = service.repository.updates
    assert (update.order_id, update.status, update.updated_by) == (order_id, "paid", "u1")
    assert update.updated_at >= before


def test_update_status_missing_order():
    service = _service()

    with pytest.raises(OrderNotFoundError):
        service.update_status(UpdateStatusInput(status="paid", user_id="u1", order_id="nope"))
    assert service.repository.updates == []