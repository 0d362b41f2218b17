import pytest

from restaurant_client import order_lifecycle
from restaurant_client.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from restaurant_client.schemas import (
    CreateOrderRequest,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)


def _request(total=None, **overrides) -> CreateOrderRequest:
    values = dict(
        restaurant_id="r1",
        restaurant_name="Test Kitchen",
        items=[
            OrderItem(menu_item_id="A", name="Item A", price=10.0, quantity=2),
            OrderItem(menu_item_id="B", name="Item B", price=5.0, quantity=1),
        ],
        total_amount=total,
    )
    values.update(overrides)
    return CreateOrderRequest(**values)


def _order(status: OrderStatus, payment: PaymentStatus = PaymentStatus.PENDING) -> Order:
    order = order_lifecycle.new_order("u1", _request(), order_id="o1")
    order.status = status
    order.payment_status = payment
    return order


def test_new_order_starts_pending_with_caller_total():
    order = order_lifecycle.new_order("u1", _request(total=25.0))

    assert order.status == OrderStatus.PENDING
    assert order.payment_status == PaymentStatus.PENDING
    assert order.total_amount == 25.0
    assert order.estimated_ready_time > order.order_date
    assert all(item.id for item in order.items)


def test_new_order_computes_total_when_omitted():
    assert order_lifecycle.new_order("u1", _request()).total_amount == 25.0


def test_caller_total_trusted_unless_verified():
    assert order_lifecycle.new_order("u1", _request(total=1.0)).total_amount == 1.0

    with pytest.raises(ValidationError):
        order_lifecycle.new_order("u1", _request(total=1.0), verify_total=True)


@pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.CONFIRMED])
def test_cancel_allowed_before_preparation(status):
    order = _order(status, PaymentStatus.PAID)
    order_lifecycle.cancel(order)

    assert order.status == OrderStatus.CANCELLED
    assert order.payment_status == PaymentStatus.PAID


@pytest.mark.parametrize("status", [
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
    OrderStatus.CANCELLED,
])
def test_cancel_rejected_once_preparing(status):
    order = _order(status)

    with pytest.raises(InvalidTransitionError, match="not cancellable in current state"):
        order_lifecycle.cancel(order)
    assert order.status == status


def test_status_walks_forward_only():
    order = _order(OrderStatus.PENDING)
    for target in (OrderStatus.CONFIRMED, OrderStatus.PREPARING,
                   OrderStatus.READY, OrderStatus.COMPLETED):
        order_lifecycle.transition_status(order, target)
    assert order.status == OrderStatus.COMPLETED

    with pytest.raises(InvalidTransitionError):
        order_lifecycle.transition_status(order, OrderStatus.PENDING)


def test_skipping_a_step_is_rejected():
    with pytest.raises(InvalidTransitionError) as exc_info:
        order_lifecycle.transition_status(_order(OrderStatus.PENDING), OrderStatus.READY)
    assert exc_info.value.current == "pending"
    assert exc_info.value.requested == "ready"


def test_payment_axis_is_independent():
    order = _order(OrderStatus.PREPARING)

    order_lifecycle.transition_payment(order, PaymentStatus.FAILED)
    order_lifecycle.transition_payment(order, PaymentStatus.PAID)

    assert order.payment_status == PaymentStatus.PAID
    assert order.status == OrderStatus.PREPARING
    with pytest.raises(InvalidTransitionError):
        order_lifecycle.transition_payment(order, PaymentStatus.FAILED)


@pytest.mark.anyio
async def test_mock_orders_cancel_and_queries(store):
    orders = store.orders

    ongoing = await orders.get_ongoing_orders("1")
    assert [o.id for o in ongoing] == ["3", "2"]
    assert [o.id for o in await orders.get_order_history("1")] == ["1"]

    with pytest.raises(InvalidTransitionError):
        await orders.cancel_order("2")

    cancelled = await orders.cancel_order("3")
    assert cancelled.status == OrderStatus.CANCELLED
    assert cancelled.payment_status == PaymentStatus.PENDING
    assert [o.id for o in await orders.get_order_history("1")] == ["3", "1"]


@pytest.mark.anyio
async def test_mock_orders_admin_filters(store):
    paid = await store.orders.get_all_orders(payment_status=PaymentStatus.PAID)
    assert {o.id for o in paid} == {"1", "2"}

    burger = await store.orders.get_all_orders(restaurant_id="2")
    assert [o.id for o in burger] == ["2"]

    assert await store.orders.get_all_orders(user_id="nobody") == []


@pytest.mark.anyio
async def test_mock_orders_unknown_id(store):
    with pytest.raises(NotFoundError):
        await store.orders.get_order("missing")
    with pytest.raises(NotFoundError):
        await store.orders.update_payment_status("missing", PaymentStatus.PAID)


@pytest.mark.anyio
async def test_mock_orders_verify_totals(empty_store):
    from restaurant_client.services.mock import MockStore

    strict = MockStore(min_latency=0.0, max_latency=0.0, verify_totals=True, seed=False)
    with pytest.raises(ValidationError):
        await strict.orders.create_order("u1", _request(total=99.0))

    order = await empty_store.orders.create_order("u1", _request(total=99.0))
    assert order.total_amount == 99.0
