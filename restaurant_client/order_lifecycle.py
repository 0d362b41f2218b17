"""
Order Lifecycle Manager

Two independent state machines live on every Order:

    status:          pending → confirmed → preparing → ready → completed
                     pending/confirmed → cancelled
    payment_status:  pending → paid | failed,  failed → paid

No transition on one axis touches the other.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import uuid
from datetime import timedelta
from typing import Optional

from restaurant_client.core.exceptions import InvalidTransitionError, ValidationError
from restaurant_client.schemas import (
    CreateOrderRequest,
    Order,
    OrderStatus,
    PaymentStatus,
    utcnow,
)

logger = logging.getLogger(__name__)

ESTIMATED_READY_MINUTES = 30

STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in STATUS_TRANSITIONS.items() if not targets
)
CANCELLABLE_STATUSES = frozenset(
    status for status, targets in STATUS_TRANSITIONS.items()
    if OrderStatus.CANCELLED in targets
)


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in STATUS_TRANSITIONS[current]


def can_cancel(order: Order) -> bool:
    return order.status in CANCELLABLE_STATUSES


def is_ongoing(order: Order) -> bool:
    return order.status not in TERMINAL_STATUSES


def transition_status(order: Order, target: OrderStatus) -> Order:
    """
    Move an order to a new fulfillment status in place.

    Raises:
        InvalidTransitionError: target not reachable from the current status
    """
    target = OrderStatus(target)
    if not can_transition(order.status, target):
        raise InvalidTransitionError(order.status.value, target.value)

    logger.info(f"Order {order.id}: {order.status.value} → {target.value}")
    order.status = target
    order.updated_at = utcnow()
    return order


def cancel(order: Order) -> Order:
    """
    Cancel an order in place; payment_status is left untouched.

    Raises:
        InvalidTransitionError: order is not pending or confirmed
    """
    if not can_cancel(order):
        raise InvalidTransitionError(
            order.status.value,
            OrderStatus.CANCELLED.value,
            f"Order {order.id} is not cancellable in current state "
            f"'{order.status.value}'",
        )
    return transition_status(order, OrderStatus.CANCELLED)


def transition_payment(order: Order, target: PaymentStatus) -> Order:
    """
    Move an order to a new payment status in place.

    Raises:
        InvalidTransitionError: target not reachable from the current
            payment status (nothing ever leaves `paid`)
    """
    target = PaymentStatus(target)
    if target not in PAYMENT_TRANSITIONS[order.payment_status]:
        raise InvalidTransitionError(
            order.payment_status.value,
            target.value,
            f"Payment for order {order.id} cannot move from "
            f"'{order.payment_status.value}' to '{target.value}'",
        )

    logger.info(
        f"Order {order.id}: payment {order.payment_status.value} → {target.value}"
    )
    order.payment_status = target
    order.updated_at = utcnow()
    return order


def items_total(request: CreateOrderRequest) -> float:
    return round(sum(item.line_total for item in request.items), 2)


def new_order(
    user_id: str,
    request: CreateOrderRequest,
    verify_total: bool = False,
    order_id: Optional[str] = None,
) -> Order:
    """
    Build a freshly placed order.

    Status and payment status always start at pending. The total is the
    caller-supplied checkout total; it is computed from the items only when
    the caller omitted it.

    Args:
        user_id: Owner of the order
        request: Checkout payload
        verify_total: Reject a caller total that differs from the item sum
        order_id: Explicit id (generated when omitted)

    Raises:
        ValidationError: verify_total is on and the totals disagree
    """
    computed = items_total(request)
    total = request.total_amount if request.total_amount is not None else computed

    if verify_total and abs(total - computed) > 0.005:
        raise ValidationError(
            f"Order total {total:.2f} does not match item total {computed:.2f}"
        )

    now = utcnow()
    items = [
        item.model_copy(update={"id": item.id or uuid.uuid4().hex[:12]}, deep=True)
        for item in request.items
    ]

    return Order(
        id=order_id or f"order_{uuid.uuid4().hex[:16]}",
        user_id=user_id,
        restaurant_id=request.restaurant_id,
        restaurant_name=request.restaurant_name or "Unknown Restaurant",
        items=items,
        total_amount=round(total, 2),
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
        delivery_type=request.delivery_type,
        delivery_address=request.delivery_address,
        payment_method=request.payment_method,
        notes=request.notes or "",
        order_date=now,
        estimated_ready_time=now + timedelta(minutes=ESTIMATED_READY_MINUTES),
        created_at=now,
        updated_at=now,
    )
