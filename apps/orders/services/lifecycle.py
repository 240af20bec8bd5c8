"""
Order status lifecycle.

Sellers move an order forward, buyers may only cancel. Terminal states
accept no further changes. Cancelling does not refund credits.
"""

import logging

from django.db import transaction

from apps.orders.models import Order, OrderStatus

from .exceptions import (
    OrderNotFoundError,
    OrderAccessDeniedError,
    IllegalStatusTransitionError,
)

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ACCEPTED, OrderStatus.REJECTED, OrderStatus.CANCELLED},
    OrderStatus.ACCEPTED: {OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED},
    OrderStatus.IN_PROGRESS: {
        OrderStatus.SHIPPED,
        OrderStatus.READY_FOR_PICKUP,
        OrderStatus.CANCELLED,
    },
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.READY_FOR_PICKUP: {OrderStatus.PICKED_UP, OrderStatus.CANCELLED},
    OrderStatus.REJECTED: set(),
    OrderStatus.DELIVERED: set(),
    OrderStatus.PICKED_UP: set(),
    OrderStatus.CANCELLED: set(),
}


def can_transition(current: str, requested: str) -> bool:
    return requested in ALLOWED_TRANSITIONS.get(current, set())


@transaction.atomic
def transition_order_status(*, order_uuid, user, requested_status: str) -> Order:
    """
    Move an order to a new status.

    Args:
        order_uuid: UUID of the order
        user: User requesting the change
        requested_status: Target OrderStatus value

    Returns:
        Updated Order instance

    Raises:
        OrderNotFoundError: If the order doesn't exist
        OrderAccessDeniedError: If user is not a party, or a buyer asks for
            anything but cancellation
        IllegalStatusTransitionError: If the target is not reachable
    """
    try:
        order = (
            Order.objects
            .select_for_update()
            .get(uuid=order_uuid)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_uuid} not found")

    if not order.is_participant(user):
        raise OrderAccessDeniedError("User is not a party to this order")

    requested = str(requested_status).strip().lower()
    if requested not in OrderStatus.values:
        raise IllegalStatusTransitionError(f"Unknown order status '{requested_status}'")

    if user.pk != order.seller_id and requested != OrderStatus.CANCELLED:
        raise OrderAccessDeniedError("Buyers may only cancel an order")

    if not can_transition(order.status, requested):
        raise IllegalStatusTransitionError(
            f"Cannot change order status from '{order.status}' to '{requested}'"
        )

    previous = order.status
    order.status = requested
    order.save(update_fields=['status', 'updated_at'])

    logger.info(
        "Order %s moved from %s to %s by user %s",
        order.uuid, previous, requested, user.pk,
    )
    return order
