"""Read-only order history queries."""

from datetime import timedelta

from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone

from apps.orders.models import Order

from .exceptions import OrderNotFoundError, OrderAccessDeniedError


def _recent(queryset: QuerySet, days) -> QuerySet:
    if days is None:
        days = settings.ORDER_HISTORY_DEFAULT_DAYS
    since = timezone.now() - timedelta(days=days)
    return (
        queryset
        .filter(order_date__gte=since)
        .select_related('buyer', 'seller', 'seller_membership', 'buyer_membership', 'group')
        .order_by('-order_date')
    )


def get_customer_orders(*, user, days=None) -> QuerySet[Order]:
    """Orders the user placed within the last `days` days, newest first."""
    return _recent(Order.objects.filter(buyer=user), days)


def get_merchant_orders(*, user, days=None) -> QuerySet[Order]:
    """Orders the user received as a seller within the last `days` days."""
    return _recent(Order.objects.filter(seller=user), days)


def get_order_details(*, order_uuid, user) -> Order:
    """
    Get a single order visible to one of its parties.

    Raises:
        OrderNotFoundError: If the order doesn't exist
        OrderAccessDeniedError: If user is neither buyer nor seller
    """
    try:
        order = (
            Order.objects
            .select_related('buyer', 'seller', 'seller_membership', 'buyer_membership', 'group')
            .get(uuid=order_uuid)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_uuid} not found")

    if not order.is_participant(user):
        raise OrderAccessDeniedError("User is not a party to this order")
    return order
