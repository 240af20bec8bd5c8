"""
Order validation.

Checks run in a fixed order and the first failure wins, so the same
request always produces the same error. Nothing here writes.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.orders.models import FulfillmentMethod, FulfillmentScheduleType

from .dto import OrderRequest, ValidatedOrder, ValidatedOrderItem
from .exceptions import (
    MerchantNotFoundError,
    NotGroupMemberError,
    InvalidScheduleError,
    InvalidFulfillmentMethodError,
    DishNotFoundError,
    InvalidQuantityError,
    MixedMerchantError,
    InsufficientFundsError,
)

logger = logging.getLogger(__name__)


def _normalize_choice(value) -> str:
    return str(value or '').strip().lower()


class OrderValidator:
    """
    Turns an OrderRequest into a priced ValidatedOrder.

    Args:
        catalog: Object exposing dish_by_uuid, membership_by_token and
            membership_of (see DjangoCatalog)
        clock: Callable returning the current aware datetime
    """

    def __init__(self, catalog, clock: Callable[[], datetime] = timezone.now):
        self.catalog = catalog
        self.clock = clock

    def validate(self, *, caller, order_request: OrderRequest) -> ValidatedOrder:
        """
        Validate an order on behalf of caller.

        Raises:
            MerchantNotFoundError: Seller token does not resolve
            NotGroupMemberError: Caller is not in the seller's group
            InvalidScheduleError: Bad schedule type or fulfillment date
            InvalidFulfillmentMethodError: Unknown fulfillment method
            DishNotFoundError: A cart item names an unknown dish
            InvalidQuantityError: A quantity is negative
            MixedMerchantError: A dish belongs to another seller
            InsufficientFundsError: Total exceeds the buyer's credits
        """
        seller_membership = self.catalog.membership_by_token(order_request.seller_membership_token)
        if seller_membership is None:
            raise MerchantNotFoundError("Merchant does not exist")

        buyer_membership = self.catalog.membership_of(caller.pk, seller_membership.group_id)
        if buyer_membership is None:
            raise NotGroupMemberError("User is not a member of the merchant's group")

        schedule_type, fulfillment_date = self._check_schedule(
            order_request.fulfillment_schedule_type,
            order_request.fulfillment_date,
        )

        method = _normalize_choice(order_request.fulfillment_method)
        if method not in FulfillmentMethod.values:
            raise InvalidFulfillmentMethodError("Invalid fulfillment method")

        items = [self._check_item(item) for item in order_request.items]

        for item in items:
            if item.dish.membership_id != seller_membership.pk:
                raise MixedMerchantError("All dishes must be from the same merchant")

        validated = ValidatedOrder(
            buyer=caller,
            buyer_membership=buyer_membership,
            seller_membership=seller_membership,
            items=items,
            special_instructions=order_request.special_instructions,
            fulfillment_schedule_type=schedule_type,
            fulfillment_date=fulfillment_date,
            fulfillment_method=method,
            fulfillment_details=order_request.fulfillment_details.to_dict(),
        )

        if validated.total > buyer_membership.credits:
            raise InsufficientFundsError("Insufficient funds")

        logger.debug(
            "Order for membership %s validated, total %s",
            seller_membership.pk, validated.total,
        )
        return validated

    def _check_schedule(self, raw_type, raw_date) -> tuple[str, Optional[datetime]]:
        schedule_type = _normalize_choice(raw_type)
        if schedule_type not in FulfillmentScheduleType.values:
            raise InvalidScheduleError("Invalid fulfillment schedule type")

        if schedule_type == FulfillmentScheduleType.ASAP:
            if raw_date is not None:
                raise InvalidScheduleError("Fulfillment date must be null for ASAP orders")
            return schedule_type, None

        if raw_date is None:
            raise InvalidScheduleError("Fulfillment date must not be null for scheduled orders")

        if isinstance(raw_date, datetime):
            fulfillment_date = raw_date
        else:
            try:
                fulfillment_date = parse_datetime(str(raw_date))
            except ValueError:
                fulfillment_date = None
            if fulfillment_date is None:
                raise InvalidScheduleError("Fulfillment date must be an ISO-8601 date-time")

        if timezone.is_naive(fulfillment_date):
            fulfillment_date = timezone.make_aware(fulfillment_date)

        if not fulfillment_date > self.clock():
            raise InvalidScheduleError("Fulfillment date must be in the future")
        return schedule_type, fulfillment_date

    def _check_item(self, item) -> ValidatedOrderItem:
        dish = self.catalog.dish_by_uuid(item.dish_token)
        if dish is None:
            raise DishNotFoundError(f"Dish {item.dish_token} does not exist")
        if item.quantity < 0:
            raise InvalidQuantityError(
                f"Dish {item.dish_token} has invalid quantity. Quantities must be >= 0."
            )
        return ValidatedOrderItem(
            dish=dish,
            quantity=item.quantity,
            special_instructions=item.special_instructions,
            price=dish.price,
        )
