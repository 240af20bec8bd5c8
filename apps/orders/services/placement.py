"""
Order placement.

The commit pipeline validates an order, debits the buyer and stores the
order inside one transaction. The debit is a conditional UPDATE that only
succeeds while the balance still covers the total, so concurrent orders
against the same membership can never overdraw it. Transient database
failures are retried a bounded number of times.
"""

import logging
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import F
from django.utils import timezone

from apps.merchant_groups.models import GroupMembership
from apps.orders.models import Order

from .catalog import DjangoCatalog
from .dto import OrderRequest, ValidatedOrder
from .exceptions import (
    CatalogUnavailableError,
    DuplicateOrderRequestError,
    InsufficientFundsError,
    OrderPersistenceError,
    OrderValidationError,
    OrderPermissionError,
    ResourceNotFoundError,
)
from .validation import OrderValidator

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (OperationalError, CatalogUnavailableError)


def _format_date(value) -> Optional[str]:
    if value is None:
        return None
    return timezone.localtime(value).isoformat()


def preview_payload(validated: ValidatedOrder) -> dict:
    """Response body for a validated, not yet placed, order."""
    seller_membership = validated.seller_membership
    return {
        'seller_membership_token': str(seller_membership.uuid),
        'seller_name': seller_membership.merchant_name,
        'special_instructions': validated.special_instructions,
        'fulfillment_schedule_type': validated.fulfillment_schedule_type,
        'fulfillment_date': _format_date(validated.fulfillment_date),
        'fulfillment_method': validated.fulfillment_method,
        'fulfillment_details': validated.fulfillment_details,
        'items': [item.snapshot() for item in validated.items],
        'order_total': validated.total,
    }


def order_payload(order: Order) -> dict:
    """Response body for a placed order. Same shape as the preview plus identity."""
    return {
        'order_id': str(order.uuid),
        'order_date': _format_date(order.order_date),
        'order_status': order.status,
        'seller_membership_token': str(order.seller_membership.uuid),
        'seller_name': order.seller_membership.merchant_name,
        'special_instructions': order.special_instructions,
        'fulfillment_schedule_type': order.fulfillment_schedule_type,
        'fulfillment_date': _format_date(order.fulfillment_date),
        'fulfillment_method': order.fulfillment_method,
        'fulfillment_details': order.fulfillment_details,
        'items': order.items,
        'order_total': order.order_total,
    }


class OrderCommitPipeline:
    """
    Validate-and-commit for orders.

    Args:
        catalog: Reference data reader, defaults to DjangoCatalog
        validator: Defaults to an OrderValidator over the catalog
        max_attempts: Attempts before a transient failure becomes
            OrderPersistenceError
    """

    def __init__(self, catalog=None, validator=None, max_attempts=None):
        self.catalog = catalog or DjangoCatalog()
        self.validator = validator or OrderValidator(self.catalog)
        self.max_attempts = max_attempts or settings.ORDER_PLACEMENT_MAX_ATTEMPTS

    def validate(self, *, caller, order_request: OrderRequest) -> dict:
        """Dry run. Same checks and pricing as place(), nothing is written."""
        validated = self.validator.validate(caller=caller, order_request=order_request)
        return preview_payload(validated)

    def place(self, *, caller, request_token, order_request: OrderRequest) -> tuple[dict, bool]:
        """
        Place an order exactly once per request token.

        Args:
            caller: Authenticated buyer
            request_token: Client-generated idempotency token
            order_request: The cart

        Returns:
            Tuple of (order payload, created). A replayed token returns the
            original order with created False.

        Raises:
            OrdersServiceError subclasses for any rejection
            DuplicateOrderRequestError: Token belongs to another user
            OrderPersistenceError: Transient failures outlasted the retries
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._place_once(caller, request_token, order_request)
            except IntegrityError:
                # Lost the race for this token to a concurrent request
                existing = self._find_by_token(request_token)
                if existing is None:
                    logger.exception("Order with token %s failed an integrity check", request_token)
                    raise OrderPersistenceError("Order could not be placed, please try again")
                return self._replay(existing, caller), False
            except TRANSIENT_ERRORS as exc:
                if attempt >= self.max_attempts:
                    logger.exception(
                        "Placing order %s failed after %d attempts", request_token, attempt
                    )
                    raise OrderPersistenceError("Order could not be placed, please try again") from exc
                logger.warning(
                    "Transient failure placing order %s (attempt %d/%d): %s",
                    request_token, attempt, self.max_attempts, exc,
                )
            except (ResourceNotFoundError, OrderPermissionError, OrderValidationError) as exc:
                logger.debug("Order %s rejected: %s", request_token, exc)
                raise

    def _place_once(self, caller, request_token, order_request):
        with transaction.atomic():
            existing = self._find_by_token(request_token)
            if existing is not None:
                return self._replay(existing, caller), False

            validated = self.validator.validate(caller=caller, order_request=order_request)
            total = validated.total

            debited = (
                GroupMembership.objects
                .filter(pk=validated.buyer_membership.pk, credits__gte=total)
                .update(credits=F('credits') - total)
            )
            if debited == 0:
                # Balance dropped between validation and the debit
                raise InsufficientFundsError("Insufficient funds")

            order = Order.objects.create(
                request_token=request_token,
                buyer=caller,
                buyer_membership=validated.buyer_membership,
                seller_id=validated.seller_membership.user_id,
                seller_membership=validated.seller_membership,
                group_id=validated.seller_membership.group_id,
                special_instructions=validated.special_instructions,
                order_total=total,
                fulfillment_schedule_type=validated.fulfillment_schedule_type,
                fulfillment_date=validated.fulfillment_date,
                fulfillment_method=validated.fulfillment_method,
                fulfillment_details=validated.fulfillment_details,
                items=[item.snapshot() for item in validated.items],
            )

        logger.info(
            "Order %s placed by user %s with membership %s, total %s",
            order.uuid, caller.pk, validated.seller_membership.pk, total,
        )
        return order_payload(order), True

    def _find_by_token(self, request_token) -> Optional[Order]:
        return (
            Order.objects
            .select_related('seller_membership')
            .filter(request_token=request_token)
            .first()
        )

    def _replay(self, existing: Order, caller) -> dict:
        if existing.buyer_id != caller.pk:
            raise DuplicateOrderRequestError("Request token has already been used")
        logger.info("Replaying order %s for token %s", existing.uuid, existing.request_token)
        return order_payload(existing)
