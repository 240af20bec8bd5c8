"""
Orders app services layer.

Validation is pure and reads through a catalog; placement wraps it in a
transaction with a guarded credit debit and idempotent request tokens.
"""

from .exceptions import (
    OrdersServiceError,
    ResourceNotFoundError,
    MerchantNotFoundError,
    DishNotFoundError,
    OrderNotFoundError,
    OrderPermissionError,
    NotGroupMemberError,
    OrderAccessDeniedError,
    OrderValidationError,
    InvalidScheduleError,
    InvalidFulfillmentMethodError,
    InvalidQuantityError,
    MixedMerchantError,
    InsufficientFundsError,
    IllegalStatusTransitionError,
    DuplicateOrderRequestError,
    CatalogUnavailableError,
    OrderPersistenceError,
)

from .dto import (
    OrderItemRequest,
    FulfillmentDetails,
    OrderRequest,
    ValidatedOrderItem,
    ValidatedOrder,
)

from .catalog import DjangoCatalog
from .validation import OrderValidator

from .placement import (
    OrderCommitPipeline,
    preview_payload,
    order_payload,
)

from .lifecycle import (
    ALLOWED_TRANSITIONS,
    can_transition,
    transition_order_status,
)

from .order_queries import (
    get_customer_orders,
    get_merchant_orders,
    get_order_details,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'ResourceNotFoundError',
    'MerchantNotFoundError',
    'DishNotFoundError',
    'OrderNotFoundError',
    'OrderPermissionError',
    'NotGroupMemberError',
    'OrderAccessDeniedError',
    'OrderValidationError',
    'InvalidScheduleError',
    'InvalidFulfillmentMethodError',
    'InvalidQuantityError',
    'MixedMerchantError',
    'InsufficientFundsError',
    'IllegalStatusTransitionError',
    'DuplicateOrderRequestError',
    'CatalogUnavailableError',
    'OrderPersistenceError',

    # Data
    'OrderItemRequest',
    'FulfillmentDetails',
    'OrderRequest',
    'ValidatedOrderItem',
    'ValidatedOrder',

    # Validation & Placement
    'DjangoCatalog',
    'OrderValidator',
    'OrderCommitPipeline',
    'preview_payload',
    'order_payload',

    # Lifecycle
    'ALLOWED_TRANSITIONS',
    'can_transition',
    'transition_order_status',

    # Queries
    'get_customer_orders',
    'get_merchant_orders',
    'get_order_details',
]
