"""
Domain exceptions for orders app.

Errors fall into categories the HTTP layer maps to status codes:
not found, permission denied, validation failed, conflict, transient
and internal. Only the first failure of a request is reported.
"""


class OrdersServiceError(Exception):
    """Base exception for order service errors."""
    pass


# Not found

class ResourceNotFoundError(OrdersServiceError):
    """A referenced entity does not exist."""
    pass


class MerchantNotFoundError(ResourceNotFoundError):
    """Seller membership token does not resolve."""
    pass


class DishNotFoundError(ResourceNotFoundError):
    """A cart item names an unknown dish."""
    pass


class OrderNotFoundError(ResourceNotFoundError):
    pass


# Permission denied

class OrderPermissionError(OrdersServiceError):
    """Caller may not act on this resource."""
    pass


class NotGroupMemberError(OrderPermissionError):
    """Caller has no membership in the seller's group."""
    pass


class OrderAccessDeniedError(OrderPermissionError):
    """Caller is neither party of the order, or not allowed this change."""
    pass


# Validation failed

class OrderValidationError(OrdersServiceError):
    """The request breaks a business rule."""
    pass


class InvalidScheduleError(OrderValidationError):
    pass


class InvalidFulfillmentMethodError(OrderValidationError):
    pass


class InvalidQuantityError(OrderValidationError):
    pass


class MixedMerchantError(OrderValidationError):
    pass


class InsufficientFundsError(OrderValidationError):
    pass


class IllegalStatusTransitionError(OrderValidationError):
    """Requested status is not reachable from the current one."""
    pass


# Conflict

class DuplicateOrderRequestError(OrdersServiceError):
    """Request token already used by a different user."""
    pass


# Transient / internal

class CatalogUnavailableError(OrdersServiceError):
    """Reference data could not be read; safe to retry."""
    pass


class OrderPersistenceError(OrdersServiceError):
    """Order could not be committed after retries."""
    pass
