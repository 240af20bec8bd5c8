"""Domain-specific exceptions for dishes services."""


class DishesServiceError(Exception):
    """Base exception for dishes services."""
    pass


class DishNotFoundError(DishesServiceError):
    """Raised when dish does not exist."""
    pass


class DishPermissionDeniedError(DishesServiceError):
    """Raised when a user may not view or edit a dish."""
    pass


class InvalidDishDataError(DishesServiceError):
    """Raised when dish fields violate business rules."""
    pass


class PictureNotFoundError(DishesServiceError):
    """Raised when a picture index is out of range."""
    pass
