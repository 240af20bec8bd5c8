"""Dishes services."""

from .exceptions import (
    DishesServiceError,
    DishNotFoundError,
    DishPermissionDeniedError,
    InvalidDishDataError,
    PictureNotFoundError,
)
from .dish_permissions import DishPermission, dish_permission
from .dish_management import (
    create_dish,
    get_dish,
    list_dishes_for_membership,
    list_visible_dishes,
    update_dish,
    remove_dish,
    add_dish_picture,
    remove_dish_picture,
)

__all__ = [
    # Exceptions
    'DishesServiceError',
    'DishNotFoundError',
    'DishPermissionDeniedError',
    'InvalidDishDataError',
    'PictureNotFoundError',
    # Permissions
    'DishPermission',
    'dish_permission',
    # Dish management
    'create_dish',
    'get_dish',
    'list_dishes_for_membership',
    'list_visible_dishes',
    'update_dish',
    'remove_dish',
    'add_dish_picture',
    'remove_dish_picture',
]
