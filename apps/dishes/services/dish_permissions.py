"""
Dish access evaluation.

A dish owner may edit; any member of the dish's group may view;
everyone else gets nothing.
"""

from django.db import models

from apps.merchant_groups.services import get_user_memberships


class DishPermission(models.TextChoices):
    READ = 'read', 'Read'
    READ_WRITE = 'read_write', 'Read/Write'
    NONE = 'none', 'None'

    def has_edit_permissions(self) -> bool:
        return self is DishPermission.READ_WRITE

    def has_view_permissions(self) -> bool:
        return self in (DishPermission.READ, DishPermission.READ_WRITE)


def dish_permission(*, user_id: int, dish) -> DishPermission:
    """
    Compute what a user may do with a dish.

    Args:
        user_id: Primary key of the caller
        dish: Dish instance (membership and group are read)

    Returns:
        READ_WRITE for the owner, READ for members of the dish's group,
        NONE otherwise
    """
    if dish.owner_id == user_id:
        return DishPermission.READ_WRITE

    dish_group = dish.membership.group.uuid
    caller_groups = {m.group.uuid for m in get_user_memberships(user_id=user_id)}
    if dish_group in caller_groups:
        return DishPermission.READ

    return DishPermission.NONE
