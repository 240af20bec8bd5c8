"""Dish CRUD operations service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Max, Q, QuerySet
from django.contrib.auth import get_user_model

from apps.merchant_groups.services import (
    resolve_membership_by_token,
    MembershipNotFoundError,
)

from ..models import Dish, DishPicture
from .dish_permissions import dish_permission
from .exceptions import (
    DishNotFoundError,
    DishPermissionDeniedError,
    InvalidDishDataError,
    PictureNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def _validate_fields(price: Optional[int], spiciness_level: Optional[float]) -> None:
    if price is not None and price < 0:
        raise InvalidDishDataError("Price cannot be negative")
    if spiciness_level is not None and spiciness_level < 0:
        raise InvalidDishDataError("Spiciness level cannot be negative")


def _get_dish(dish_uuid: UUID, *, for_update: bool = False) -> Dish:
    queryset = Dish.objects.select_related('membership__group')
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(uuid=dish_uuid)
    except Dish.DoesNotExist:
        raise DishNotFoundError(f"Dish {dish_uuid} does not exist")


@transaction.atomic
def create_dish(
    *,
    user: User,
    membership_token: UUID,
    name: str,
    price: int,
    short_description: str = '',
    description: str = '',
    spiciness_level: float = 0.0,
    is_published: bool = False
) -> Dish:
    """
    List a new dish under one of the caller's memberships.

    Args:
        user: Seller creating the dish
        membership_token: Token of the seller membership to list under
        name: Dish name
        price: Price in group credits
        short_description: One-line summary
        description: Full description
        spiciness_level: Non-negative heat rating
        is_published: Whether buyers can see the dish in listings

    Returns:
        Created Dish instance

    Raises:
        DishPermissionDeniedError: If the membership does not belong to user
        InvalidDishDataError: If price or spiciness is negative
    """
    try:
        membership = resolve_membership_by_token(token=membership_token)
    except MembershipNotFoundError:
        raise DishPermissionDeniedError("User is not a member of group")

    if membership.user_id != user.pk:
        raise DishPermissionDeniedError("User is not a member of group")

    _validate_fields(price, spiciness_level)

    dish = Dish.objects.create(
        owner=user,
        membership=membership,
        name=name,
        short_description=short_description,
        description=description,
        price=price,
        spiciness_level=spiciness_level,
        is_published=is_published,
    )

    logger.info("Dish %s listed by membership %s", dish.uuid, membership.uuid)
    return dish


def get_dish(*, dish_uuid: UUID, user: User) -> Dish:
    """
    Get a dish the user may view.

    Raises:
        DishNotFoundError: If dish doesn't exist
        DishPermissionDeniedError: If user is outside the dish's group
    """
    dish = _get_dish(dish_uuid)

    if not dish_permission(user_id=user.pk, dish=dish).has_view_permissions():
        raise DishPermissionDeniedError("User is not permitted to view this dish")

    return dish


def list_dishes_for_membership(*, membership_token: UUID, user: User) -> QuerySet[Dish]:
    """
    Dishes listed by a seller membership.

    The caller must share the seller's group. Only the seller sees
    unpublished dishes.

    Raises:
        DishNotFoundError: If the membership doesn't exist
        DishPermissionDeniedError: If the caller is not in the seller's group
    """
    try:
        seller = resolve_membership_by_token(token=membership_token)
    except MembershipNotFoundError:
        raise DishNotFoundError("Merchant group member does not exist")

    if not seller.group.memberships.filter(user=user).exists():
        raise DishPermissionDeniedError("User is not permitted to view these dishes")

    dishes = (
        Dish.objects
        .filter(membership=seller)
        .select_related('membership__group')
        .prefetch_related('pictures')
    )
    if seller.user_id != user.pk:
        dishes = dishes.filter(is_published=True)
    return dishes


@transaction.atomic
def update_dish(
    *,
    dish_uuid: UUID,
    user: User,
    name: Optional[str] = None,
    short_description: Optional[str] = None,
    description: Optional[str] = None,
    price: Optional[int] = None,
    spiciness_level: Optional[float] = None,
    is_published: Optional[bool] = None
) -> Dish:
    """
    Update dish fields (owner only).

    Price changes do not affect orders already placed; those keep
    their own price snapshot.

    Raises:
        DishNotFoundError: If dish doesn't exist
        DishPermissionDeniedError: If user cannot edit the dish
        InvalidDishDataError: If price or spiciness is negative
    """
    dish = _get_dish(dish_uuid, for_update=True)

    if not dish_permission(user_id=user.pk, dish=dish).has_edit_permissions():
        raise DishPermissionDeniedError("User is not permitted to edit this dish")

    _validate_fields(price, spiciness_level)

    changes = {
        'name': name,
        'short_description': short_description,
        'description': description,
        'price': price,
        'spiciness_level': spiciness_level,
        'is_published': is_published,
    }
    update_fields = ['updated_at']
    for field, value in changes.items():
        if value is not None:
            setattr(dish, field, value)
            update_fields.append(field)

    dish.save(update_fields=update_fields)
    return dish


@transaction.atomic
def remove_dish(*, dish_uuid: UUID, user: User) -> None:
    """
    Delete a dish (owner only).

    Raises:
        DishNotFoundError: If dish doesn't exist
        DishPermissionDeniedError: If user does not own the dish
    """
    dish = _get_dish(dish_uuid, for_update=True)

    if not dish_permission(user_id=user.pk, dish=dish).has_edit_permissions():
        raise DishPermissionDeniedError("User does not own dish")

    dish.delete()
    logger.info("Dish %s removed", dish_uuid)


@transaction.atomic
def add_dish_picture(
    *,
    dish_uuid: UUID,
    user: User,
    image_reference: str,
    description: str = ''
) -> DishPicture:
    """
    Append a picture reference to a dish (owner only).

    The dish row is locked so concurrent appends get distinct positions.

    Raises:
        DishNotFoundError: If dish doesn't exist
        DishPermissionDeniedError: If user cannot edit the dish
        InvalidDishDataError: If the reference is blank
    """
    dish = _get_dish(dish_uuid, for_update=True)

    if not dish_permission(user_id=user.pk, dish=dish).has_edit_permissions():
        raise DishPermissionDeniedError("User is not permitted to edit this dish")

    if not image_reference or not image_reference.strip():
        raise InvalidDishDataError("Image reference is required")

    last = dish.pictures.aggregate(last=Max('position'))['last']
    return DishPicture.objects.create(
        dish=dish,
        image_reference=image_reference.strip(),
        description=description,
        position=0 if last is None else last + 1,
    )


@transaction.atomic
def remove_dish_picture(*, dish_uuid: UUID, user: User, index: int) -> None:
    """
    Remove the picture at a 0-based position and close the gap.

    Raises:
        DishNotFoundError: If dish doesn't exist
        DishPermissionDeniedError: If user cannot edit the dish
        PictureNotFoundError: If index is out of range
    """
    dish = _get_dish(dish_uuid, for_update=True)

    if not dish_permission(user_id=user.pk, dish=dish).has_edit_permissions():
        raise DishPermissionDeniedError("User is not permitted to edit this dish")

    pictures = list(dish.pictures.order_by('position'))
    if index < 0 or index >= len(pictures):
        raise PictureNotFoundError(f"Dish has no picture at position {index}")

    pictures.pop(index).delete()

    for position, picture in enumerate(pictures):
        if picture.position != position:
            picture.position = position
            picture.save(update_fields=['position'])


def list_visible_dishes(*, user: User) -> QuerySet[Dish]:
    """Published dishes across the user's groups, plus the user's own."""
    return (
        Dish.objects
        .filter(membership__group__memberships__user=user)
        .filter(Q(is_published=True) | Q(owner=user))
        .select_related('membership__group')
        .distinct()
    )
