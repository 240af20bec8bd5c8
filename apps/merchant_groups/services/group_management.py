"""
Group management service.

Handles merchant group CRUD operations with proper transaction safety.
"""

import logging
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import ProtectedError, Q, QuerySet

from apps.accounts.models import User
from apps.merchant_groups.models import MerchantGroup, GroupMembership, default_merchant_name

from .exceptions import (
    MerchantGroupNotFoundError,
    GroupNameTakenError,
    InsufficientPermissionsError,
    UserNotFoundError,
    HasOrdersError,
)

logger = logging.getLogger(__name__)


def _lock_group(group_uuid: UUID) -> MerchantGroup:
    try:
        return (
            MerchantGroup.objects
            .select_for_update()
            .get(uuid=group_uuid)
        )
    except MerchantGroup.DoesNotExist:
        raise MerchantGroupNotFoundError(f"Merchant group {group_uuid} not found")


def _ensure_name_available(name: str, exclude_pk: Optional[int] = None) -> None:
    taken = MerchantGroup.objects.filter(name=name)
    if exclude_pk is not None:
        taken = taken.exclude(pk=exclude_pk)
    if taken.exists():
        raise GroupNameTakenError(f"A group named '{name}' already exists")


def create_group(
    *,
    name: str,
    owner: User,
    description: str = '',
    is_public: bool = False,
    credits_name: Optional[str] = None,
    default_credit_amount: int = 0
) -> MerchantGroup:
    """
    Create a new merchant group and seat the creator as its first member.

    This is a multi-step operation wrapped in a transaction:
    1. Create the group
    2. Create the owner membership with the default store name and credits

    Args:
        name: Group name (globally unique)
        owner: User who will own the group
        description: Optional group description
        is_public: Whether non-members can see the group (default False)
        credits_name: Label for the group currency
        default_credit_amount: Credits each new membership starts with

    Returns:
        Created MerchantGroup instance

    Raises:
        GroupNameTakenError: If the name is already used
    """
    _ensure_name_available(name)

    try:
        with transaction.atomic():
            group = MerchantGroup.objects.create(
                name=name,
                owner=owner,
                description=description,
                is_public=is_public,
                credits_name=credits_name or settings.DEFAULT_CREDITS_NAME,
                default_credit_amount=default_credit_amount,
            )

            GroupMembership.objects.create(
                user=owner,
                group=group,
                merchant_name=default_merchant_name(owner),
                credits=default_credit_amount,
            )
    except IntegrityError:
        # Lost a race on the unique name
        raise GroupNameTakenError(f"A group named '{name}' already exists")

    logger.info("Created merchant group %s owned by %s", group.uuid, owner.uuid)
    return group


@transaction.atomic
def update_group(
    *,
    group_uuid: UUID,
    user: User,
    name: Optional[str] = None,
    description: Optional[str] = None,
    credits_name: Optional[str] = None,
    default_credit_amount: Optional[int] = None
) -> MerchantGroup:
    """
    Update group details (owner only).

    Uses select_for_update to prevent concurrent modifications. Changing
    default_credit_amount only affects memberships created afterwards.

    Returns:
        Updated MerchantGroup instance

    Raises:
        MerchantGroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the owner
        GroupNameTakenError: If the new name is already used
    """
    group = _lock_group(group_uuid)

    if not group.is_owner(user):
        raise InsufficientPermissionsError("Only the group owner can update the group")

    update_fields = ['updated_at']

    if name is not None and name != group.name:
        _ensure_name_available(name, exclude_pk=group.pk)
        group.name = name
        update_fields.append('name')

    if description is not None:
        group.description = description
        update_fields.append('description')

    if credits_name is not None:
        group.credits_name = credits_name
        update_fields.append('credits_name')

    if default_credit_amount is not None:
        group.default_credit_amount = default_credit_amount
        update_fields.append('default_credit_amount')

    group.save(update_fields=update_fields)

    return group


@transaction.atomic
def set_group_visibility(*, group_uuid: UUID, user: User, is_public: bool) -> MerchantGroup:
    """
    Make a group public or private (owner only).

    Raises:
        MerchantGroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    group = _lock_group(group_uuid)

    if not group.is_owner(user):
        raise InsufficientPermissionsError("Only the group owner can change visibility")

    group.is_public = is_public
    group.save(update_fields=['is_public', 'updated_at'])
    return group


@transaction.atomic
def delete_group(*, group_uuid: UUID, user: User) -> None:
    """
    Delete a group (owner only).

    Memberships and their dishes go with it. Groups with orders are kept.

    Raises:
        MerchantGroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user is not the owner
        HasOrdersError: If any order was placed in the group
    """
    group = _lock_group(group_uuid)

    if not group.is_owner(user):
        raise InsufficientPermissionsError("Only the group owner can delete the group")

    try:
        group.delete()
    except ProtectedError:
        raise HasOrdersError("Group has orders and cannot be deleted")
    logger.info("Deleted merchant group %s", group_uuid)


def list_visible_groups(*, user: User) -> QuerySet[MerchantGroup]:
    """Public groups plus every group the user belongs to."""
    return (
        MerchantGroup.objects
        .filter(Q(is_public=True) | Q(memberships__user=user))
        .select_related('owner')
        .distinct()
    )


def get_groups_of_user(*, user_uuid: UUID) -> QuerySet[MerchantGroup]:
    """
    Groups a user belongs to.

    Raises:
        UserNotFoundError: If the user doesn't exist
    """
    try:
        target = User.objects.get(uuid=user_uuid, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_uuid} not found")

    return (
        MerchantGroup.objects
        .filter(memberships__user=target)
        .select_related('owner')
        .distinct()
    )
