"""
Membership management service.

Handles group membership operations with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import ProtectedError, QuerySet

from apps.accounts.models import User
from apps.merchant_groups.models import MerchantGroup, GroupMembership, default_merchant_name

from .exceptions import (
    MerchantGroupNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    CannotRemoveOwnerError,
    InsufficientPermissionsError,
    UserNotFoundError,
    HasOrdersError,
)

logger = logging.getLogger(__name__)


def _get_user(user_uuid: UUID) -> User:
    try:
        return User.objects.get(uuid=user_uuid, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_uuid} not found")


@transaction.atomic
def add_member(
    *,
    group_uuid: UUID,
    user_uuid: UUID,
    added_by: User
) -> GroupMembership:
    """
    Add a user to a group (owner only).

    The group row is locked so concurrent adds of the same user
    serialize on it. The new membership starts with the group's
    default credit amount.

    Args:
        group_uuid: Token of the group
        user_uuid: Token of the user to add
        added_by: User performing the add (must be owner)

    Returns:
        Created GroupMembership instance

    Raises:
        MerchantGroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If added_by is not the owner
        UserNotFoundError: If the user to add doesn't exist
        AlreadyMemberError: If the user is already a member
    """
    try:
        group = (
            MerchantGroup.objects
            .select_for_update()
            .get(uuid=group_uuid)
        )
    except MerchantGroup.DoesNotExist:
        raise MerchantGroupNotFoundError(f"Merchant group {group_uuid} not found")

    if not group.is_owner(added_by):
        raise InsufficientPermissionsError("Only the group owner can add members")

    new_member = _get_user(user_uuid)

    if group.has_member(new_member):
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    try:
        with transaction.atomic():
            membership = GroupMembership.objects.create(
                user=new_member,
                group=group,
                merchant_name=default_merchant_name(new_member),
                credits=group.default_credit_amount,
            )
    except IntegrityError:
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    logger.info("Added user %s to merchant group %s", new_member.uuid, group.uuid)
    return membership


@transaction.atomic
def remove_member(
    *,
    group_uuid: UUID,
    user_uuid: UUID,
    removed_by: User
) -> None:
    """
    Remove a member from a group (owner only).

    Cannot remove the group owner.

    Raises:
        MerchantGroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If removed_by is not the owner
        UserNotFoundError: If the target user doesn't exist
        CannotRemoveOwnerError: If trying to remove the owner
        NotMemberError: If target user is not a member
        HasOrdersError: If the membership is referenced by orders
    """
    try:
        group = MerchantGroup.objects.get(uuid=group_uuid)
    except MerchantGroup.DoesNotExist:
        raise MerchantGroupNotFoundError(f"Merchant group {group_uuid} not found")

    if not group.is_owner(removed_by):
        raise InsufficientPermissionsError("Only the group owner can remove members")

    target = _get_user(user_uuid)

    if group.is_owner(target):
        raise CannotRemoveOwnerError("Cannot remove the group owner")

    try:
        membership = (
            GroupMembership.objects
            .select_for_update()
            .get(group=group, user=target)
        )
    except GroupMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this group")

    try:
        membership.delete()
    except ProtectedError:
        raise HasOrdersError("Member has placed or received orders and cannot be removed")
    logger.info("Removed user %s from merchant group %s", target.uuid, group.uuid)


def get_group_members(*, group_uuid: UUID, user: User) -> QuerySet[GroupMembership]:
    """
    Get all members of a group.

    Members can always list; others only when the group is public.

    Raises:
        MerchantGroupNotFoundError: If group doesn't exist
        NotMemberError: If the group is private and user is not a member
    """
    try:
        group = MerchantGroup.objects.get(uuid=group_uuid)
    except MerchantGroup.DoesNotExist:
        raise MerchantGroupNotFoundError(f"Merchant group {group_uuid} not found")

    if not group.is_public and not group.has_member(user):
        raise NotMemberError("You are not a member of this group")

    return (
        GroupMembership.objects
        .filter(group=group)
        .select_related('user')
        .order_by('joined_at')
    )


@transaction.atomic
def update_merchant_name(
    *,
    group_uuid: UUID,
    user: User,
    merchant_name: str
) -> GroupMembership:
    """
    Rename the caller's own store in a group.

    Raises:
        NotMemberError: If user has no membership in the group
    """
    try:
        membership = (
            GroupMembership.objects
            .select_for_update()
            .get(group__uuid=group_uuid, user=user)
        )
    except GroupMembership.DoesNotExist:
        raise NotMemberError("You are not a member of this group")

    membership.merchant_name = merchant_name
    membership.save(update_fields=['merchant_name'])
    return membership
