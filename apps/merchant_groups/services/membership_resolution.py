"""
Membership resolution.

Maps (user, group) pairs and external membership tokens to the
GroupMembership row that acts as buyer and seller identity. Read-only.
"""

from uuid import UUID

from django.db.models import QuerySet

from apps.merchant_groups.models import GroupMembership

from .exceptions import MembershipNotFoundError


def _parse_token(token) -> UUID:
    if isinstance(token, UUID):
        return token
    try:
        return UUID(str(token))
    except (TypeError, ValueError):
        raise MembershipNotFoundError(f"Membership {token} not found")


def resolve_membership(*, user_id: int, group_id: int) -> GroupMembership:
    """
    Return the membership a user holds in a group.

    Args:
        user_id: Primary key of the user
        group_id: Primary key of the merchant group

    Returns:
        GroupMembership instance with user and group loaded

    Raises:
        MembershipNotFoundError: If the user is not in the group
    """
    try:
        return (
            GroupMembership.objects
            .select_related('user', 'group')
            .get(user_id=user_id, group_id=group_id)
        )
    except GroupMembership.DoesNotExist:
        raise MembershipNotFoundError("User is not a member of this group")


def resolve_membership_by_token(*, token) -> GroupMembership:
    """
    Return the membership behind an external token.

    Malformed tokens are reported the same way as unknown ones.

    Raises:
        MembershipNotFoundError: If no membership has this token
    """
    membership_uuid = _parse_token(token)
    try:
        return (
            GroupMembership.objects
            .select_related('user', 'group')
            .get(uuid=membership_uuid)
        )
    except GroupMembership.DoesNotExist:
        raise MembershipNotFoundError(f"Membership {token} not found")


def resolve_seller_membership(*, token) -> GroupMembership:
    """Membership that sells under the given token."""
    return resolve_membership_by_token(token=token)


def resolve_buyer_membership(*, user_id: int, group_id: int) -> GroupMembership:
    """Membership a buyer pays from in the given group."""
    return resolve_membership(user_id=user_id, group_id=group_id)


def get_user_memberships(*, user_id: int) -> QuerySet[GroupMembership]:
    """All memberships of a user, oldest first."""
    return (
        GroupMembership.objects
        .filter(user_id=user_id)
        .select_related('group')
        .order_by('joined_at')
    )
