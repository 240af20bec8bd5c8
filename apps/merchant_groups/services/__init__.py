"""
Merchant groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    MerchantGroupsServiceError,
    MerchantGroupNotFoundError,
    GroupNameTakenError,
    AlreadyMemberError,
    NotMemberError,
    CannotRemoveOwnerError,
    InsufficientPermissionsError,
    UserNotFoundError,
    MembershipNotFoundError,
    HasOrdersError,
)

from .group_management import (
    create_group,
    update_group,
    set_group_visibility,
    delete_group,
    list_visible_groups,
    get_groups_of_user,
)

from .membership_management import (
    add_member,
    remove_member,
    get_group_members,
    update_merchant_name,
)

from .membership_resolution import (
    resolve_membership,
    resolve_membership_by_token,
    resolve_seller_membership,
    resolve_buyer_membership,
    get_user_memberships,
)


__all__ = [
    # Exceptions
    'MerchantGroupsServiceError',
    'MerchantGroupNotFoundError',
    'GroupNameTakenError',
    'AlreadyMemberError',
    'NotMemberError',
    'CannotRemoveOwnerError',
    'InsufficientPermissionsError',
    'UserNotFoundError',
    'MembershipNotFoundError',
    'HasOrdersError',

    # Group Management
    'create_group',
    'update_group',
    'set_group_visibility',
    'delete_group',
    'list_visible_groups',
    'get_groups_of_user',

    # Membership Management
    'add_member',
    'remove_member',
    'get_group_members',
    'update_merchant_name',

    # Membership Resolution
    'resolve_membership',
    'resolve_membership_by_token',
    'resolve_seller_membership',
    'resolve_buyer_membership',
    'get_user_memberships',
]
