"""
Domain-specific exceptions for merchant_groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MerchantGroupsServiceError(Exception):
    """Base exception for all merchant group service errors."""
    pass


class MerchantGroupNotFoundError(MerchantGroupsServiceError):
    """Raised when a group does not exist or is inaccessible."""
    pass


class GroupNameTakenError(MerchantGroupsServiceError):
    """Raised when another group already uses the requested name."""
    pass


class AlreadyMemberError(MerchantGroupsServiceError):
    """Raised when adding a user who already belongs to the group."""
    pass


class NotMemberError(MerchantGroupsServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class CannotRemoveOwnerError(MerchantGroupsServiceError):
    """Raised when attempting to remove the group owner."""
    pass


class InsufficientPermissionsError(MerchantGroupsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class UserNotFoundError(MerchantGroupsServiceError):
    """Raised when a referenced user does not exist."""
    pass


class MembershipNotFoundError(MerchantGroupsServiceError):
    """Raised when no membership matches a user/group pair or token."""
    pass


class HasOrdersError(MerchantGroupsServiceError):
    """Raised when a membership or group is still referenced by placed orders."""
    pass
