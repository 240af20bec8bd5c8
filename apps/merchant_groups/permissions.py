from rest_framework import permissions


class IsGroupOwner(permissions.BasePermission):
    """
    Permission: User must be the group owner.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a MerchantGroup instance
        return obj.is_owner(request.user)


class IsGroupMemberOrPublic(permissions.BasePermission):
    """
    Permission: Group is public, or the user is one of its members.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a MerchantGroup instance
        return obj.is_public or obj.has_member(request.user)
