from rest_framework import permissions

from .services import dish_permission


class CanViewDish(permissions.BasePermission):
    """
    Permission: Dish owner or a member of the dish's group.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Dish instance
        return dish_permission(user_id=request.user.pk, dish=obj).has_view_permissions()


class CanEditDish(permissions.BasePermission):
    """
    Permission: Dish owner only.
    """

    def has_object_permission(self, request, view, obj):
        return dish_permission(user_id=request.user.pk, dish=obj).has_edit_permissions()
