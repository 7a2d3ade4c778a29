from rest_framework import permissions


class IsSellerOrReadOnly(permissions.BasePermission):
    """Only the seller may change or delete a listing."""

    message = "Access denied"

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.seller_id == request.user.id
