"""
Accounts app permissions

Custom permissions for role-based access control.
"""
from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Allow access only to authenticated users with the ADMIN role.
    """

    message = 'Admins only'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role == 'ADMIN')


class IsAdminOrSelf(permissions.BasePermission):
    """
    Permission that allows:
    - Admins to access any user
    - Users to access only their own data
    """

    def has_object_permission(self, request, view, obj):
        # Admin users can access anything
        if request.user.role == 'ADMIN':
            return True

        # Users can only access their own data
        return obj == request.user


class CanPostJobs(permissions.BasePermission):
    """
    Only employers and admins may create job postings.
    """

    message = 'Only employers can post jobs.'

    def has_permission(self, request, view):
        if request.method != 'POST':
            return True
        return request.user.role in ('ADMIN', 'EMPLOYER')


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Object-level permission for records carrying a ``user`` owner.

    Reads are open to any authenticated user; writes are limited to the
    owner and admins.
    """

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        if request.user.role == 'ADMIN':
            return True
        return obj.user_id == request.user.id
