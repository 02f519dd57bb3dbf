from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for custom User model."""

    list_display = [
        'username',
        'email',
        'name',
        'role',
        'state',
        'is_active',
        'is_staff',
    ]
    list_filter = ['role', 'is_active', 'is_staff', 'is_superuser']
    search_fields = ['username', 'email', 'name']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Job Board', {'fields': ('role', 'name', 'state', 'profile_pic')}),
        ('Moderation', {'fields': ('pending_approval', 'last_declined_update')}),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Job Board', {'fields': ('role', 'name', 'state')}),
    )
