from django.contrib import admin
from .models import ProfileUpdateRequest


@admin.register(ProfileUpdateRequest)
class ProfileUpdateRequestAdmin(admin.ModelAdmin):
    """Admin interface for ProfileUpdateRequest."""

    list_display = ['user', 'status', 'reviewed_by', 'reviewed_at', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['user__username', 'user__email', 'reason']
    readonly_fields = ['user', 'updates', 'status', 'reviewed_by', 'reviewed_at', 'created_at']
