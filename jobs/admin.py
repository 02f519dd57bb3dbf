from django.contrib import admin
from .models import Category, JobPosting, JobPreference


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin interface for Category."""

    list_display = ['name', 'description', 'created_at']
    search_fields = ['name']
    readonly_fields = ['id', 'created_at']


@admin.register(JobPosting)
class JobPostingAdmin(admin.ModelAdmin):
    """Admin interface for JobPosting."""

    list_display = ['title', 'company', 'category', 'user', 'location', 'created_at']
    list_filter = ['category', 'created_at']
    search_fields = ['title', 'company', 'user__username', 'location', 'description']
    readonly_fields = ['location_lower', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Info', {
            'fields': ('user', 'title', 'company', 'category')
        }),
        ('Details', {
            'fields': ('description', 'location', 'location_lower', 'shift_details')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(JobPreference)
class JobPreferenceAdmin(admin.ModelAdmin):
    """Admin interface for JobPreference."""

    list_display = ['user', 'preferred_location', 'created_at']
    search_fields = ['user__username', 'preferred_location']
    readonly_fields = ['created_at', 'updated_at']
