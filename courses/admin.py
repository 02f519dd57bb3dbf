from django.contrib import admin
from .models import CourseModule, ModuleAsset


class ModuleAssetInline(admin.TabularInline):
    model = ModuleAsset
    extra = 0


@admin.register(CourseModule)
class CourseModuleAdmin(admin.ModelAdmin):
    """Admin interface for CourseModule."""

    list_display = ['title', 'category', 'role', 'visibility', 'is_archived', 'created_at']
    list_filter = ['category', 'visibility', 'is_archived']
    search_fields = ['title', 'description']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ModuleAssetInline]
