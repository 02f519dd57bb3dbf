"""
Jobs app models

Category, JobPosting and JobPreference models for the job board.
"""
import uuid

from django.conf import settings
from django.db import models
from django.db.models.functions import Lower


def normalize_location(value) -> str:
    return (value or '').strip().lower()


class Category(models.Model):
    """
    Job category referenced by postings and, by id or name, by preferences.

    The primary key is a UUID so that identifier-shaped preference values
    can be told apart from free-text category names.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name

    class Meta:
        verbose_name = 'Category'
        verbose_name_plural = 'Categories'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(Lower('name'), name='unique_category_name_ci'),
        ]


class JobPosting(models.Model):
    """
    A job advertised by an employer.

    location_lower mirrors location (trimmed, lowercased) and is kept in sync
    on save. Rows inserted without going through save() may lack it.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='job_postings',
    )
    title = models.CharField(max_length=255)
    company = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name='job_postings',
    )
    location = models.CharField(max_length=255, blank=True)
    location_lower = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    shift_details = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        company = self.company or "Unknown Company"
        return f"{self.title} at {company}"

    def save(self, *args, **kwargs):
        self.location_lower = normalize_location(self.location) or None
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'location' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'location_lower'}
        super().save(*args, **kwargs)

    class Meta:
        verbose_name = 'Job Posting'
        verbose_name_plural = 'Job Postings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'created_at'], name='jobposting_cat_created_idx'),
        ]


class JobPreference(models.Model):
    """
    A job seeker's saved search: one location plus a list of categories.

    preferred_categories holds category ids or free-text category names.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='job_preferences',
    )
    preferred_location = models.CharField(max_length=255)
    preferred_categories = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Preference for {self.user.username} - {self.preferred_location}"

    class Meta:
        verbose_name = 'Job Preference'
        verbose_name_plural = 'Job Preferences'
        ordering = ['-created_at']
