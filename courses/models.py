"""
Courses app models

CourseModule and ModuleAsset models for training content.
"""
from django.db import models


class CourseModule(models.Model):
    """
    A unit of training content.

    Archived modules are hidden from non-admins.
    """

    class Visibility(models.TextChoices):
        PUBLIC = 'public', 'Public'
        PRIVATE = 'private', 'Private'

    title = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    role = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    visibility = models.CharField(
        max_length=20,
        choices=Visibility.choices,
        default=Visibility.PUBLIC,
    )
    is_archived = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.title} ({self.category})"

    class Meta:
        verbose_name = 'Course Module'
        verbose_name_plural = 'Course Modules'
        ordering = ['created_at']


class ModuleAsset(models.Model):
    """
    Content attached to a module: inline text or a link to hosted media.
    """

    class Type(models.TextChoices):
        TEXT = 'text', 'Text'
        LINK = 'link', 'Link'
        VIDEO = 'video', 'Video'
        PDF = 'pdf', 'PDF'
        IMAGE = 'image', 'Image'

    module = models.ForeignKey(
        CourseModule,
        on_delete=models.CASCADE,
        related_name='assets',
    )
    type = models.CharField(max_length=20, choices=Type.choices)
    title = models.CharField(max_length=255)
    text = models.TextField(blank=True)
    url = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.title} [{self.type}]"

    class Meta:
        verbose_name = 'Module Asset'
        verbose_name_plural = 'Module Assets'
        ordering = ['created_at']
