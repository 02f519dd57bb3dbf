"""
Profiles app models

ProfileUpdateRequest model for profile edits awaiting admin review.
"""
from django.conf import settings
from django.db import models


class ProfileUpdateRequest(models.Model):
    """
    A staged change to a user's name, state or profile picture.

    Requests start pending and are resolved once by an admin, either
    approved (changes applied) or declined (changes discarded).
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        DECLINED = 'declined', 'Declined'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile_update_requests',
    )
    updates = models.JSONField(default=dict)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='reviewed_profile_requests',
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Profile update for {self.user.username} ({self.status})"

    class Meta:
        verbose_name = 'Profile Update Request'
        verbose_name_plural = 'Profile Update Requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='profreq_status_created_idx'),
        ]
