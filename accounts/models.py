"""
Accounts app models

Custom User model extending AbstractUser with role-based access and the
profile fields that go through admin approval.
"""
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model with role and moderated profile fields.

    Extends Django's AbstractUser to add:
    - role: Distinguish between admins, employers and job seekers
    - name/state/profile_pic: Profile fields changed only through approval
    - pending_approval: Copy of the latest staged profile update, or None
    - last_declined_update: Date and reason of the last declined update
    """

    ADMIN = 'ADMIN'
    EMPLOYER = 'EMPLOYER'
    JOB_SEEKER = 'JOB_SEEKER'

    ROLE_CHOICES = [
        (ADMIN, 'Admin'),
        (EMPLOYER, 'Employer'),
        (JOB_SEEKER, 'Job Seeker'),
    ]

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=JOB_SEEKER,
    )
    name = models.CharField(max_length=255, blank=True)
    state = models.CharField(max_length=100, blank=True)
    profile_pic = models.CharField(max_length=500, blank=True)
    pending_approval = models.JSONField(null=True, blank=True)
    last_declined_update = models.JSONField(null=True, blank=True)

    def __str__(self):
        return f"{self.username} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == self.ADMIN

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'
