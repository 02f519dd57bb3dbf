"""
Profiles Service Layer
Handles the admin approval workflow for profile edits.

A non-admin edit is staged as a pending ProfileUpdateRequest and mirrored
on the user's pending_approval field. An admin then approves it (changes
applied) or declines it (changes discarded). Resolution is a conditional
write on the request status, so a request is resolved at most once even
when two admins act on it at the same time.

Two concurrent submissions by the same user both create pending requests;
the later one wins on pending_approval.
"""
import logging
from typing import Dict, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from accounts.utils import UserPatch
from .models import ProfileUpdateRequest

logger = logging.getLogger(__name__)


EDITABLE_FIELDS = ['name', 'state', 'profile_pic']
FIELD_ALIASES = {'profilePic': 'profile_pic'}


class ProfileRequestNotFound(Exception):
    """
    Raised when a request does not exist or is no longer pending.
    """


class ProfileWorkflowError(Exception):
    """
    Raised when a workflow step fails in the database.
    """


class ProfileUpdateService:
    """Service for submitting and reviewing profile updates."""

    @staticmethod
    def clean_updates(data: Dict) -> Dict[str, str]:
        """
        Keep the editable fields that carry a value.

        Args:
            data: Request payload; unknown keys are ignored

        Returns:
            Dictionary of field name to new value

        Raises:
            ValidationError: If a value is not text or nothing usable remains
        """
        if not hasattr(data, 'items'):
            raise ValidationError("Invalid data format")

        updates = {}
        for key, value in data.items():
            field_name = FIELD_ALIASES.get(key, key)
            if field_name not in EDITABLE_FIELDS or value is None:
                continue
            if not isinstance(value, str):
                raise ValidationError("Invalid data format")
            value = value.strip()
            if value:
                updates[field_name] = value

        if not updates:
            raise ValidationError("No valid fields provided")
        return updates

    @classmethod
    def submit_update(cls, user, data: Dict) -> ProfileUpdateRequest:
        """
        Stage a profile edit for admin review.

        The user's actual name/state/picture are not changed here.

        Raises:
            PermissionError: If the user is an admin
            ValidationError: If the payload has no usable fields
            ProfileWorkflowError: If the database write fails
        """
        if user.is_admin:
            raise PermissionError("Admins cannot update profile.")

        updates = cls.clean_updates(data)

        try:
            with transaction.atomic():
                UserPatch(set_fields={'pending_approval': updates}).apply(user)
                request = ProfileUpdateRequest.objects.create(user=user, updates=updates)
        except DatabaseError as exc:
            logger.exception("Profile update submission failed for user %s", user.pk)
            raise ProfileWorkflowError("Update failed.") from exc

        logger.info(
            "Profile update %s submitted by user %s: %s",
            request.pk, user.pk, ", ".join(sorted(updates)),
        )
        return request

    @staticmethod
    def list_pending():
        """Pending requests, oldest first, with their users loaded."""
        return (
            ProfileUpdateRequest.objects
            .filter(status=ProfileUpdateRequest.Status.PENDING)
            .select_related('user')
            .order_by('created_at', 'pk')
        )

    @staticmethod
    def latest_pending(user) -> Optional[ProfileUpdateRequest]:
        return (
            ProfileUpdateRequest.objects
            .filter(user=user, status=ProfileUpdateRequest.Status.PENDING)
            .order_by('-created_at', '-pk')
            .first()
        )

    @classmethod
    def approve(cls, request_id, admin) -> ProfileUpdateRequest:
        """
        Apply a pending request to its user.

        Raises:
            ProfileRequestNotFound: If the request is missing or resolved
            ProfileWorkflowError: If the database write fails
        """
        try:
            with transaction.atomic():
                request = cls._claim(request_id, admin, ProfileUpdateRequest.Status.APPROVED)
                changes = {
                    key: value for key, value in (request.updates or {}).items()
                    if key in EDITABLE_FIELDS
                }
                UserPatch(
                    set_fields=changes,
                    clear_fields={'pending_approval'},
                ).apply(request.user)
        except DatabaseError as exc:
            logger.exception("Approving profile request %s failed", request_id)
            raise ProfileWorkflowError("Failed to approve request.") from exc

        logger.info("Profile request %s approved by %s", request.pk, admin.pk)
        return request

    @classmethod
    def decline(cls, request_id, admin, reason: str = "") -> ProfileUpdateRequest:
        """
        Discard a pending request, recording why on the user and request.

        Raises:
            ProfileRequestNotFound: If the request is missing or resolved
            ProfileWorkflowError: If the database write fails
        """
        reason = reason if isinstance(reason, str) else ""
        try:
            with transaction.atomic():
                request = cls._claim(
                    request_id, admin, ProfileUpdateRequest.Status.DECLINED, reason=reason
                )
                UserPatch(
                    set_fields={
                        'last_declined_update': {
                            'date': request.reviewed_at.isoformat(),
                            'reason': reason,
                        },
                    },
                    clear_fields={'pending_approval'},
                ).apply(request.user)
        except DatabaseError as exc:
            logger.exception("Declining profile request %s failed", request_id)
            raise ProfileWorkflowError("Failed to decline request.") from exc

        logger.info("Profile request %s declined by %s", request.pk, admin.pk)
        return request

    @staticmethod
    def _claim(request_id, admin, status, reason: Optional[str] = None) -> ProfileUpdateRequest:
        """
        Move a request out of pending in a single conditional UPDATE.
        """
        try:
            request_id = int(request_id)
        except (TypeError, ValueError):
            raise ProfileRequestNotFound("Request not found or already processed.")

        values = {
            'status': status,
            'reviewed_by': admin,
            'reviewed_at': timezone.now(),
        }
        if reason is not None:
            values['reason'] = reason

        claimed = ProfileUpdateRequest.objects.filter(
            pk=request_id,
            status=ProfileUpdateRequest.Status.PENDING,
        ).update(**values)
        if not claimed:
            raise ProfileRequestNotFound("Request not found or already processed.")

        return ProfileUpdateRequest.objects.select_related('user').get(pk=request_id)

    @staticmethod
    def delete_profile_picture(user) -> None:
        """
        Remove the user's profile picture directly, without review.

        Raises:
            PermissionError: If the user is an admin
            ProfileWorkflowError: If the database write fails
        """
        if user.is_admin:
            raise PermissionError("Admins cannot update profile.")
        try:
            UserPatch(clear_fields={'profile_pic'}).apply(user)
        except DatabaseError as exc:
            logger.exception("Deleting profile picture failed for user %s", user.pk)
            raise ProfileWorkflowError("Failed to delete picture.") from exc
