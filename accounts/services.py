"""
Accounts Service Layer
Handles registration and credential checks for the job board.
"""
import logging
import re
from typing import Dict, Optional

from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction

from .models import User

logger = logging.getLogger(__name__)


class AccountExistsError(Exception):
    """
    Raised when registering an email that already has an account.
    """


class AccountService:
    """Service for creating and authenticating user accounts."""

    REQUIRED_FIELDS = ['name', 'email', 'password', 'role', 'state']
    SELF_REGISTER_ROLES = [User.EMPLOYER, User.JOB_SEEKER]

    PASSWORD_RULES = [
        (r'.{8,}', 'length'),
        (r'[a-z]', 'lowercase'),
        (r'[A-Z]', 'uppercase'),
        (r'[0-9]', 'number'),
        (r'[^A-Za-z0-9]', 'symbol'),
    ]

    @staticmethod
    def normalize_role(value) -> str:
        """Accept ``jobseeker``/``job_seeker``/``JOB_SEEKER`` style roles."""
        return str(value or '').strip().upper().replace('JOBSEEKER', 'JOB_SEEKER')

    @classmethod
    def is_strong_password(cls, password: str) -> bool:
        return all(re.search(pattern, password) for pattern, _ in cls.PASSWORD_RULES)

    @classmethod
    def register(cls, data: Dict) -> User:
        """
        Register a new non-admin account.

        Args:
            data: Dictionary with name, email, password, role and state

        Returns:
            The created User

        Raises:
            ValidationError: If a field is missing or malformed
            PermissionError: If the caller tries to register an admin
            AccountExistsError: If the email is already registered
        """
        if any(not data.get(field) for field in cls.REQUIRED_FIELDS):
            raise ValidationError("All fields are required")

        role = cls.normalize_role(data['role'])
        if role == User.ADMIN:
            raise PermissionError("Admin accounts cannot be self-registered")
        if role not in cls.SELF_REGISTER_ROLES:
            raise ValidationError("Invalid role")

        email = str(data['email']).strip().lower()
        try:
            validate_email(email)
        except ValidationError:
            raise ValidationError("Invalid email format")

        password = str(data['password'])
        if not cls.is_strong_password(password):
            raise ValidationError(
                "Password must be at least 8 characters long and include "
                "uppercase, lowercase, number, and special character"
            )

        with transaction.atomic():
            if User.objects.filter(email__iexact=email).exists():
                raise AccountExistsError("User with this email already exists")

            user = User(
                username=email,
                email=email,
                name=str(data['name']).strip(),
                role=role,
                state=str(data['state']).strip(),
            )
            user.set_password(password)
            user.save()

        logger.info("Registered user %s with role %s", user.pk, role)
        return user

    @staticmethod
    def authenticate_email(request, email: str, password: str) -> Optional[User]:
        """
        Resolve an email/password pair to an active user, or None.
        """
        user = User.objects.filter(email__iexact=(email or '').strip()).first()
        if user is None:
            return None
        return authenticate(request, username=user.username, password=password)
