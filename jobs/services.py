"""
Jobs Service Layer
Handles category lookup and creation for job postings.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from .matching import CategoryId, parse_category_ref
from .models import Category

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for resolving category references on write paths."""

    @staticmethod
    def find_or_create(name: str) -> Category:
        """
        Return the category with this name (case-insensitive), creating it
        if none exists. Safe to call repeatedly with the same name.

        Raises:
            ValidationError: If the name is blank
        """
        clean_name = (name or '').strip()
        if not clean_name:
            raise ValidationError("Category name is required")

        existing = Category.objects.filter(name__iexact=clean_name).first()
        if existing is not None:
            return existing

        try:
            with transaction.atomic():
                category = Category.objects.create(name=clean_name)
        except IntegrityError:
            # Created concurrently under a different casing.
            return Category.objects.get(name__iexact=clean_name)

        logger.info("Created category %s (%s) on demand", category.pk, clean_name)
        return category

    @staticmethod
    def resolve(value) -> Category:
        """
        Resolve a category id or name to a Category.

        Ids must exist; names are found or created.

        Raises:
            ValidationError: If the value is blank or the id is unknown
        """
        ref = parse_category_ref(value)
        if ref is None:
            raise ValidationError("Category is required")

        if isinstance(ref, CategoryId):
            try:
                return Category.objects.get(pk=ref.value)
            except Category.DoesNotExist:
                raise ValidationError("Category not found")

        return CategoryService.find_or_create(ref.value)
