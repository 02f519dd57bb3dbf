"""
Jobs app serializers

Serializers for Category, JobPosting and JobPreference models.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import Category, JobPosting, JobPreference
from .services import CategoryService


class CategorySerializer(serializers.ModelSerializer):
    """
    Serializer for Category.

    Names are unique regardless of case.
    """

    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_name(self, value):
        name = value.strip()
        if not name:
            raise serializers.ValidationError('Name is required.')

        duplicates = Category.objects.filter(name__iexact=name)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError('A category with this name already exists.')
        return name


class CategoryCountSerializer(serializers.ModelSerializer):
    """Category with the number of postings filed under it."""

    job_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'job_count']


class JobPostingSerializer(serializers.ModelSerializer):
    """
    Serializer for JobPosting.

    ``category`` is written as a category id or name; unknown names are
    created on demand. Reads expose category_id and category_name.
    User is automatically set from request context.
    """

    username = serializers.CharField(source='user.username', read_only=True)
    category = serializers.CharField(write_only=True)
    category_id = serializers.UUIDField(source='category.id', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)
    match_score = serializers.SerializerMethodField()

    class Meta:
        model = JobPosting
        fields = [
            'id',
            'user',
            'username',
            'title',
            'company',
            'description',
            'category',
            'category_id',
            'category_name',
            'location',
            'shift_details',
            'match_score',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'user',
            'created_at',
            'updated_at',
        ]

    def validate_category(self, value):
        try:
            return CategoryService.resolve(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.messages)

    def get_match_score(self, obj: JobPosting):
        return getattr(obj, 'match_score', None)


class CategoryListField(serializers.Field):
    """
    List of category ids or names.

    Accepts a JSON list or a comma-separated string; blank entries are
    dropped.
    """

    default_error_messages = {
        'invalid': 'Expected a list of categories or a comma-separated string.',
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            items = data.split(',')
        elif isinstance(data, (list, tuple)):
            items = data
        else:
            self.fail('invalid')
        return [str(item).strip() for item in items if str(item).strip()]

    def to_representation(self, value):
        return list(value or [])


class JobPreferenceSerializer(serializers.ModelSerializer):
    """
    Serializer for JobPreference.

    User is read-only and automatically set from request context.
    """

    preferred_location = serializers.CharField(
        max_length=255,
        error_messages={
            'required': 'preferred_location is required',
            'blank': 'preferred_location is required',
        },
    )
    preferred_categories = CategoryListField(required=False)

    class Meta:
        model = JobPreference
        fields = [
            'id',
            'user',
            'preferred_location',
            'preferred_categories',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'user', 'created_at', 'updated_at']

    def validate_preferred_location(self, value):
        return value.strip()
