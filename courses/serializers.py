"""
Courses app serializers

Serializers for CourseModule and ModuleAsset models.
"""
from rest_framework import serializers

from accounts.serializers import IdListSerializer
from .models import CourseModule, ModuleAsset


class ModuleAssetSerializer(serializers.ModelSerializer):
    """
    Serializer for ModuleAsset.

    Text assets carry their content inline; every other type needs a URL.
    """

    class Meta:
        model = ModuleAsset
        fields = ['id', 'type', 'title', 'text', 'url', 'created_at']
        read_only_fields = ['id', 'created_at']
        extra_kwargs = {
            'type': {'error_messages': {'required': 'Type and title are required.'}},
            'title': {'error_messages': {
                'required': 'Type and title are required.',
                'blank': 'Type and title are required.',
            }},
        }

    def validate(self, attrs):
        if attrs['type'] == ModuleAsset.Type.TEXT:
            attrs['text'] = attrs.get('text') or ''
            attrs['url'] = ''
        elif not attrs.get('url'):
            raise serializers.ValidationError('URL is required for this asset type.')
        return attrs


class CourseModuleSerializer(serializers.ModelSerializer):
    """
    Serializer for CourseModule with its assets embedded read-only.
    """

    assets = ModuleAssetSerializer(many=True, read_only=True)

    class Meta:
        model = CourseModule
        fields = [
            'id',
            'title',
            'category',
            'role',
            'description',
            'visibility',
            'is_archived',
            'assets',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'title': {'error_messages': {
                'required': 'Title and Category are required.',
                'blank': 'Title and Category are required.',
            }},
            'category': {'error_messages': {
                'required': 'Title and Category are required.',
                'blank': 'Title and Category are required.',
            }},
        }


class BulkArchiveSerializer(IdListSerializer):
    """Bulk archive payload; is_archived defaults to archiving."""

    is_archived = serializers.BooleanField(required=False, default=True)
