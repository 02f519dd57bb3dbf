"""
Profiles app serializers

Serializers for the user profile and ProfileUpdateRequest.
"""
from rest_framework import serializers

from accounts.models import User
from accounts.serializers import UserSerializer
from .models import ProfileUpdateRequest


class ProfileSerializer(serializers.ModelSerializer):
    """
    The current user's profile.

    has_pending_request tells the front end whether an edit is awaiting
    review; it is supplied through the serializer context.
    """

    has_pending_request = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'name',
            'role',
            'state',
            'profile_pic',
            'is_active',
            'pending_approval',
            'last_declined_update',
            'has_pending_request',
        ]
        read_only_fields = [
            'id',
            'username',
            'email',
            'name',
            'role',
            'state',
            'profile_pic',
            'is_active',
            'pending_approval',
            'last_declined_update',
        ]

    def get_has_pending_request(self, obj) -> bool:
        return self.context.get('pending_request') is not None


class ProfileUpdateRequestSerializer(serializers.ModelSerializer):
    """
    Serializer for ProfileUpdateRequest.

    Embeds the owning user's full profile for the admin review screen.
    """

    user = UserSerializer(read_only=True)
    reviewed_by_username = serializers.CharField(
        source='reviewed_by.username', read_only=True, default=None
    )

    class Meta:
        model = ProfileUpdateRequest
        fields = [
            'id',
            'user',
            'updates',
            'status',
            'reviewed_by',
            'reviewed_by_username',
            'reviewed_at',
            'reason',
            'created_at',
        ]
        read_only_fields = [
            'id',
            'updates',
            'status',
            'reviewed_by',
            'reviewed_at',
            'reason',
            'created_at',
        ]
