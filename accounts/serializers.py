"""
Accounts app serializers

Serializers for User model and authentication.
"""
from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model.

    Exposes user details including role and moderation state.
    Password is write-only for security.
    """

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
            'date_joined',
            'password',
        ]
        read_only_fields = [
            'id',
            'is_active',
            'pending_approval',
            'last_declined_update',
            'date_joined',
        ]
        extra_kwargs = {
            'password': {'write_only': True},
        }

    def create(self, validated_data):
        """Create user with hashed password."""
        password = validated_data.pop('password', None)
        user = User(**validated_data)
        if password:
            user.set_password(password)
        user.save()
        return user

    def update(self, instance, validated_data):
        """Update user, handling password properly."""
        password = validated_data.pop('password', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class UserActiveSerializer(serializers.Serializer):
    """Payload for toggling a user's active flag."""

    active = serializers.BooleanField()

    def to_internal_value(self, data):
        # BooleanField accepts "yes"/1/etc; only real booleans are allowed here.
        if not isinstance(data, dict) or not isinstance(data.get('active'), bool):
            raise serializers.ValidationError({'active': 'Invalid value for active'})
        return super().to_internal_value(data)


class IdListSerializer(serializers.Serializer):
    """Payload for bulk operations that take a non-empty list of ids."""

    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class SelfUserSerializer(UserSerializer):
    """
    User serializer for non-admins editing their own account.

    Role is fixed and the profile fields change only through approval.
    """

    class Meta(UserSerializer.Meta):
        read_only_fields = UserSerializer.Meta.read_only_fields + [
            'role',
            'name',
            'state',
            'profile_pic',
        ]
