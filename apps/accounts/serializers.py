from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'phone_number',
            'forename',
            'surname',
            'is_staff',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class DeletedUserSerializer(serializers.Serializer):
    """Response body for admin account deletion."""

    userId = serializers.UUIDField(source='id')
    deletedAt = serializers.DateTimeField(source='deleted_at')
