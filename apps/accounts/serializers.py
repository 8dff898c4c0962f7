from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, Country


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'avatar',
            'currency',
            'country',
            'plan',
            'subscription_status',
            'current_period_end',
            'email_verified',
            'created_at',
            'last_login',
        ]
        read_only_fields = [
            'id',
            'email',
            'plan',
            'subscription_status',
            'current_period_end',
            'email_verified',
            'created_at',
            'last_login',
        ]


class UserRegistrationSerializer(serializers.Serializer):
    """Validate registration input."""

    name = serializers.CharField(max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    country = serializers.ChoiceField(choices=Country.choices, default=Country.UAE)
    currency = serializers.CharField(max_length=3, default='USD')

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Please add a name')
        return value

    def validate_email(self, value):
        return value.strip().lower()


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class VerifyEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    verification_code = serializers.CharField(max_length=6)


class ResendVerificationSerializer(serializers.Serializer):
    email = serializers.EmailField()


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields
