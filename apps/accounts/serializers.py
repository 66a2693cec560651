from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import RegexValidator
from .models import User
from apps.watchlist.serializers import WatchlistStatsSerializer


class UserSerializer(serializers.ModelSerializer):
    """Full user serializer for the authenticated owner."""

    is_admin = serializers.BooleanField(source='is_staff', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'profile_picture',
            'join_date',
            'is_admin',
        ]
        read_only_fields = fields


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for displaying next to reviews, profiles, etc.)."""

    class Meta:
        model = User
        fields = ['id', 'username', 'profile_picture']
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    username = serializers.CharField(
        min_length=3,
        max_length=30,
        validators=[RegexValidator(
            r'^[a-zA-Z0-9_]+$',
            'Username can only contain letters, numbers, and underscores',
        )],
    )
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation and strength."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })

        candidate = User(username=attrs['username'], email=attrs['email'])
        try:
            validate_password(attrs['password'], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': list(e.messages)})
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """Fields a user may change on their profile; all optional."""

    username = serializers.CharField(
        required=False,
        min_length=3,
        max_length=30,
        validators=[RegexValidator(
            r'^[a-zA-Z0-9_]+$',
            'Username can only contain letters, numbers, and underscores',
        )],
    )
    email = serializers.EmailField(required=False, max_length=255)
    profile_picture = serializers.URLField(required=False, allow_null=True, allow_blank=True, max_length=500)


class UserProfileSerializer(serializers.ModelSerializer):
    """Public profile fields."""

    class Meta:
        model = User
        fields = ['id', 'username', 'profile_picture', 'join_date']
        read_only_fields = fields


class UserStatsSerializer(serializers.Serializer):
    """Review and watchlist statistics for a user."""

    total_reviews = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())
    watchlist_stats = WatchlistStatsSerializer()
