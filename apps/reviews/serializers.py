from rest_framework import serializers
from .models import Review, MIN_RATING, MAX_RATING, MIN_REVIEW_LENGTH, MAX_REVIEW_LENGTH
from apps.accounts.serializers import UserPublicSerializer
from apps.movies.serializers import MovieMinimalSerializer


class ReviewSerializer(serializers.ModelSerializer):
    """Main review serializer, author embedded."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'user',
            'movie',
            'rating',
            'review_text',
            'helpful_votes',
            'is_verified',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ReviewWithMovieSerializer(serializers.ModelSerializer):
    """Review as listed on a user's page, movie embedded."""

    movie = MovieMinimalSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'user',
            'movie',
            'rating',
            'review_text',
            'helpful_votes',
            'is_verified',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """Input for submitting a review."""

    movie_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    review_text = serializers.CharField(
        min_length=MIN_REVIEW_LENGTH,
        max_length=MAX_REVIEW_LENGTH,
    )


class ReviewUpdateSerializer(serializers.Serializer):
    """Input for editing a review; supply at least one field."""

    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING, required=False)
    review_text = serializers.CharField(
        min_length=MIN_REVIEW_LENGTH,
        max_length=MAX_REVIEW_LENGTH,
        required=False,
    )

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide a rating or review_text to update')
        return attrs


class HelpfulVoteSerializer(serializers.Serializer):
    message = serializers.CharField()
    helpful_votes = serializers.IntegerField()


class ReviewStatisticsSerializer(serializers.Serializer):
    """Per-user rating summary."""

    total_reviews = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())
