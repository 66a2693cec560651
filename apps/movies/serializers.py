from rest_framework import serializers
from .models import Movie, validate_release_year, EARLIEST_RELEASE_YEAR
from .services import SORT_FIELDS


class CastMemberSerializer(serializers.Serializer):
    """One credited actor."""

    name = serializers.CharField(max_length=200)
    character = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class MovieSerializer(serializers.ModelSerializer):
    """Main serializer for movies."""

    genres = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')
    average_rating = serializers.FloatField(read_only=True)

    class Meta:
        model = Movie
        fields = [
            'id',
            'title',
            'genres',
            'release_year',
            'director',
            'cast',
            'synopsis',
            'poster_url',
            'backdrop_url',
            'trailer_url',
            'duration',
            'average_rating',
            'total_reviews',
            'tmdb_id',
            'imdb_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class MovieListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    genres = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')
    average_rating = serializers.FloatField(read_only=True)

    class Meta:
        model = Movie
        fields = [
            'id',
            'title',
            'genres',
            'release_year',
            'director',
            'poster_url',
            'duration',
            'average_rating',
            'total_reviews',
            'created_at',
        ]
        read_only_fields = fields


class MovieMinimalSerializer(serializers.ModelSerializer):
    """Minimal movie info for nested serialization."""

    class Meta:
        model = Movie
        fields = ['id', 'title', 'poster_url', 'release_year']
        read_only_fields = fields


class MovieWriteSerializer(serializers.Serializer):
    """Input for creating or updating a movie (admin only)."""

    title = serializers.CharField(max_length=255)
    genres = serializers.ListField(
        child=serializers.CharField(max_length=50),
        allow_empty=False,
        error_messages={'empty': 'At least one genre is required'},
    )
    release_year = serializers.IntegerField(validators=[validate_release_year])
    director = serializers.CharField(max_length=200)
    cast = CastMemberSerializer(many=True, allow_empty=False)
    synopsis = serializers.CharField(max_length=2000)
    poster_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    backdrop_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    trailer_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    duration = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    tmdb_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    imdb_id = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)


class MovieFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the movie listing."""

    genre = serializers.CharField(required=False, max_length=50)
    year = serializers.IntegerField(required=False, min_value=EARLIEST_RELEASE_YEAR)
    rating = serializers.FloatField(required=False, min_value=0, max_value=5)
    search = serializers.CharField(required=False, max_length=200)
    sort = serializers.ChoiceField(required=False, choices=list(SORT_FIELDS))
