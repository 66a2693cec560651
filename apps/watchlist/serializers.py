from rest_framework import serializers
from .models import WatchlistEntry, WatchlistStatus
from apps.movies.models import Movie


class WatchlistMovieSerializer(serializers.ModelSerializer):
    """Movie fields shown on a watchlist row."""

    genres = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')
    average_rating = serializers.FloatField(read_only=True)

    class Meta:
        model = Movie
        fields = ['id', 'title', 'poster_url', 'release_year', 'average_rating', 'genres']
        read_only_fields = fields


class WatchlistEntrySerializer(serializers.ModelSerializer):

    movie = WatchlistMovieSerializer(read_only=True)

    class Meta:
        model = WatchlistEntry
        fields = ['id', 'movie', 'status', 'date_added', 'updated_at']
        read_only_fields = fields


class WatchlistAddSerializer(serializers.Serializer):
    movie_id = serializers.UUIDField()
    status = serializers.ChoiceField(
        choices=WatchlistStatus.choices,
        default=WatchlistStatus.WANT_TO_WATCH,
    )


class WatchlistStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=WatchlistStatus.choices)


class WatchlistCheckSerializer(serializers.Serializer):
    in_watchlist = serializers.BooleanField()
    status = serializers.CharField(allow_null=True)


class WatchlistStatsSerializer(serializers.Serializer):
    want_to_watch = serializers.IntegerField()
    watching = serializers.IntegerField()
    watched = serializers.IntegerField()
    total = serializers.IntegerField()
