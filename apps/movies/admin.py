from django.contrib import admin
from django.db.models import Count
from .models import Movie, Genre
from .services import update_movie_rating


@admin.register(Genre)
class GenreAdmin(admin.ModelAdmin):
    """Admin interface for Genres."""

    list_display = ['name', 'movie_count']
    search_fields = ['name']
    ordering = ['name']

    def movie_count(self, obj):
        """Show how many movies carry the genre."""
        return obj.num_movies
    movie_count.short_description = 'Movies'
    movie_count.admin_order_field = 'num_movies'

    def get_queryset(self, request):
        """Optimize query with annotation."""
        qs = super().get_queryset(request)
        return qs.annotate(num_movies=Count('movies'))


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    """Admin interface for Movies."""

    list_display = [
        'title',
        'release_year',
        'director',
        'average_rating',
        'total_reviews',
        'created_at',
    ]
    list_filter = ['genres', 'release_year', 'created_at']
    search_fields = ['title', 'director', 'synopsis']
    readonly_fields = ['average_rating', 'total_reviews', 'created_at', 'updated_at']
    filter_horizontal = ['genres']
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('title', 'genres', 'release_year', 'director', 'duration')
        }),
        ('Content', {
            'fields': ('synopsis', 'cast')
        }),
        ('Media', {
            'fields': ('poster_url', 'backdrop_url', 'trailer_url'),
            'classes': ('collapse',)
        }),
        ('External IDs', {
            'fields': ('tmdb_id', 'imdb_id'),
            'classes': ('collapse',)
        }),
        ('Ratings', {
            'fields': ('average_rating', 'total_reviews'),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['recalculate_ratings']

    @admin.action(description='Recalculate movie ratings')
    def recalculate_ratings(self, request, queryset):
        """Recalculate aggregate ratings for the selected movies."""
        for movie in queryset:
            update_movie_rating(movie_id=movie.id)
        self.message_user(request, f"Recalculated ratings for {queryset.count()} movies")
