from django.contrib import admin
from .models import Review
from apps.movies.services import update_movie_rating


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Admin interface for Reviews."""

    list_display = [
        'movie',
        'user',
        'rating',
        'helpful_votes',
        'is_verified',
        'created_at'
    ]
    list_filter = [
        'rating',
        'is_verified',
        'created_at',
    ]
    search_fields = [
        'movie__title',
        'user__username',
        'user__email',
        'review_text'
    ]
    readonly_fields = ['helpful_votes', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('movie', 'user', 'rating', 'is_verified')
        }),
        ('Review Content', {
            'fields': ('review_text', 'helpful_votes')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'movie')

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        update_movie_rating(movie_id=obj.movie_id)

    def delete_model(self, request, obj):
        movie_id = obj.movie_id
        super().delete_model(request, obj)
        update_movie_rating(movie_id=movie_id)

    def delete_queryset(self, request, queryset):
        movie_ids = set(queryset.values_list('movie_id', flat=True))
        super().delete_queryset(request, queryset)
        for movie_id in movie_ids:
            update_movie_rating(movie_id=movie_id)

    actions = ['recalculate_movie_ratings']

    def recalculate_movie_ratings(self, request, queryset):
        """Recalculate aggregate ratings for the reviewed movies."""
        movie_ids = set(queryset.values_list('movie_id', flat=True))
        for movie_id in movie_ids:
            update_movie_rating(movie_id=movie_id)
        self.message_user(request, f"Recalculated ratings for {len(movie_ids)} movies")
    recalculate_movie_ratings.short_description = "Recalculate movie ratings"
