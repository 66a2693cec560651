from django.contrib import admin
from .models import WatchlistEntry


@admin.register(WatchlistEntry)
class WatchlistEntryAdmin(admin.ModelAdmin):
    """Admin interface for Watchlist Entries."""

    list_display = ['user', 'movie', 'status', 'date_added']
    list_filter = ['status', 'date_added']
    search_fields = ['user__username', 'user__email', 'movie__title']
    readonly_fields = ['date_added', 'updated_at']
    date_hierarchy = 'date_added'
    ordering = ['-date_added']

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'movie')
