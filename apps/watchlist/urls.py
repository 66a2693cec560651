from django.urls import path
from . import views

app_name = 'watchlist'

urlpatterns = [
    # GET    /api/watchlist/                   - Current user's watchlist
    # POST   /api/watchlist/                   - Add movie
    path('', views.watchlist, name='watchlist'),
    path('stats/', views.watchlist_stats, name='watchlist-stats'),
    path('check/<uuid:movie_id>/', views.check_movie, name='watchlist-check'),
    # PUT/PATCH /api/watchlist/{movie_id}/     - Change status
    # DELETE    /api/watchlist/{movie_id}/     - Remove movie
    path('<uuid:movie_id>/', views.watchlist_entry, name='watchlist-entry'),
]
