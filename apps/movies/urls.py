from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'movies'

router = DefaultRouter()
router.register(r'', views.MovieViewSet, basename='movie')

urlpatterns = [
    # Movie ViewSet routes
    # GET    /api/movies/              - List movies (filters, sort, pagination)
    # POST   /api/movies/              - Create movie (admin)
    # GET    /api/movies/{id}/         - Get movie
    # PUT    /api/movies/{id}/         - Update movie (admin)
    # PATCH  /api/movies/{id}/         - Partial update (admin)
    # DELETE /api/movies/{id}/         - Delete movie (admin)

    # Custom actions
    # GET    /api/movies/trending/     - Top 10 by rating, then review count
    # GET    /api/movies/featured/     - Top 6 by rating

    # TMDB import
    path('tmdb/<int:tmdb_id>/', views.import_from_tmdb, name='tmdb-import'),

    # Include router URLs
    path('', include(router.urls)),
]
