from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'reviews'

router = DefaultRouter()
router.register(r'', views.ReviewViewSet, basename='review')

urlpatterns = [
    # Review ViewSet routes
    # POST   /api/reviews/                 - Submit review
    # GET    /api/reviews/{id}/            - Get review
    # PUT    /api/reviews/{id}/            - Edit review
    # PATCH  /api/reviews/{id}/            - Partial edit
    # DELETE /api/reviews/{id}/            - Delete review
    # POST   /api/reviews/{id}/helpful/    - Mark helpful
    # GET    /api/reviews/my-reviews/      - Current user's reviews

    # Listings
    path('movie/<uuid:movie_id>/', views.movie_reviews, name='movie-reviews'),
    path('user/<uuid:user_id>/', views.user_reviews, name='user-reviews'),

    # Include router URLs
    path('', include(router.urls)),
]
