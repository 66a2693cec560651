from django.urls import path
from . import views

app_name = 'profiles'

urlpatterns = [
    # GET       /api/users/{id}/            - Public profile
    # PUT/PATCH /api/users/{id}/            - Update profile (owner or admin)
    path('<uuid:user_id>/', views.user_profile, name='user-profile'),
    path('<uuid:user_id>/reviews/', views.user_reviews, name='user-reviews'),
    path('<uuid:user_id>/watchlist/', views.user_watchlist, name='user-watchlist'),
    path('<uuid:user_id>/stats/', views.user_stats, name='user-stats'),
]
