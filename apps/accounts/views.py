from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from config.exceptions import error_response
from apps.reviews.serializers import ReviewWithMovieSerializer
from apps.reviews.services import get_user_reviews, get_user_review_statistics
from apps.reviews.views import ReviewPagination
from apps.watchlist.serializers import WatchlistStatsSerializer, WatchlistEntrySerializer
from apps.watchlist.services import get_watchlist_statistics
from apps.watchlist.views import paginated_watchlist
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    UserProfileSerializer,
    ProfileUpdateSerializer,
    UserStatsSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    get_user_by_id,
    update_user_profile,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    ProfileUpdateForbiddenError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ProfileResponseSerializer(serializers.Serializer):
    user = UserProfileSerializer()
    reviews = ReviewWithMovieSerializer(many=True)
    watchlist_stats = WatchlistStatsSerializer()


class ProfileUpdateResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    # Remove password_confirm before passing to service
    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return error_response(e, status.HTTP_409_CONFLICT)

    return Response({
        'message': 'User registered successfully',
        'user': UserSerializer(user).data,
        'tokens': issue_tokens(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError as e:
        return error_response(e, status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return error_response(e, status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': issue_tokens(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response({'user': UserSerializer(request.user).data})


@extend_schema(
    methods=['GET'],
    responses={200: ProfileResponseSerializer, 404: ErrorResponseSerializer},
    description="Public profile with the first page of reviews and watchlist counts.",
    tags=['users'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=ProfileUpdateSerializer,
    responses={
        200: ProfileUpdateResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Update a profile. Owner or admin only.",
    tags=['users'],
)
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticatedOrReadOnly])
def user_profile(request, user_id):
    """Read or edit a user profile using service layer."""
    if request.method == 'GET':
        try:
            user = get_user_by_id(user_id=user_id)
        except UserNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)

        paginator = ReviewPagination()
        reviews = paginator.paginate_queryset(get_user_reviews(user_id=user.id), request)

        return Response({
            'user': UserProfileSerializer(user).data,
            'reviews': ReviewWithMovieSerializer(reviews, many=True).data,
            'pagination': paginator.get_pagination(),
            'watchlist_stats': get_watchlist_statistics(user_id=user.id),
        })

    serializer = ProfileUpdateSerializer(data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)

    try:
        user = update_user_profile(
            user_id=user_id,
            acting_user=request.user,
            **serializer.validated_data
        )
    except ProfileUpdateForbiddenError as e:
        return error_response(e, status.HTTP_403_FORBIDDEN)
    except UserNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)
    except UserRegistrationError as e:
        return error_response(e, status.HTTP_409_CONFLICT)

    return Response({
        'message': 'Profile updated successfully',
        'user': UserSerializer(user).data,
    })


@extend_schema(
    responses={200: ReviewWithMovieSerializer(many=True), 404: ErrorResponseSerializer},
    description="A user's reviews, newest first.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_reviews(request, user_id):
    try:
        user = get_user_by_id(user_id=user_id)
    except UserNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)

    paginator = ReviewPagination()
    page = paginator.paginate_queryset(get_user_reviews(user_id=user.id), request)
    return paginator.get_paginated_response(ReviewWithMovieSerializer(page, many=True).data)


@extend_schema(
    parameters=[OpenApiParameter('status', OpenApiTypes.STR, description='want_to_watch, watching or watched')],
    responses={200: WatchlistEntrySerializer(many=True), 404: ErrorResponseSerializer},
    description="A user's public watchlist.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_watchlist(request, user_id):
    try:
        user = get_user_by_id(user_id=user_id)
    except UserNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)

    return paginated_watchlist(request, user.id)


@extend_schema(
    responses={200: UserStatsSerializer, 404: ErrorResponseSerializer},
    description="Rating distribution and watchlist counts for a user.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_stats(request, user_id):
    try:
        user = get_user_by_id(user_id=user_id)
    except UserNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)

    stats = get_user_review_statistics(user_id=user.id)
    stats['watchlist_stats'] = get_watchlist_statistics(user_id=user.id)
    return Response(UserStatsSerializer(stats).data)
