from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from config.exceptions import error_response
from config.pagination import SkipLimitPagination
from .serializers import (
    WatchlistEntrySerializer,
    WatchlistAddSerializer,
    WatchlistStatusSerializer,
    WatchlistCheckSerializer,
    WatchlistStatsSerializer,
)
from .services import (
    add_to_watchlist,
    update_watchlist_status,
    remove_from_watchlist,
    check_watchlist,
    get_watchlist_statistics,
    get_user_watchlist,
    WatchlistEntryNotFoundError,
    DuplicateWatchlistEntryError,
    InvalidStatusError,
    MovieNotFoundError,
)


class WatchlistMutationResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    watchlist_item = WatchlistEntrySerializer()


class ErrorResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class WatchlistPagination(SkipLimitPagination):
    """Pagination for watchlists."""
    page_size = 20


STATUS_FILTER_PARAMETER = OpenApiParameter(
    'status', OpenApiTypes.STR, description='want_to_watch, watching or watched'
)


def paginated_watchlist(request, user_id):
    """Paginated watchlist response for a user, honouring ``?status=``."""
    try:
        entries = get_user_watchlist(user_id=user_id, status=request.query_params.get('status'))
    except InvalidStatusError as e:
        return error_response(e, status.HTTP_400_BAD_REQUEST)

    paginator = WatchlistPagination()
    page = paginator.paginate_queryset(entries, request)
    serializer = WatchlistEntrySerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    methods=['GET'],
    parameters=[STATUS_FILTER_PARAMETER],
    responses={200: WatchlistEntrySerializer(many=True), 400: ErrorResponseSerializer},
    description="Get the current user's watchlist.",
    tags=['watchlist'],
)
@extend_schema(
    methods=['POST'],
    request=WatchlistAddSerializer,
    responses={
        201: WatchlistMutationResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Add a movie to the current user's watchlist.",
    tags=['watchlist'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def watchlist(request):
    """List or add to the user's watchlist using service layer."""
    if request.method == 'GET':
        return paginated_watchlist(request, request.user.id)

    serializer = WatchlistAddSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        entry = add_to_watchlist(
            user=request.user,
            movie_id=serializer.validated_data['movie_id'],
            status=serializer.validated_data['status'],
        )
    except MovieNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)
    except DuplicateWatchlistEntryError as e:
        return error_response(e, status.HTTP_409_CONFLICT)
    except InvalidStatusError as e:
        return error_response(e, status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Movie added to watchlist',
        'watchlist_item': WatchlistEntrySerializer(entry).data,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['PUT', 'PATCH'],
    request=WatchlistStatusSerializer,
    responses={200: WatchlistMutationResponseSerializer, 404: ErrorResponseSerializer},
    description="Change the status of a watchlist entry.",
    tags=['watchlist'],
)
@extend_schema(
    methods=['DELETE'],
    request=None,
    responses={200: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Remove a movie from the watchlist.",
    tags=['watchlist'],
)
@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def watchlist_entry(request, movie_id):
    """Update or remove a watchlist entry using service layer."""
    if request.method == 'DELETE':
        try:
            remove_from_watchlist(user=request.user, movie_id=movie_id)
        except WatchlistEntryNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        return Response({'message': 'Movie removed from watchlist'})

    serializer = WatchlistStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        entry = update_watchlist_status(
            user=request.user,
            movie_id=movie_id,
            status=serializer.validated_data['status'],
        )
    except WatchlistEntryNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)
    except InvalidStatusError as e:
        return error_response(e, status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Watchlist updated successfully',
        'watchlist_item': WatchlistEntrySerializer(entry).data,
    })


@extend_schema(
    responses={200: WatchlistCheckSerializer},
    description="Whether a movie is in the current user's watchlist.",
    tags=['watchlist'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def check_movie(request, movie_id):
    result = check_watchlist(user=request.user, movie_id=movie_id)
    return Response(WatchlistCheckSerializer(result).data)


@extend_schema(
    responses={200: WatchlistStatsSerializer},
    description="Watchlist counts per status for the current user.",
    tags=['watchlist'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def watchlist_stats(request):
    stats = get_watchlist_statistics(user_id=request.user.id)
    return Response(WatchlistStatsSerializer(stats).data)
