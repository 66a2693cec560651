from rest_framework import status, viewsets, mixins, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from config.exceptions import error_response
from config.pagination import SkipLimitPagination
from apps.movies.views import UUID_REGEX
from .models import Review
from .serializers import (
    ReviewSerializer,
    ReviewWithMovieSerializer,
    ReviewCreateSerializer,
    ReviewUpdateSerializer,
    HelpfulVoteSerializer,
)
from .services import (
    submit_review,
    update_review,
    delete_review,
    mark_review_helpful,
    get_movie_reviews,
    get_user_reviews,
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    InvalidReviewTextError,
    MovieNotFoundError,
)


class ReviewMutationResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    review = ReviewSerializer()


class ErrorResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class ReviewPagination(SkipLimitPagination):
    """Pagination for review listings."""
    page_size = 10


class ReviewViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for the review lifecycle.

    create: Submit a review (one per movie per user)
    retrieve: Get a review
    update: Edit own review
    partial_update: Edit part of own review
    destroy: Delete own review (admins may delete any)
    helpful: Add a helpful vote
    my_reviews: The caller's reviews
    """

    queryset = Review.objects.select_related('user', 'movie')
    serializer_class = ReviewSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = ReviewPagination
    lookup_value_regex = UUID_REGEX

    def get_serializer_class(self):
        if self.action == 'create':
            return ReviewCreateSerializer
        if self.action in ('update', 'partial_update'):
            return ReviewUpdateSerializer
        if self.action == 'my_reviews':
            return ReviewWithMovieSerializer
        return ReviewSerializer

    @extend_schema(
        responses={
            201: ReviewMutationResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
    )
    def create(self, request):
        """Submit a review using service layer."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            review = submit_review(
                user=request.user,
                movie_id=serializer.validated_data['movie_id'],
                rating=serializer.validated_data['rating'],
                review_text=serializer.validated_data['review_text'],
            )
        except MovieNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except DuplicateReviewError as e:
            return error_response(e, status.HTTP_409_CONFLICT)
        except (InvalidRatingError, InvalidReviewTextError) as e:
            return error_response(e, status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': 'Review created successfully',
            'review': ReviewSerializer(review).data,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ReviewMutationResponseSerializer, 404: ErrorResponseSerializer})
    def update(self, request, pk=None, partial=False):
        """Edit a review using service layer."""
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            review = update_review(
                review_id=pk,
                user=request.user,
                rating=serializer.validated_data.get('rating'),
                review_text=serializer.validated_data.get('review_text'),
            )
        except ReviewNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except (InvalidRatingError, InvalidReviewTextError) as e:
            return error_response(e, status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': 'Review updated successfully',
            'review': ReviewSerializer(review).data,
        })

    @extend_schema(responses={200: ReviewMutationResponseSerializer, 404: ErrorResponseSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    @extend_schema(responses={200: ErrorResponseSerializer, 404: ErrorResponseSerializer})
    def destroy(self, request, pk=None):
        """Delete a review using service layer."""
        try:
            delete_review(review_id=pk, user=request.user)
        except ReviewNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Review deleted successfully'})

    @extend_schema(request=None, responses={200: HelpfulVoteSerializer, 404: ErrorResponseSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def helpful(self, request, pk=None):
        """Mark a review as helpful."""
        try:
            votes = mark_review_helpful(review_id=pk)
        except ReviewNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)

        return Response({
            'message': 'Review marked as helpful',
            'helpful_votes': votes,
        })

    @action(
        detail=False,
        methods=['get'],
        url_path='my-reviews',
        permission_classes=[IsAuthenticated],
    )
    def my_reviews(self, request):
        """Get current user's reviews using service layer."""
        reviews = get_user_reviews(user_id=request.user.id)
        page = self.paginate_queryset(reviews)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: ReviewSerializer(many=True), 404: ErrorResponseSerializer},
    description="Reviews of a movie, newest first.",
    tags=['reviews'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def movie_reviews(request, movie_id):
    """Get a movie's reviews using service layer."""
    try:
        reviews = get_movie_reviews(movie_id=movie_id)
    except MovieNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)

    paginator = ReviewPagination()
    page = paginator.paginate_queryset(reviews, request)
    serializer = ReviewSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: ReviewWithMovieSerializer(many=True)},
    description="Reviews written by a user, newest first.",
    tags=['reviews'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_reviews(request, user_id):
    """Get a user's reviews using service layer."""
    reviews = get_user_reviews(user_id=user_id)

    paginator = ReviewPagination()
    page = paginator.paginate_queryset(reviews, request)
    serializer = ReviewWithMovieSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)
