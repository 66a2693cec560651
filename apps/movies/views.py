from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from config.exceptions import error_response
from config.pagination import SkipLimitPagination
from .models import Movie
from .permissions import IsAdminOrReadOnly
from .serializers import (
    MovieSerializer,
    MovieListSerializer,
    MovieWriteSerializer,
    MovieFilterSerializer,
)
from .services import (
    create_movie,
    update_movie,
    delete_movie,
    get_movie_by_id,
    search_movies,
    get_trending_movies,
    get_featured_movies,
    import_movie_from_tmdb,
    MovieNotFoundError,
    DuplicateMovieError,
    TmdbConfigurationError,
    TmdbMovieNotFoundError,
    TmdbImportError,
)


UUID_REGEX = r'[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}'


class MovieMutationResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    movie = MovieSerializer()


class MovieCollectionResponseSerializer(drf_serializers.Serializer):
    movies = MovieListSerializer(many=True)


class ErrorResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class MoviePagination(SkipLimitPagination):
    """Pagination for the movie catalog."""
    page_size = 12


class MovieViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the movie catalog.

    list: Filtered, sorted, paginated movies
    create: Add a movie (admin)
    retrieve: Get a movie
    update: Replace a movie's catalog fields (admin)
    partial_update: Change some catalog fields (admin)
    destroy: Delete a movie with its reviews and watchlist entries (admin)
    """

    queryset = Movie.objects.prefetch_related('genres')
    serializer_class = MovieSerializer
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = MoviePagination
    lookup_value_regex = UUID_REGEX

    def get_queryset(self):
        """
        Filter movies based on query parameters.

        Filters:
        - genre: Exact genre name
        - year: Exact release year
        - rating: Minimum average rating
        - search: Text in title or synopsis
        - sort: title, release_year, average_rating, created_at
        """
        if self.action != 'list':
            return super().get_queryset()

        params = MovieFilterSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        filters = params.validated_data

        return search_movies(
            genre=filters.get('genre'),
            year=filters.get('year'),
            min_rating=filters.get('rating'),
            search=filters.get('search'),
            sort=filters.get('sort'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ('list', 'trending', 'featured'):
            return MovieListSerializer
        if self.action in ('create', 'update', 'partial_update'):
            return MovieWriteSerializer
        return MovieSerializer

    @extend_schema(parameters=[
        OpenApiParameter('genre', OpenApiTypes.STR, description='Exact genre name'),
        OpenApiParameter('year', OpenApiTypes.INT, description='Release year'),
        OpenApiParameter('rating', OpenApiTypes.FLOAT, description='Minimum average rating (0-5)'),
        OpenApiParameter('search', OpenApiTypes.STR, description='Search in title and synopsis'),
        OpenApiParameter('sort', OpenApiTypes.STR, description='title, release_year, average_rating or created_at'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(responses={201: MovieMutationResponseSerializer, 409: ErrorResponseSerializer})
    def create(self, request, *args, **kwargs):
        """Add a movie to the catalog."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            movie = create_movie(**serializer.validated_data)
        except DuplicateMovieError as e:
            return error_response(e, status.HTTP_409_CONFLICT)

        return Response({
            'message': 'Movie added successfully',
            'movie': MovieSerializer(movie).data,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: MovieMutationResponseSerializer, 404: ErrorResponseSerializer})
    def update(self, request, *args, **kwargs):
        """Update a movie's catalog fields."""
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            movie = update_movie(movie_id=kwargs['pk'], **serializer.validated_data)
        except MovieNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)
        except DuplicateMovieError as e:
            return error_response(e, status.HTTP_409_CONFLICT)

        return Response({
            'message': 'Movie updated successfully',
            'movie': MovieSerializer(get_movie_by_id(movie_id=movie.id)).data,
        })

    def destroy(self, request, *args, **kwargs):
        """Delete a movie."""
        try:
            delete_movie(movie_id=kwargs['pk'])
        except MovieNotFoundError as e:
            return error_response(e, status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Movie deleted successfully'})

    @extend_schema(responses={200: MovieCollectionResponseSerializer})
    @action(detail=False, methods=['get'])
    def trending(self, request):
        """Top rated movies, ties broken by number of reviews."""
        movies = get_trending_movies()
        return Response({'movies': self.get_serializer(movies, many=True).data})

    @extend_schema(responses={200: MovieCollectionResponseSerializer})
    @action(detail=False, methods=['get'])
    def featured(self, request):
        """Highest rated movies for the home page."""
        movies = get_featured_movies()
        return Response({'movies': self.get_serializer(movies, many=True).data})


@extend_schema(
    request=None,
    responses={
        201: MovieMutationResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
        502: ErrorResponseSerializer,
    },
    description="Import a movie from TMDB by its TMDB id.",
    tags=['movies'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def import_from_tmdb(request, tmdb_id):
    """Add a movie from TMDB using service layer."""
    try:
        movie = import_movie_from_tmdb(tmdb_id=tmdb_id)
    except DuplicateMovieError as e:
        return error_response(e, status.HTTP_409_CONFLICT)
    except TmdbMovieNotFoundError as e:
        return error_response(e, status.HTTP_404_NOT_FOUND)
    except TmdbConfigurationError as e:
        return error_response(e, status.HTTP_500_INTERNAL_SERVER_ERROR)
    except TmdbImportError as e:
        return error_response(e, status.HTTP_502_BAD_GATEWAY)

    return Response({
        'message': 'Movie added successfully from TMDB',
        'movie': MovieSerializer(get_movie_by_id(movie_id=movie.id)).data,
    }, status=status.HTTP_201_CREATED)
