"""
Management command to fill the database with sample movies.

Usage:
    python manage.py seed_movies
    python manage.py seed_movies --clear

This creates:
- 4 users (admin, movielover, cinemafan, filmcritic)
- 8 classic movies
- Reviews (movie ratings recalculated as they are added)
- Watchlist entries
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.movies.models import Movie, Genre
from apps.movies.services import create_movie, DuplicateMovieError
from apps.reviews.models import Review
from apps.reviews.services import submit_review, DuplicateReviewError
from apps.watchlist.models import WatchlistEntry, WatchlistStatus
from apps.watchlist.services import add_to_watchlist, DuplicateWatchlistEntryError


POSTER_BASE = 'https://image.tmdb.org/t/p/w500'

SAMPLE_USERS = [
    ('admin', 'admin@moviereview.com', 'admin123', True),
    ('movielover', 'user1@example.com', 'password123', False),
    ('cinemafan', 'user2@example.com', 'password123', False),
    ('filmcritic', 'user3@example.com', 'password123', False),
]

SAMPLE_MOVIES = [
    {
        'title': 'The Shawshank Redemption',
        'genres': ['Drama'],
        'release_year': 1994,
        'director': 'Frank Darabont',
        'cast': [
            {'name': 'Tim Robbins', 'character': 'Andy Dufresne'},
            {'name': 'Morgan Freeman', 'character': 'Ellis Boyd "Red" Redding'},
        ],
        'synopsis': 'Two imprisoned men bond over a number of years, finding solace '
                    'and eventual redemption through acts of common decency.',
        'poster_url': f'{POSTER_BASE}/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg',
        'duration': 142,
    },
    {
        'title': 'The Godfather',
        'genres': ['Crime', 'Drama'],
        'release_year': 1972,
        'director': 'Francis Ford Coppola',
        'cast': [
            {'name': 'Marlon Brando', 'character': 'Don Vito Corleone'},
            {'name': 'Al Pacino', 'character': 'Michael Corleone'},
        ],
        'synopsis': 'The aging patriarch of an organized crime dynasty transfers control '
                    'of his clandestine empire to his reluctant son.',
        'poster_url': f'{POSTER_BASE}/3bhkrj58Vtu7enYsRolD1fZdja1.jpg',
        'duration': 175,
    },
    {
        'title': 'The Dark Knight',
        'genres': ['Action', 'Crime', 'Drama'],
        'release_year': 2008,
        'director': 'Christopher Nolan',
        'cast': [
            {'name': 'Christian Bale', 'character': 'Bruce Wayne / Batman'},
            {'name': 'Heath Ledger', 'character': 'Joker'},
        ],
        'synopsis': 'Batman faces the Joker, a criminal mastermind who plunges Gotham '
                    'into anarchy and tests how far a hero will go.',
        'poster_url': f'{POSTER_BASE}/qJ2tW6WMUDux911r6m7haRef0WH.jpg',
        'duration': 152,
    },
    {
        'title': 'Pulp Fiction',
        'genres': ['Crime', 'Drama'],
        'release_year': 1994,
        'director': 'Quentin Tarantino',
        'cast': [
            {'name': 'John Travolta', 'character': 'Vincent Vega'},
            {'name': 'Samuel L. Jackson', 'character': 'Jules Winnfield'},
        ],
        'synopsis': 'The lives of two mob hitmen, a boxer, a gangster and his wife '
                    'intertwine in four tales of violence and redemption.',
        'poster_url': f'{POSTER_BASE}/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg',
        'duration': 154,
    },
    {
        'title': 'Forrest Gump',
        'genres': ['Drama', 'Romance'],
        'release_year': 1994,
        'director': 'Robert Zemeckis',
        'cast': [
            {'name': 'Tom Hanks', 'character': 'Forrest Gump'},
            {'name': 'Robin Wright', 'character': 'Jenny Curran'},
        ],
        'synopsis': 'Decades of American history unfold through the eyes of a kind '
                    'Alabama man with an unshakeable sense of loyalty.',
        'poster_url': f'{POSTER_BASE}/saHP97rTPS5eLmrLQEcANmKrsFl.jpg',
        'duration': 142,
    },
    {
        'title': 'Inception',
        'genres': ['Action', 'Sci-Fi', 'Thriller'],
        'release_year': 2010,
        'director': 'Christopher Nolan',
        'cast': [
            {'name': 'Leonardo DiCaprio', 'character': 'Cobb'},
            {'name': 'Tom Hardy', 'character': 'Eames'},
        ],
        'synopsis': 'A thief who steals secrets through shared dreams is asked to '
                    'plant an idea in the mind of an heir instead.',
        'poster_url': f'{POSTER_BASE}/edv5CZvWj09upOsy2Y6IwDhK8bt.jpg',
        'duration': 148,
    },
    {
        'title': 'The Matrix',
        'genres': ['Action', 'Sci-Fi'],
        'release_year': 1999,
        'director': 'Lana Wachowski',
        'cast': [
            {'name': 'Keanu Reeves', 'character': 'Neo'},
            {'name': 'Laurence Fishburne', 'character': 'Morpheus'},
        ],
        'synopsis': 'A hacker learns the truth about his simulated reality and joins '
                    'the rebellion against the machines that built it.',
        'poster_url': f'{POSTER_BASE}/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg',
        'duration': 136,
    },
    {
        'title': 'Goodfellas',
        'genres': ['Biography', 'Crime', 'Drama'],
        'release_year': 1990,
        'director': 'Martin Scorsese',
        'cast': [
            {'name': 'Robert De Niro', 'character': 'James Conway'},
            {'name': 'Ray Liotta', 'character': 'Henry Hill'},
        ],
        'synopsis': 'Henry Hill rises through the ranks of the mob alongside his '
                    'partners, until the life starts to fall apart.',
        'poster_url': f'{POSTER_BASE}/aKuFiU82s5ISJpGZp7YkIr3kCUd.jpg',
        'duration': 146,
    },
]

SAMPLE_REVIEWS = [
    (5, 'An absolute masterpiece. The storytelling and characters stay with you for days.'),
    (4, 'Great acting and direction. A few slow stretches, but very enjoyable overall.'),
    (3, 'Decent, though not as good as I expected. The plot was fairly predictable.'),
    (5, 'One of the best films I have seen. Beautiful cinematography and a compelling story.'),
    (2, 'Not for me. The story felt confusing and the characters thin.'),
    (4, 'Solid film with good performances. The ending could have been stronger.'),
]


class Command(BaseCommand):
    help = 'Create sample users, movies, reviews and watchlist entries'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        movies = self.create_movies()
        self.create_reviews(users, movies)
        self.create_watchlist_entries(users, movies)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        for username, email, password, is_admin in SAMPLE_USERS:
            suffix = ' (admin)' if is_admin else ''
            self.stdout.write(f'  {email} / {password}{suffix}')

    def clear_data(self):
        """Clear all catalog data and the sample accounts."""
        WatchlistEntry.objects.all().delete()
        Review.objects.all().delete()
        Movie.objects.all().delete()
        Genre.objects.all().delete()
        User.objects.filter(email__in=[email for _, email, _, _ in SAMPLE_USERS]).delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        users = []
        for username, email, password, is_admin in SAMPLE_USERS:
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={
                    'username': username,
                    'is_staff': is_admin,
                    'is_superuser': is_admin,
                }
            )
            user.set_password(password)
            user.save()
            users.append(user)

        return users

    def create_movies(self):
        self.stdout.write('  Creating movies...')

        movies = []
        for data in SAMPLE_MOVIES:
            try:
                movie = create_movie(**data)
            except DuplicateMovieError:
                movie = Movie.objects.get(title=data['title'], release_year=data['release_year'])
            movies.append(movie)

        return movies

    def create_reviews(self, users, movies):
        """Each movie gets one to three reviews from the non-admin users."""
        self.stdout.write('  Creating reviews...')

        reviewers = users[1:]
        created = 0
        for index, movie in enumerate(movies):
            for offset in range(index % len(reviewers) + 1):
                user = reviewers[(index + offset) % len(reviewers)]
                rating, text = SAMPLE_REVIEWS[(index + offset) % len(SAMPLE_REVIEWS)]
                try:
                    submit_review(user=user, movie_id=movie.id, rating=rating, review_text=text)
                except DuplicateReviewError:
                    continue
                created += 1

        self.stdout.write(f'    {created} reviews')

    def create_watchlist_entries(self, users, movies):
        self.stdout.write('  Creating watchlist entries...')

        statuses = WatchlistStatus.values
        created = 0
        for index, user in enumerate(users[1:]):
            for step, movie in enumerate(movies[index::2][:3]):
                try:
                    add_to_watchlist(user=user, movie_id=movie.id, status=statuses[step % len(statuses)])
                except DuplicateWatchlistEntryError:
                    continue
                created += 1

        self.stdout.write(f'    {created} watchlist entries')
