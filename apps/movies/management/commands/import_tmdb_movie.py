from django.core.management.base import BaseCommand, CommandError

from apps.movies.services import (
    import_movie_from_tmdb,
    DuplicateMovieError,
    TmdbConfigurationError,
    TmdbImportError,
)


class Command(BaseCommand):
    help = "Import one or more movies from TMDb by their TMDb ids"

    def add_arguments(self, parser):
        parser.add_argument('tmdb_ids', nargs='+', type=int, help='TMDb movie ids')

    def handle(self, *args, **options):
        imported = 0
        skipped = 0
        failed = 0

        for tmdb_id in options['tmdb_ids']:
            try:
                movie = import_movie_from_tmdb(tmdb_id=tmdb_id)
            except TmdbConfigurationError as e:
                raise CommandError(str(e))
            except DuplicateMovieError:
                skipped += 1
                self.stdout.write(self.style.WARNING(f"Skipping {tmdb_id} (already imported)"))
                continue
            except TmdbImportError as e:
                failed += 1
                self.stdout.write(self.style.ERROR(f"Failed to import {tmdb_id}: {e}"))
                continue

            imported += 1
            self.stdout.write(self.style.SUCCESS(f"Imported {movie.title} ({movie.release_year})"))

        self.stdout.write(
            self.style.SUCCESS(
                f"\nDone! Imported: {imported}, Skipped: {skipped}, Failed: {failed}"
            )
        )
