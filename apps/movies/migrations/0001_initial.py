# Initial schema for the movies app

import uuid
from decimal import Decimal
import apps.movies.models
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Genre',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=50, unique=True)),
            ],
            options={
                'db_table': 'genres',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Movie',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('release_year', models.PositiveSmallIntegerField(validators=[apps.movies.models.validate_release_year])),
                ('director', models.CharField(max_length=200)),
                ('cast', models.JSONField(blank=True, default=list)),
                ('synopsis', models.TextField(max_length=2000)),
                ('poster_url', models.URLField(blank=True, max_length=500, null=True)),
                ('backdrop_url', models.URLField(blank=True, max_length=500, null=True)),
                ('trailer_url', models.URLField(blank=True, max_length=500, null=True)),
                ('duration', models.PositiveIntegerField(blank=True, help_text='Runtime in minutes', null=True)),
                ('average_rating', models.DecimalField(decimal_places=1, default=Decimal('0.0'), max_digits=2, validators=[django.core.validators.MinValueValidator(Decimal('0.0')), django.core.validators.MaxValueValidator(Decimal('5.0'))])),
                ('total_reviews', models.PositiveIntegerField(default=0)),
                ('tmdb_id', models.PositiveIntegerField(blank=True, null=True, unique=True)),
                ('imdb_id', models.CharField(blank=True, max_length=20, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('genres', models.ManyToManyField(related_name='movies', to='movies.genre')),
            ],
            options={
                'db_table': 'movies',
                'ordering': ['-average_rating', '-created_at'],
                'indexes': [
                    models.Index(fields=['release_year'], name='movies_release_year_idx'),
                    models.Index(fields=['average_rating'], name='movies_average_rating_idx'),
                    models.Index(fields=['created_at'], name='movies_created_at_idx'),
                ],
            },
        ),
    ]
