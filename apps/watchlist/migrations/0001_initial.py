# Initial schema for the watchlist app

import uuid
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('movies', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='WatchlistEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('want_to_watch', 'Want to watch'), ('watching', 'Watching'), ('watched', 'Watched')], default='want_to_watch', max_length=20)),
                ('date_added', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('movie', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='watchlist_entries', to='movies.movie')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='watchlist_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'Watchlist entries',
                'db_table': 'watchlist_entries',
                'ordering': ['-date_added'],
                'indexes': [
                    models.Index(fields=['user', 'status'], name='watchlist_user_status_idx'),
                    models.Index(fields=['user', 'date_added'], name='watchlist_user_added_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'movie'), name='unique_watchlist_entry_per_user_movie'),
                ],
            },
        ),
    ]
