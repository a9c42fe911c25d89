# Generated manually for golf bag change history

import uuid
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ChangeRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('change_type', models.CharField(choices=[('single_replacement', 'Single club replacement'), ('set_replacement', 'Set replacement')], max_length=30)),
                ('triggered_by', models.CharField(default='performance_test', max_length=30)),
                ('test_session_id', models.CharField(max_length=100)),
                ('is_set_replacement', models.BooleanField(default=False)),
                ('set_type', models.CharField(blank=True, max_length=20, null=True)),
                ('user_choice', models.CharField(choices=[('single_club', 'Single club'), ('set_replacement', 'Set replacement')], max_length=30)),
                ('clubs_added', models.JSONField(default=list)),
                ('clubs_removed', models.JSONField(default=list)),
                ('grade_impact', models.JSONField(default=dict)),
                ('can_undo', models.BooleanField(default=True)),
                ('undo_expires_at', models.DateTimeField()),
                ('undone', models.BooleanField(default=False)),
                ('undone_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bag_changes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'bag_change_history',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='bag_change__user_id_0d7c5e_idx'),
                    models.Index(fields=['test_session_id'], name='bag_change__test_se_61a9b2_idx'),
                    models.Index(fields=['can_undo', 'undo_expires_at'], name='bag_change__can_und_8f2e47_idx'),
                ],
            },
        ),
    ]
