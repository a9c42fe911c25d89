# Generated manually for golf bag clubs

import uuid
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('bag_changes', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Club',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('club_type', models.CharField(max_length=50)),
                ('brand', models.CharField(blank=True, max_length=100)),
                ('model', models.CharField(blank=True, max_length=100)),
                ('year', models.PositiveIntegerField(blank=True, null=True)),
                ('loft', models.FloatField(blank=True, null=True)),
                ('lie', models.FloatField(blank=True, null=True)),
                ('length', models.FloatField(blank=True, null=True)),
                ('shaft_weight', models.FloatField(blank=True, null=True)),
                ('shaft_flex', models.CharField(blank=True, max_length=10)),
                ('shaft_kickpoint', models.CharField(blank=True, max_length=20)),
                ('shaft_torque', models.FloatField(blank=True, null=True)),
                ('shaft_brand', models.CharField(blank=True, max_length=100)),
                ('shaft_model', models.CharField(blank=True, max_length=100)),
                ('status', models.CharField(choices=[('active', 'Active'), ('archived', 'Archived')], default='active', max_length=20)),
                ('source', models.CharField(choices=[('manual', 'Manual entry'), ('performance_test', 'Performance test')], default='manual', max_length=20)),
                ('test_session_id', models.CharField(blank=True, max_length=100)),
                ('final_grade', models.FloatField(blank=True, null=True)),
                ('added_to_bag_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('archived_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='clubs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'clubs',
                'ordering': ['added_to_bag_at', 'created_at'],
                'indexes': [
                    models.Index(fields=['user', 'status'], name='clubs_user_id_4c1f0e_idx'),
                    models.Index(fields=['user', 'club_type'], name='clubs_user_id_9a2d3b_idx'),
                    models.Index(fields=['test_session_id'], name='clubs_test_se_7e5c11_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ArchivedClub',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('club_data', models.JSONField(default=dict)),
                ('archived_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('archived_reason', models.CharField(choices=[('replaced_in_testing', 'Replaced in testing'), ('undone_change', 'Undone change')], max_length=30)),
                ('time_in_bag', models.CharField(default='Unknown', max_length=50)),
                ('final_grade', models.FloatField(blank=True, null=True)),
                ('can_restore', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('change_record', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='archived_clubs', to='bag_changes.changerecord')),
                ('club', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='archive_entry', to='clubs.club')),
                ('replaced_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='replaced_archives', to='clubs.club')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='archived_clubs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'archived_clubs',
                'ordering': ['-archived_at'],
                'indexes': [
                    models.Index(fields=['user', 'archived_at'], name='archived_cl_user_id_5b8e2a_idx'),
                    models.Index(fields=['change_record'], name='archived_cl_change__3f9d40_idx'),
                ],
            },
        ),
    ]
