from django.db import models
from django.utils import timezone
import uuid


class ClubStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    ARCHIVED = 'archived', 'Archived'


class ClubSource(models.TextChoices):
    MANUAL = 'manual', 'Manual entry'
    PERFORMANCE_TEST = 'performance_test', 'Performance test'


class ArchiveReason(models.TextChoices):
    REPLACED_IN_TESTING = 'replaced_in_testing', 'Replaced in testing'
    UNDONE_CHANGE = 'undone_change', 'Undone change'


# Fields copied between a live club, its archive snapshot and synthesized set members
CLUB_SPEC_FIELDS = (
    'club_type',
    'brand',
    'model',
    'year',
    'loft',
    'lie',
    'length',
    'shaft_weight',
    'shaft_flex',
    'shaft_kickpoint',
    'shaft_torque',
    'shaft_brand',
    'shaft_model',
)


class Club(models.Model):
    """A single physical club in a golfer's inventory."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='clubs'
    )

    # Identification
    club_type = models.CharField(max_length=50)
    brand = models.CharField(max_length=100, blank=True)
    model = models.CharField(max_length=100, blank=True)
    year = models.PositiveIntegerField(null=True, blank=True)

    # Head specification
    loft = models.FloatField(null=True, blank=True)
    lie = models.FloatField(null=True, blank=True)
    length = models.FloatField(null=True, blank=True)

    # Shaft specification
    shaft_weight = models.FloatField(null=True, blank=True)
    shaft_flex = models.CharField(max_length=10, blank=True)
    shaft_kickpoint = models.CharField(max_length=20, blank=True)
    shaft_torque = models.FloatField(null=True, blank=True)
    shaft_brand = models.CharField(max_length=100, blank=True)
    shaft_model = models.CharField(max_length=100, blank=True)

    # Lifecycle
    status = models.CharField(
        max_length=20,
        choices=ClubStatus.choices,
        default=ClubStatus.ACTIVE
    )
    source = models.CharField(
        max_length=20,
        choices=ClubSource.choices,
        default=ClubSource.MANUAL
    )
    test_session_id = models.CharField(max_length=100, blank=True)
    final_grade = models.FloatField(null=True, blank=True)

    # Timestamps
    added_to_bag_at = models.DateTimeField(default=timezone.now)
    archived_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clubs'
        indexes = [
            models.Index(fields=['user', 'status'], name='clubs_user_id_4c1f0e_idx'),
            models.Index(fields=['user', 'club_type'], name='clubs_user_id_9a2d3b_idx'),
            models.Index(fields=['test_session_id'], name='clubs_test_se_7e5c11_idx'),
        ]
        ordering = ['added_to_bag_at', 'created_at']

    def __str__(self):
        label = ' '.join(part for part in [self.brand, self.model] if part) or 'Unknown'
        return f"{label} {self.club_type} ({self.status})"

    @property
    def is_active(self):
        return self.status == ClubStatus.ACTIVE

    def spec_data(self):
        """Return the club's identification and physical spec as a plain dict."""
        return {field: getattr(self, field) for field in CLUB_SPEC_FIELDS}

    def summary(self):
        """Short description used in change history entries."""
        return {
            'club_id': str(self.id),
            'brand': self.brand,
            'model': self.model,
            'type': self.club_type,
            'year': self.year,
            'final_grade': self.final_grade,
        }


class ArchivedClub(models.Model):
    """
    Snapshot of a club retired from the bag.

    Exists exactly while the club is archived by a bag change. One row per
    club: archiving the same club again overwrites its snapshot, restoring
    the club removes it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    club = models.OneToOneField(
        Club,
        on_delete=models.CASCADE,
        related_name='archive_entry'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='archived_clubs'
    )

    club_data = models.JSONField(default=dict)

    archived_at = models.DateTimeField(default=timezone.now)
    archived_reason = models.CharField(
        max_length=30,
        choices=ArchiveReason.choices
    )
    replaced_by = models.ForeignKey(
        Club,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='replaced_archives'
    )
    change_record = models.ForeignKey(
        'bag_changes.ChangeRecord',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='archived_clubs'
    )
    time_in_bag = models.CharField(max_length=50, default='Unknown')
    final_grade = models.FloatField(null=True, blank=True)
    can_restore = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'archived_clubs'
        indexes = [
            models.Index(fields=['user', 'archived_at'], name='archived_cl_user_id_5b8e2a_idx'),
            models.Index(fields=['change_record'], name='archived_cl_change__3f9d40_idx'),
        ]
        ordering = ['-archived_at']

    def __str__(self):
        club_type = self.club_data.get('club_type', 'club')
        return f"Archived {club_type} ({self.archived_reason})"

    def summary(self):
        """Removed-club entry for change history."""
        return {
            'club_id': str(self.club_id),
            'brand': self.club_data.get('brand'),
            'model': self.club_data.get('model'),
            'type': self.club_data.get('club_type'),
            'year': self.club_data.get('year'),
            'final_grade': self.final_grade,
            'time_in_bag': self.time_in_bag,
        }
