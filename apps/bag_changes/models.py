from django.db import models
from django.utils import timezone
import uuid


class ChangeType(models.TextChoices):
    SINGLE_REPLACEMENT = 'single_replacement', 'Single club replacement'
    SET_REPLACEMENT = 'set_replacement', 'Set replacement'


class ReplacementType(models.TextChoices):
    SINGLE_CLUB = 'single_club', 'Single club'
    SET_REPLACEMENT = 'set_replacement', 'Set replacement'


class ChangeRecord(models.Model):
    """
    Ledger entry for one bag replacement.

    Written once at the end of a replacement and flipped once by undo.
    Never deleted: after undo or expiry it stays as read-only history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='bag_changes'
    )

    change_type = models.CharField(max_length=30, choices=ChangeType.choices)
    triggered_by = models.CharField(max_length=30, default='performance_test')
    test_session_id = models.CharField(max_length=100)
    is_set_replacement = models.BooleanField(default=False)
    set_type = models.CharField(max_length=20, null=True, blank=True)
    user_choice = models.CharField(max_length=30, choices=ReplacementType.choices)

    # Ordered club summaries: club_id, brand, model, type, year, final_grade(, time_in_bag)
    clubs_added = models.JSONField(default=list)
    clubs_removed = models.JSONField(default=list)

    # before/after grades, improvement, letters and category_impacts
    grade_impact = models.JSONField(default=dict)

    # Undo window
    can_undo = models.BooleanField(default=True)
    undo_expires_at = models.DateTimeField()
    undone = models.BooleanField(default=False)
    undone_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bag_change_history'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='bag_change__user_id_0d7c5e_idx'),
            models.Index(fields=['test_session_id'], name='bag_change__test_se_61a9b2_idx'),
            models.Index(fields=['can_undo', 'undo_expires_at'], name='bag_change__can_und_8f2e47_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        state = 'undone' if self.undone else ('undoable' if self.is_undoable() else 'final')
        return f"{self.get_change_type_display()} for {self.user} ({state})"

    def is_expired(self, now=None):
        return (now or timezone.now()) > self.undo_expires_at

    def is_undoable(self, now=None):
        return self.can_undo and not self.undone and not self.is_expired(now)

    @property
    def improvement(self):
        return self.grade_impact.get('improvement')
