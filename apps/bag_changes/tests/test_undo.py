import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from apps.bag_changes.models import ChangeRecord, ReplacementType
from apps.bag_changes.services import (
    ChangeNotFoundError,
    ChangeSupersededError,
    GradingUnavailableError,
    PreconditionFailedError,
    UndoExpiredError,
    UndoNotAllowedError,
    apply_replacement,
    grade_user_bag,
    undo_bag_change,
)
from apps.bag_changes.tests.fakes import FailingGradingClient
from apps.clubs.models import ArchivedClub, ArchiveReason, Club, ClubStatus


@pytest.fixture
def single_change(golfer, seven_iron, test_winner):
    """A freshly applied single-club replacement."""
    result = apply_replacement(
        user=golfer,
        session_id='session-1',
        winning_club_id=test_winner.id,
        losing_club_id=seven_iron.id,
        replacement_type=ReplacementType.SINGLE_CLUB,
    )
    return ChangeRecord.objects.get(id=result['change_id'])


# =============================================================================
# Round Trip Tests
# =============================================================================

@pytest.mark.django_db
class TestUndoRoundTrip:
    """Apply followed by undo restores the bag."""

    def test_single_round_trip(self, golfer, seven_iron, test_winner, active_club_ids):
        active_before = active_club_ids(golfer)
        grade_before = grade_user_bag(golfer)

        applied = apply_replacement(
            user=golfer,
            session_id='session-1',
            winning_club_id=test_winner.id,
            losing_club_id=seven_iron.id,
            replacement_type=ReplacementType.SINGLE_CLUB,
        )
        result = undo_bag_change(user=golfer, change_id=applied['change_id'])

        assert active_club_ids(golfer) == active_before
        assert result['current_grade'] == grade_before.overall_score
        assert result['current_letter_grade'] == grade_before.letter_grade
        assert result['restored_grade'] == grade_before.as_dict()
        assert result['clubs_restored'] == 1
        assert result['clubs_archived'] == 1
        assert result['message'] == 'Bag successfully restored to previous state'

    def test_set_round_trip(self, golfer, iron_set, seven_iron, test_winner, iron_set_config, active_club_ids):
        active_before = active_club_ids(golfer)
        grade_before = grade_user_bag(golfer)

        applied = apply_replacement(
            user=golfer,
            session_id='session-2',
            winning_club_id=test_winner.id,
            losing_club_id=seven_iron.id,
            replacement_type=ReplacementType.SET_REPLACEMENT,
            set_config=iron_set_config,
        )
        result = undo_bag_change(user=golfer, change_id=applied['change_id'])

        assert active_club_ids(golfer) == active_before
        assert result['current_grade'] == grade_before.overall_score
        assert result['clubs_restored'] == 6
        assert result['clubs_archived'] == 6

    def test_undo_bookkeeping(self, golfer, seven_iron, single_change):
        added_id = single_change.clubs_added[0]['club_id']

        undo_bag_change(user=golfer, change_id=single_change.id)

        single_change.refresh_from_db()
        assert single_change.undone is True
        assert single_change.can_undo is False
        assert single_change.undone_at is not None

        assert not ArchivedClub.objects.filter(club=seven_iron).exists()
        seven_iron.refresh_from_db()
        assert seven_iron.status == ClubStatus.ACTIVE
        assert seven_iron.archived_at is None

        added = Club.objects.get(id=added_id)
        assert added.status == ClubStatus.ARCHIVED
        entry = ArchivedClub.objects.get(club=added)
        assert entry.archived_reason == ArchiveReason.UNDONE_CHANGE
        assert entry.can_restore is False
        assert entry.change_record_id == single_change.id

    def test_missing_club_is_skipped(self, golfer, seven_iron, single_change):
        Club.objects.filter(id=single_change.clubs_added[0]['club_id']).delete()

        result = undo_bag_change(user=golfer, change_id=single_change.id)

        assert result['success'] is True
        assert result['clubs_restored'] == 1
        assert result['clubs_archived'] == 0

        seven_iron.refresh_from_db()
        assert seven_iron.status == ClubStatus.ACTIVE

    def test_missing_retired_club_not_counted(self, golfer, seven_iron, single_change):
        seven_iron.delete()

        result = undo_bag_change(user=golfer, change_id=single_change.id)

        assert result['clubs_restored'] == 0
        assert result['clubs_archived'] == 1


# =============================================================================
# Eligibility Tests
# =============================================================================

@pytest.mark.django_db
class TestUndoEligibility:
    """Undo is refused once the change is final."""

    def test_second_undo_fails(self, golfer, single_change):
        undo_bag_change(user=golfer, change_id=single_change.id)

        with pytest.raises(PreconditionFailedError) as excinfo:
            undo_bag_change(user=golfer, change_id=single_change.id)

        assert isinstance(excinfo.value, UndoNotAllowedError)

    def test_undo_just_before_expiry(self, golfer, single_change):
        single_change.undo_expires_at = timezone.now() + timedelta(seconds=1)
        single_change.save()

        result = undo_bag_change(user=golfer, change_id=single_change.id)

        assert result['success'] is True

    def test_undo_just_after_expiry(self, golfer, seven_iron, single_change):
        single_change.undo_expires_at = timezone.now() - timedelta(seconds=1)
        single_change.save()

        with pytest.raises(UndoExpiredError) as excinfo:
            undo_bag_change(user=golfer, change_id=single_change.id)

        assert excinfo.value.code == 'undo_expired'
        seven_iron.refresh_from_db()
        assert seven_iron.status == ClubStatus.ARCHIVED
        single_change.refresh_from_db()
        assert single_change.undone is False

    def test_closed_change(self, golfer, single_change):
        single_change.can_undo = False
        single_change.save()

        with pytest.raises(UndoNotAllowedError):
            undo_bag_change(user=golfer, change_id=single_change.id)

    def test_unknown_change(self, golfer):
        with pytest.raises(ChangeNotFoundError):
            undo_bag_change(user=golfer, change_id=uuid.uuid4())

    def test_other_golfers_change(self, other_golfer, single_change):
        with pytest.raises(ChangeNotFoundError):
            undo_bag_change(user=other_golfer, change_id=single_change.id)

    def test_grading_failure_rolls_back(self, golfer, seven_iron, single_change):
        with pytest.raises(GradingUnavailableError):
            undo_bag_change(
                user=golfer,
                change_id=single_change.id,
                grading_client=FailingGradingClient(),
            )

        single_change.refresh_from_db()
        assert single_change.undone is False
        assert single_change.can_undo is True
        seven_iron.refresh_from_db()
        assert seven_iron.status == ClubStatus.ARCHIVED
        assert ArchivedClub.objects.filter(club=seven_iron).exists()


# =============================================================================
# Chained Change Tests
# =============================================================================

@pytest.fixture
def chained_changes(golfer, test_winner, single_change):
    """A second replacement that retires the club the first one added."""
    first_clone = Club.objects.get(id=single_change.clubs_added[0]['club_id'])
    result = apply_replacement(
        user=golfer,
        session_id='session-3',
        winning_club_id=test_winner.id,
        losing_club_id=first_clone.id,
        replacement_type=ReplacementType.SINGLE_CLUB,
    )
    return single_change, ChangeRecord.objects.get(id=result['change_id']), first_clone


def active_seven_irons(user):
    return Club.objects.filter(user=user, club_type='7-iron', status=ClubStatus.ACTIVE).count()


@pytest.mark.django_db
class TestChainedUndo:
    """Undo of overlapping changes runs newest first."""

    def test_older_change_blocked_while_newer_stands(self, golfer, seven_iron, chained_changes):
        first, second, first_clone = chained_changes

        with pytest.raises(ChangeSupersededError) as excinfo:
            undo_bag_change(user=golfer, change_id=first.id)

        assert excinfo.value.code == 'change_superseded'

        first.refresh_from_db()
        assert first.undone is False
        assert first.can_undo is True
        seven_iron.refresh_from_db()
        assert seven_iron.status == ClubStatus.ARCHIVED

        entry = ArchivedClub.objects.get(club=first_clone)
        assert entry.archived_reason == ArchiveReason.REPLACED_IN_TESTING
        assert entry.change_record_id == second.id
        assert entry.can_restore is True
        assert active_seven_irons(golfer) == 1

    def test_newest_first_restores_original_bag(self, golfer, seven_iron, chained_changes, active_club_ids):
        first, second, first_clone = chained_changes

        undo_bag_change(user=golfer, change_id=second.id)
        first_clone.refresh_from_db()
        assert first_clone.status == ClubStatus.ACTIVE
        assert active_seven_irons(golfer) == 1

        undo_bag_change(user=golfer, change_id=first.id)
        seven_iron.refresh_from_db()
        assert seven_iron.status == ClubStatus.ACTIVE
        assert active_seven_irons(golfer) == 1
        assert seven_iron.id in active_club_ids(golfer)
