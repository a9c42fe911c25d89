from datetime import timedelta

import pytest
from django.utils import timezone
from apps.clubs.models import ArchivedClub, ArchiveReason, ClubStatus
from apps.clubs.services import archive_club, calculate_time_in_bag, restore_club


class TestCalculateTimeInBag:
    """Tests for calculate_time_in_bag."""

    def test_unknown_without_date(self):
        assert calculate_time_in_bag(None) == 'Unknown'

    def test_days(self):
        now = timezone.now()
        assert calculate_time_in_bag(now - timedelta(days=12), now) == '12 days'

    def test_partial_day_rounds_up(self):
        now = timezone.now()
        assert calculate_time_in_bag(now - timedelta(days=2, hours=1), now) == '3 days'

    def test_months_and_days(self):
        now = timezone.now()
        assert calculate_time_in_bag(now - timedelta(days=94), now) == '3 months 4 days'


@pytest.mark.django_db
class TestArchiveAndRestore:
    """Tests for archive_club / restore_club."""

    def test_archive_writes_snapshot(self, golfer, make_club):
        club = make_club(
            golfer, '7-iron',
            final_grade=82.5,
            added_to_bag_at=timezone.now() - timedelta(days=40) + timedelta(hours=1),
        )
        winner = make_club(golfer, '7-iron', brand='Mizuno', status=ClubStatus.ARCHIVED)

        entry = archive_club(club, reason=ArchiveReason.REPLACED_IN_TESTING, replaced_by=winner)

        club.refresh_from_db()
        assert club.status == ClubStatus.ARCHIVED
        assert club.archived_at is not None
        assert entry.user_id == golfer.id
        assert entry.club_data['club_type'] == '7-iron'
        assert entry.club_data['brand'] == 'Titleist'
        assert entry.replaced_by == winner
        assert entry.final_grade == 82.5
        assert entry.time_in_bag == '1 months 10 days'
        assert entry.can_restore is True

    def test_archiving_twice_keeps_one_snapshot(self, golfer, make_club):
        club = make_club(golfer, '7-iron')

        archive_club(club, reason=ArchiveReason.REPLACED_IN_TESTING)
        archive_club(club, reason=ArchiveReason.UNDONE_CHANGE, can_restore=False)

        entries = ArchivedClub.objects.filter(club=club)
        assert entries.count() == 1
        assert entries.get().archived_reason == ArchiveReason.UNDONE_CHANGE

    def test_restore_removes_snapshot(self, golfer, make_club):
        club = make_club(golfer, '7-iron')
        archive_club(club, reason=ArchiveReason.REPLACED_IN_TESTING)

        restore_club(club)

        club.refresh_from_db()
        assert club.status == ClubStatus.ACTIVE
        assert club.archived_at is None
        assert not ArchivedClub.objects.filter(club=club).exists()

    def test_summary_carries_tenure(self, golfer, make_club):
        club = make_club(golfer, 'driver', brand='TaylorMade', model='Stealth', year=2022)

        entry = archive_club(club, reason=ArchiveReason.REPLACED_IN_TESTING)

        summary = entry.summary()
        assert summary['club_id'] == str(club.id)
        assert summary['type'] == 'driver'
        assert summary['brand'] == 'TaylorMade'
        assert summary['time_in_bag'] == entry.time_in_bag
