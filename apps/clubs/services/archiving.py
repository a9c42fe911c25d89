"""Archive and restore clubs in a golfer's bag."""

import math
from datetime import datetime
from typing import Optional

from django.utils import timezone

from apps.clubs.models import ArchivedClub, Club, ClubStatus

DAYS_PER_MONTH = 30


def calculate_time_in_bag(added_at: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Tenure of a club as text, e.g. "12 days" or "3 months 4 days".

    Partial days round up. Months are counted as 30 days.
    """
    if not added_at:
        return 'Unknown'

    now = now or timezone.now()
    elapsed_days = math.ceil(abs((now - added_at).total_seconds()) / 86400)
    months, days = divmod(elapsed_days, DAYS_PER_MONTH)

    if months == 0:
        return f'{days} days'
    return f'{months} months {days} days'


def archive_club(
    club: Club,
    *,
    reason: str,
    replaced_by: Optional[Club] = None,
    change_record=None,
    can_restore: bool = True
) -> ArchivedClub:
    """
    Retire a club from the bag.

    The archive snapshot is written before the live club is marked
    archived. Archiving a club that already has a snapshot overwrites it.
    """
    now = timezone.now()

    archived, _ = ArchivedClub.objects.update_or_create(
        club=club,
        defaults={
            'user_id': club.user_id,
            'club_data': club.spec_data(),
            'archived_at': now,
            'archived_reason': reason,
            'replaced_by': replaced_by,
            'change_record': change_record,
            'time_in_bag': calculate_time_in_bag(club.added_to_bag_at, now),
            'final_grade': club.final_grade,
            'can_restore': can_restore,
        },
    )

    club.status = ClubStatus.ARCHIVED
    club.archived_at = now
    club.save(update_fields=['status', 'archived_at', 'updated_at'])

    return archived


def restore_club(club: Club) -> Club:
    """Return an archived club to active play and drop its archive snapshot."""
    club.status = ClubStatus.ACTIVE
    club.archived_at = None
    club.save(update_fields=['status', 'archived_at', 'updated_at'])

    ArchivedClub.objects.filter(club=club).delete()
    return club
