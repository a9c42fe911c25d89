"""Undo service - reverses a recorded bag change inside its undo window."""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.bag_changes.models import ChangeRecord
from apps.clubs.models import ArchiveReason, Club
from apps.clubs.services import archive_club, restore_club
from .exceptions import ChangeNotFoundError
from .grading import get_grading_client, grade_user_bag
from .preconditions import (
    evaluate_undo_eligibility,
    evaluate_undo_supersession,
    raise_for_result,
)

logger = logging.getLogger(__name__)


def _summary_club_ids(summaries: list[dict]) -> list[str]:
    return [summary['club_id'] for summary in summaries or [] if summary.get('club_id')]


def undo_bag_change(*, user: User, change_id: UUID, grading_client=None) -> dict:
    """
    Undo a bag change.

    This operation:
    1. Locks the ChangeRecord row
    2. Checks eligibility (undoable, within window, not already undone)
       and that no later change has retired the clubs this one added
    3. Restores the clubs the change retired
    4. Archives the clubs the change added (reason undone_change)
    5. Regrades the bag
    6. Marks the change undone

    Everything runs in one transaction, so two concurrent undo requests for
    the same change cannot both succeed.

    Args:
        user: Golfer who owns the change
        change_id: UUID of the ChangeRecord
        grading_client: Optional grading client (defaults to BAG_GRADING_CLIENT)

    Returns:
        dict with success, restored_grade, current_grade, current_letter_grade,
        message, clubs_restored and clubs_archived

    Raises:
        ChangeNotFoundError: If the change doesn't exist for this golfer
        UndoNotAllowedError: If the change is no longer undoable
        UndoExpiredError: If the undo window has closed
        ChangeAlreadyUndoneError: If the change was already undone
        ChangeSupersededError: If a later change retired clubs this one added
        GradingUnavailableError: Grading service failed
    """
    grading_client = grading_client or get_grading_client()

    with transaction.atomic():
        try:
            record = ChangeRecord.objects.select_for_update().get(id=change_id, user=user)
        except ChangeRecord.DoesNotExist:
            raise ChangeNotFoundError('Change record not found')

        now = timezone.now()
        raise_for_result(evaluate_undo_eligibility(record, now))

        logger.info("Undoing change %s for user %s", record.id, user.pk)

        removed_ids = _summary_club_ids(record.clubs_removed)
        added_ids = _summary_club_ids(record.clubs_added)

        clubs = (
            Club.objects
            .filter(user=user)
            .select_for_update()
            .in_bulk(removed_ids + added_ids)
        )
        clubs = {str(club_id): club for club_id, club in clubs.items()}

        added_clubs = []
        for club_id in added_ids:
            club = clubs.get(club_id)
            if club is None:
                logger.warning("Club %s from change %s no longer exists; skipping archive", club_id, record.id)
                continue
            added_clubs.append(club)

        raise_for_result(evaluate_undo_supersession(record, added_clubs))

        restored = 0
        for club_id in removed_ids:
            club = clubs.get(club_id)
            if club is None:
                logger.warning("Club %s from change %s no longer exists; skipping restore", club_id, record.id)
                continue
            restore_club(club)
            restored += 1

        for club in added_clubs:
            archive_club(
                club,
                reason=ArchiveReason.UNDONE_CHANGE,
                change_record=record,
                can_restore=False,
            )

        restored_grade = grade_user_bag(user, grading_client)

        record.undone = True
        record.undone_at = now
        record.can_undo = False
        record.save(update_fields=['undone', 'undone_at', 'can_undo', 'updated_at'])

    logger.info(
        "Change %s undone. Restored grade: %s (%s)",
        record.id, restored_grade.letter_grade, restored_grade.overall_score,
    )

    return {
        'success': True,
        'restored_grade': restored_grade.as_dict(),
        'current_grade': restored_grade.overall_score,
        'current_letter_grade': restored_grade.letter_grade,
        'message': 'Bag successfully restored to previous state',
        'clubs_restored': restored,
        'clubs_archived': len(added_clubs),
    }
