"""
Precondition checks for bag replacements and undo.

Checks return a PreconditionResult instead of raising, so the caller
decides how to report a failure. raise_for_result() maps a failed result
onto the matching domain exception.
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Optional

from django.db import models
from django.utils import timezone

from apps.accounts.models import User
from apps.bag_changes.models import ChangeRecord
from apps.clubs.models import Club, ClubStatus
from .exceptions import (
    ChangeAlreadyUndoneError,
    ChangeSupersededError,
    FavoriteClubProtectedError,
    UndoExpiredError,
    UndoNotAllowedError,
)


class PreconditionReason(models.TextChoices):
    OK = 'ok', 'OK'
    FAVORITE_CLUB_PROTECTED = 'favorite_club_protected', 'Favorite club protected'
    CHANGE_NOT_UNDOABLE = 'change_not_undoable', 'Change not undoable'
    UNDO_EXPIRED = 'undo_expired', 'Undo expired'
    CHANGE_ALREADY_UNDONE = 'change_already_undone', 'Change already undone'
    CHANGE_SUPERSEDED = 'change_superseded', 'Change superseded'


REASON_EXCEPTIONS = MappingProxyType({
    PreconditionReason.FAVORITE_CLUB_PROTECTED: FavoriteClubProtectedError,
    PreconditionReason.CHANGE_NOT_UNDOABLE: UndoNotAllowedError,
    PreconditionReason.UNDO_EXPIRED: UndoExpiredError,
    PreconditionReason.CHANGE_ALREADY_UNDONE: ChangeAlreadyUndoneError,
    PreconditionReason.CHANGE_SUPERSEDED: ChangeSupersededError,
})


@dataclass(frozen=True)
class PreconditionResult:
    reason: str = PreconditionReason.OK
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.reason == PreconditionReason.OK


PASSED = PreconditionResult()


def evaluate_replacement_preconditions(
    *,
    user: User,
    clubs_to_remove: Iterable[Club]
) -> PreconditionResult:
    """The favorite club may never be retired by a replacement."""
    favorite_id = user.favorite_club_id
    if favorite_id and any(str(club.id) == str(favorite_id) for club in clubs_to_remove):
        return PreconditionResult(
            PreconditionReason.FAVORITE_CLUB_PROTECTED,
            'Cannot remove your favorite club. Please select a new favorite first.',
        )
    return PASSED


def evaluate_undo_eligibility(
    record: ChangeRecord,
    now: Optional[datetime] = None
) -> PreconditionResult:
    """
    Check, in order, that a change can still be undone.

    The window is inclusive: undo at exactly undo_expires_at is allowed.
    """
    now = now or timezone.now()

    if not record.can_undo:
        return PreconditionResult(
            PreconditionReason.CHANGE_NOT_UNDOABLE,
            'This change can no longer be undone',
        )
    if now > record.undo_expires_at:
        return PreconditionResult(
            PreconditionReason.UNDO_EXPIRED,
            'Undo period has expired. Your bag has been updated.',
        )
    if record.undone:
        return PreconditionResult(
            PreconditionReason.CHANGE_ALREADY_UNDONE,
            'This change has already been undone',
        )
    return PASSED


def evaluate_undo_supersession(
    record: ChangeRecord,
    added_clubs: Iterable[Club]
) -> PreconditionResult:
    """
    Undo must run newest first.

    Once a later change retires a club this change added, that later
    change has to be undone before this one.
    """
    if any(club.status != ClubStatus.ACTIVE for club in added_clubs):
        return PreconditionResult(
            PreconditionReason.CHANGE_SUPERSEDED,
            'A later change replaced clubs added by this change. Undo that change first.',
        )
    return PASSED

def raise_for_result(result: PreconditionResult) -> None:
    if not result.ok:
        raise REASON_EXCEPTIONS[result.reason](result.message)
