"""
Bag update service - applies a replacement decided in a testing session.

A replacement retires the losing club (or its whole matched set) into the
archive, inserts the winning club (or a freshly generated set), regrades
the bag and records an undoable ChangeRecord.
"""

import logging
from datetime import timedelta
from uuid import UUID
from typing import Optional, Union

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.bag_changes.models import ChangeRecord, ChangeType, ReplacementType
from apps.clubs.models import ArchiveReason, ArchivedClub, Club, ClubSource, ClubStatus
from apps.clubs.services import (
    ClubNotFoundError,
    InvalidArgumentError,
    SetConfig,
    archive_club,
    classify_club_type,
    generate_set_clubs,
    resolve_clubs_to_remove,
    validate_set_config,
)
from .exceptions import InvalidReplacementTypeError, MissingSetConfigError
from .grading import BagGrade, get_grading_client, grade_user_bag
from .preconditions import evaluate_replacement_preconditions, raise_for_result

logger = logging.getLogger(__name__)


CATEGORY_IMPACT_FIELDS = (
    'age',
    'weight_progression',
    'loft_gapping',
    'flex_consistency',
    'kickpoint_consistency',
    'torque_consistency',
    'length_progression',
    'lie_angle_progression',
)


def get_undo_window() -> timedelta:
    return timedelta(days=settings.BAG_CHANGE_UNDO_WINDOW_DAYS)


def calculate_category_impacts(before: BagGrade, after: BagGrade) -> dict:
    """Per-category before/after/change table. Missing scores count as 0."""
    impacts = {}
    for category in CATEGORY_IMPACT_FIELDS:
        before_score = before.component(category)
        after_score = after.component(category)
        impacts[category] = {
            'before': before_score,
            'after': after_score,
            'change': after_score - before_score,
        }
    return impacts


def _get_owned_club(user: User, club_id: UUID, *, label: str, active_only: bool = False) -> Club:
    queryset = Club.objects.filter(user=user)
    if active_only:
        queryset = queryset.filter(status=ClubStatus.ACTIVE)
    try:
        return queryset.get(id=club_id)
    except Club.DoesNotExist:
        raise ClubNotFoundError(f"{label} club not found in your bag")


def _slot_key(club_type):
    classification = classify_club_type(club_type)
    return classification.rank or classification.normalized


def _find_replacement(club: Club, added_clubs: list[Club]) -> Optional[Club]:
    """The added club that takes over the retired club's slot in the bag."""
    if len(added_clubs) == 1:
        return added_clubs[0]
    slot = _slot_key(club.club_type)
    return next((added for added in added_clubs if _slot_key(added.club_type) == slot), None)


def _validate_request(
    *,
    session_id,
    winning_club_id,
    losing_club_id,
    replacement_type,
    set_config
) -> Optional[SetConfig]:
    if not session_id or not winning_club_id or not losing_club_id or not replacement_type:
        raise InvalidArgumentError(
            'Missing required fields: session_id, winning_club_id, losing_club_id, replacement_type'
        )
    if replacement_type not in ReplacementType.values:
        raise InvalidReplacementTypeError(
            f"Unsupported replacement type '{replacement_type}'. "
            f"Expected one of: {', '.join(ReplacementType.values)}"
        )
    if str(winning_club_id) == str(losing_club_id):
        raise InvalidArgumentError('Winning and losing club must be different clubs')

    if replacement_type != ReplacementType.SET_REPLACEMENT:
        return None

    if not set_config:
        raise MissingSetConfigError('set_config required for set replacements')
    if isinstance(set_config, dict):
        set_config = SetConfig.from_dict(set_config)
    validate_set_config(set_config)
    return set_config


def apply_replacement(
    *,
    user: User,
    session_id: str,
    winning_club_id: UUID,
    losing_club_id: UUID,
    replacement_type: str,
    set_config: Optional[Union[SetConfig, dict]] = None,
    grading_client=None
) -> dict:
    """
    Replace a club (or matched set) in the golfer's bag.

    This operation:
    1. Locks the owner row so replacements for one golfer run one at a time
    2. Grades the bag before any change
    3. Resolves the clubs to retire and rejects the favorite club
    4. Inserts the new clubs tagged with the testing session
    5. Archives retired clubs (snapshot first, then status change), each
       linked to the new club that takes its slot
    6. Regrades the bag and writes the ChangeRecord
    7. Links every new archive snapshot to the ChangeRecord

    Steps 1-7 run in one transaction; any failure leaves the bag untouched.

    Args:
        user: Golfer whose bag changes
        session_id: Testing session that produced the decision
        winning_club_id: Club that won the test
        losing_club_id: Active club that lost the test
        replacement_type: 'single_club' or 'set_replacement'
        set_config: SetConfig or dict, required for set replacements
        grading_client: Optional grading client (defaults to BAG_GRADING_CLIENT)

    Returns:
        dict with success, new_grade, change_id, clubs_added, clubs_removed,
        improvement and improvement_letter

    Raises:
        InvalidArgumentError: Missing fields, unknown replacement type,
            missing/invalid set config, or losing club outside the set
        ClubNotFoundError: Winning or losing club not in the golfer's bag
        FavoriteClubProtectedError: Replacement would retire the favorite club
        GradingUnavailableError: Grading service failed
    """
    set_config = _validate_request(
        session_id=session_id,
        winning_club_id=winning_club_id,
        losing_club_id=losing_club_id,
        replacement_type=replacement_type,
        set_config=set_config,
    )
    is_set = replacement_type == ReplacementType.SET_REPLACEMENT
    grading_client = grading_client or get_grading_client()

    with transaction.atomic():
        owner = User.objects.select_for_update().get(pk=user.pk)

        before_grade = grade_user_bag(owner, grading_client)
        logger.info(
            "Current bag grade for user %s: %s (%s)",
            owner.pk, before_grade.letter_grade, before_grade.overall_score,
        )

        losing_club = _get_owned_club(owner, losing_club_id, label='Losing', active_only=True)
        winning_club = _get_owned_club(owner, winning_club_id, label='Winning')

        if is_set:
            clubs_to_remove = resolve_clubs_to_remove(
                user=owner,
                set_config=set_config,
                losing_club=losing_club,
            )
        else:
            clubs_to_remove = [losing_club]

        raise_for_result(evaluate_replacement_preconditions(
            user=owner,
            clubs_to_remove=clubs_to_remove,
        ))

        if is_set:
            clubs_to_add = generate_set_clubs(
                set_config=set_config,
                template_club=winning_club,
                members=clubs_to_remove,
            )
        else:
            clubs_to_add = [winning_club.spec_data()]

        logger.info(
            "Removing %d clubs, adding %d clubs for user %s",
            len(clubs_to_remove), len(clubs_to_add), owner.pk,
        )

        added_clubs = [
            Club.objects.create(
                user=owner,
                **club_fields,
                status=ClubStatus.ACTIVE,
                source=ClubSource.PERFORMANCE_TEST,
                test_session_id=session_id,
            )
            for club_fields in clubs_to_add
        ]

        archived_entries = [
            archive_club(
                club,
                reason=ArchiveReason.REPLACED_IN_TESTING,
                replaced_by=_find_replacement(club, added_clubs),
                can_restore=True,
            )
            for club in clubs_to_remove
        ]

        after_grade = grade_user_bag(owner, grading_client)
        improvement = after_grade.overall_score - before_grade.overall_score
        logger.info(
            "New bag grade for user %s: %s (%s)",
            owner.pk, after_grade.letter_grade, after_grade.overall_score,
        )

        now = timezone.now()
        record = ChangeRecord.objects.create(
            user=owner,
            created_at=now,
            change_type=ChangeType.SET_REPLACEMENT if is_set else ChangeType.SINGLE_REPLACEMENT,
            triggered_by=ClubSource.PERFORMANCE_TEST,
            test_session_id=session_id,
            is_set_replacement=is_set,
            set_type=set_config.set_type if set_config else None,
            user_choice=replacement_type,
            clubs_added=[club.summary() for club in added_clubs],
            clubs_removed=[entry.summary() for entry in archived_entries],
            grade_impact={
                'before_bag_grade': before_grade.overall_score,
                'after_bag_grade': after_grade.overall_score,
                'improvement': improvement,
                'before_letter_grade': before_grade.letter_grade,
                'after_letter_grade': after_grade.letter_grade,
                'category_impacts': calculate_category_impacts(before_grade, after_grade),
            },
            can_undo=True,
            undo_expires_at=now + get_undo_window(),
            undone=False,
        )

        ArchivedClub.objects.filter(
            id__in=[entry.id for entry in archived_entries]
        ).update(change_record=record)

    logger.info("Change history created: %s", record.id)

    return {
        'success': True,
        'new_grade': after_grade.as_dict(),
        'change_id': str(record.id),
        'clubs_added': len(added_clubs),
        'clubs_removed': len(archived_entries),
        'improvement': improvement,
        'improvement_letter': f'{before_grade.letter_grade} → {after_grade.letter_grade}',
    }
