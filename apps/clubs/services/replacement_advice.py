"""
Replacement strategy advisor.

Recommends whether a winning club from a testing session should replace a
single club or the whole matched set it belongs to, and describes the set
currently in the bag.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from uuid import UUID

from django.db import DatabaseError

from apps.accounts.models import User
from apps.clubs.models import Club, ClubStatus
from .classification import (
    ClubCategory,
    classify_club_type,
    format_iron_name,
    get_iron_number,
)
from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplacementPolicy:
    default_option: str
    show_set_option: bool
    confidence: str
    message: str


REPLACEMENT_POLICIES = MappingProxyType({
    ClubCategory.DRIVER: ReplacementPolicy(
        'single', False, 'high',
        'Drivers are typically replaced individually. You have one driver in your bag.',
    ),
    ClubCategory.PUTTER: ReplacementPolicy(
        'single', False, 'high',
        'Putters are always replaced individually. You have one putter in your bag.',
    ),
    ClubCategory.IRON: ReplacementPolicy(
        'set', True, 'high',
        'Most golfers prefer matching iron sets for consistent feel and performance. '
        'You can also choose to replace just this single iron.',
    ),
    ClubCategory.WEDGE: ReplacementPolicy(
        'single', True, 'medium',
        'Wedges can be replaced individually or as a set. Many golfers mix wedge brands, '
        'but matching wedges provide consistent spin and feel.',
    ),
    ClubCategory.WOOD: ReplacementPolicy(
        'single', True, 'medium',
        'Fairway woods are often replaced individually, but matching woods provide consistent '
        'performance. Consider a set if you want matching technology.',
    ),
    ClubCategory.HYBRID: ReplacementPolicy(
        'single', True, 'medium',
        'Hybrids are typically replaced individually, but matching hybrids provide consistent '
        'gapping. Consider a set if you use multiple hybrids.',
    ),
    ClubCategory.UNKNOWN: ReplacementPolicy(
        'single', False, 'low',
        'Unable to determine optimal replacement strategy. Single club replacement recommended.',
    ),
})

# Suggested range and club count when the golfer owns none of the category
DEFAULT_SET_RANGES = MappingProxyType({
    ClubCategory.IRON: ('5-PW', 6),
    ClubCategory.WEDGE: ('PW-LW', 3),
    ClubCategory.WOOD: ('3W-5W', 2),
    ClubCategory.HYBRID: ('3H-4H', 2),
})

UNKNOWN_SET_OPTIONS = MappingProxyType({
    'current_range': 'Unknown',
    'suggested_range': 'Unknown',
    'clubs_affected': 0,
})


def get_replacement_policy(club_type) -> ReplacementPolicy:
    """Policy row for a club type. Unrecognized types get the low-confidence fallback."""
    category = classify_club_type(club_type).category
    return REPLACEMENT_POLICIES[category]


def suggest_replacement(
    *,
    user: User,
    club_type: str,
    winning_club_id: UUID
) -> dict:
    """
    Recommend single or set replacement for a club type.

    Args:
        user: Golfer whose bag is analysed
        club_type: Type of the club that lost the test (e.g. "7-iron")
        winning_club_id: Club that won the test

    Returns:
        dict with default_option, show_set_option, confidence, message,
        set_options and the winning club's brand/model

    Raises:
        InvalidArgumentError: If club_type or winning_club_id is missing
    """
    if not club_type:
        raise InvalidArgumentError('Missing required field: club_type')
    if not winning_club_id:
        raise InvalidArgumentError('Missing required field: winning_club_id')

    classification = classify_club_type(club_type)
    policy = REPLACEMENT_POLICIES[classification.category]

    recommendation = {
        'default_option': policy.default_option,
        'show_set_option': policy.show_set_option,
        'confidence': policy.confidence,
        'message': policy.message,
        'set_options': None,
    }

    if policy.show_set_option:
        recommendation['set_options'] = analyze_current_set(
            user=user,
            category=classification.category,
        )

    winning_club = Club.objects.filter(id=winning_club_id, user=user).first()
    recommendation['winning_club_brand'] = (winning_club.brand if winning_club else '') or 'Unknown'
    recommendation['winning_club_model'] = (winning_club.model if winning_club else '') or 'Unknown'

    return recommendation


def analyze_current_set(*, user: User, category: str) -> dict:
    """
    Describe the golfer's current set for a category.

    Inventory errors only degrade the recommendation, so a failing query
    yields an "Unknown" range instead of an error.
    """
    try:
        club_types = list(
            Club.objects
            .filter(user=user, status=ClubStatus.ACTIVE)
            .values_list('club_type', flat=True)
        )
    except DatabaseError:
        logger.warning(
            "Inventory lookup failed while analysing %s set for user %s",
            category, user.pk, exc_info=True,
        )
        return dict(UNKNOWN_SET_OPTIONS)

    if not club_types:
        return dict(UNKNOWN_SET_OPTIONS)

    if category == ClubCategory.IRON:
        return _analyze_iron_set(club_types)
    if category in (ClubCategory.WEDGE, ClubCategory.WOOD, ClubCategory.HYBRID):
        return _analyze_typed_set(club_types, category)
    return dict(UNKNOWN_SET_OPTIONS)


def _default_set_options(category: str) -> dict:
    suggested_range, clubs_affected = DEFAULT_SET_RANGES[category]
    return {
        'current_range': 'None',
        'suggested_range': suggested_range,
        'clubs_affected': clubs_affected,
    }


def _analyze_iron_set(club_types: list[str]) -> dict:
    # Pitching wedge carries rank 10, so it extends the iron range
    ranks = sorted(
        rank for rank in (get_iron_number(t) for t in club_types)
        if rank is not None
    )
    if not ranks:
        return _default_set_options(ClubCategory.IRON)

    current_range = f'{format_iron_name(ranks[0])}-{format_iron_name(ranks[-1])}'
    return {
        'current_range': current_range,
        'suggested_range': current_range,
        'clubs_affected': len(ranks),
    }


def _analyze_typed_set(club_types: list[str], category: str) -> dict:
    members = sorted(
        classification.normalized
        for classification in (classify_club_type(t) for t in club_types)
        if classification.category == category
    )
    if not members:
        return _default_set_options(category)

    if category == ClubCategory.WEDGE:
        current_range = f'{members[0].upper()}-{members[-1].upper()}'
    else:
        current_range = ', '.join(member.upper() for member in members)

    return {
        'current_range': current_range,
        'suggested_range': current_range,
        'clubs_affected': len(members),
    }

