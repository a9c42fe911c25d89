"""
Club category classification.

Pure functions that map a free-text club type ("7-iron", "Sand Wedge",
"3 wood") to a category and, for irons, to a numeric rank used for set
range math. Pitching wedge counts as iron rank 10 so that "5-PW" is a
contiguous range.
"""

import re
from dataclasses import dataclass
from typing import Optional

from django.db import models


class ClubCategory(models.TextChoices):
    DRIVER = 'driver', 'Driver'
    PUTTER = 'putter', 'Putter'
    IRON = 'iron', 'Iron'
    WEDGE = 'wedge', 'Wedge'
    WOOD = 'wood', 'Fairway wood'
    HYBRID = 'hybrid', 'Hybrid'
    UNKNOWN = 'unknown', 'Unknown'


PITCHING_WEDGE_RANK = 10

WEDGE_TYPES = frozenset({
    'pw', 'pitching-wedge',
    'gw', 'gap-wedge',
    'aw', 'approach-wedge',
    'sw', 'sand-wedge',
    'lw', 'lob-wedge',
})
PITCHING_WEDGE_TYPES = frozenset({'pw', 'pitching-wedge'})

IRON_PATTERN = re.compile(r'^([2-9])-?iron$')
WOOD_PATTERN = re.compile(r'^[3-9]-?wood$')
HYBRID_PATTERN = re.compile(r'^[2-9]-?hybrid$')


@dataclass(frozen=True)
class ClubClassification:
    category: str
    normalized: str
    rank: Optional[int] = None


def normalize_club_type(club_type) -> str:
    """Lowercase, trim and join inner whitespace with dashes."""
    if not club_type:
        return ''
    return re.sub(r'\s+', '-', str(club_type).strip().lower())


def is_iron(club_type) -> bool:
    return bool(IRON_PATTERN.match(normalize_club_type(club_type)))


def is_wedge(club_type) -> bool:
    return normalize_club_type(club_type) in WEDGE_TYPES


def is_wood(club_type) -> bool:
    return bool(WOOD_PATTERN.match(normalize_club_type(club_type)))


def is_hybrid(club_type) -> bool:
    return bool(HYBRID_PATTERN.match(normalize_club_type(club_type)))


def get_iron_number(club_type) -> Optional[int]:
    """Return iron rank 2-9, 10 for a pitching wedge, or None."""
    normalized = normalize_club_type(club_type)
    if normalized in PITCHING_WEDGE_TYPES:
        return PITCHING_WEDGE_RANK
    match = IRON_PATTERN.match(normalized)
    return int(match.group(1)) if match else None


def format_iron_name(rank: int) -> str:
    """Rank as shown in a range string: 5 -> "5", 10 -> "PW"."""
    if rank == PITCHING_WEDGE_RANK:
        return 'PW'
    return str(rank)


def iron_club_type(rank: int) -> str:
    """Rank as a stored club type: 5 -> "5-iron", 10 -> "pw"."""
    if rank == PITCHING_WEDGE_RANK:
        return 'pw'
    return f'{rank}-iron'


def classify_club_type(club_type) -> ClubClassification:
    """
    Classify a club type into exactly one category.

    Total: anything unrecognized maps to ClubCategory.UNKNOWN.
    """
    normalized = normalize_club_type(club_type)

    if normalized == 'driver':
        category = ClubCategory.DRIVER
    elif normalized == 'putter':
        category = ClubCategory.PUTTER
    elif IRON_PATTERN.match(normalized):
        category = ClubCategory.IRON
    elif normalized in WEDGE_TYPES:
        category = ClubCategory.WEDGE
    elif WOOD_PATTERN.match(normalized):
        category = ClubCategory.WOOD
    elif HYBRID_PATTERN.match(normalized):
        category = ClubCategory.HYBRID
    else:
        category = ClubCategory.UNKNOWN

    return ClubClassification(
        category=category,
        normalized=normalized,
        rank=get_iron_number(normalized),
    )
