"""
Set membership resolution for set replacements.

Two jobs, used only when a golfer replaces a whole matched set:

1. resolve_clubs_to_remove: pick every active club in the bag that belongs
   to the declared set (inclusive rank range for irons, category membership
   for wedges and woods).
2. generate_set_clubs: synthesize the field values for each new set member
   from standard spec tables, inheriting shaft details from the winning
   club that was tested.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from django.db import models

from apps.accounts.models import User
from apps.clubs.models import Club, ClubStatus
from .classification import (
    ClubCategory,
    classify_club_type,
    get_iron_number,
    iron_club_type,
)
from .exceptions import InvalidSetConfigError, LosingClubNotInSetError


class SetType(models.TextChoices):
    IRONS = 'irons', 'Irons'
    WEDGES = 'wedges', 'Wedges'
    WOODS = 'woods', 'Fairway woods'


SET_TYPE_CATEGORIES = MappingProxyType({
    SetType.IRONS: ClubCategory.IRON,
    SetType.WEDGES: ClubCategory.WEDGE,
    SetType.WOODS: ClubCategory.WOOD,
})


@dataclass(frozen=True)
class IronSpec:
    loft: float
    lie: float
    length: float
    shaft_weight: float


# Indexed by iron rank; 10 is the pitching wedge
IRON_SPECS = MappingProxyType({
    4: IronSpec(loft=24, lie=61, length=38.5, shaft_weight=110),
    5: IronSpec(loft=27, lie=61.5, length=38.0, shaft_weight=115),
    6: IronSpec(loft=30, lie=62, length=37.5, shaft_weight=115),
    7: IronSpec(loft=34, lie=62.5, length=37.0, shaft_weight=120),
    8: IronSpec(loft=38, lie=63, length=36.5, shaft_weight=120),
    9: IronSpec(loft=42, lie=63.5, length=36.0, shaft_weight=125),
    10: IronSpec(loft=46, lie=64, length=35.75, shaft_weight=125),
})
FALLBACK_IRON_RANK = 7

# (club_type, loft) for a matched wedge set; lie, length and shaft weight are shared
WEDGE_SET = (
    ('pw', 46),
    ('gw', 50),
    ('sw', 54),
    ('lw', 58),
)
WEDGE_LIE = 64
WEDGE_LENGTH = 35.5
WEDGE_SHAFT_WEIGHT = 120

STOCK_SHAFT = MappingProxyType({
    'shaft_flex': 'R',
    'shaft_model': 'Stock',
    'shaft_kickpoint': 'mid',
    'shaft_torque': 3.5,
})
STOCK_WEDGE_FLEX = 'W'


@dataclass(frozen=True)
class SetConfig:
    """Declared set for a set replacement."""

    set_type: str
    brand: str = ''
    model: str = ''
    year: Optional[int] = None
    start_club: str = ''
    end_club: str = ''

    @classmethod
    def from_dict(cls, data: dict) -> 'SetConfig':
        return cls(
            set_type=data.get('set_type', ''),
            brand=data.get('brand') or '',
            model=data.get('model') or '',
            year=data.get('year'),
            start_club=data.get('start_club') or '',
            end_club=data.get('end_club') or '',
        )

    @property
    def category(self) -> str:
        return SET_TYPE_CATEGORIES[self.set_type]

    @property
    def iron_range(self) -> tuple[int, int]:
        return get_iron_number(self.start_club), get_iron_number(self.end_club)

    def as_dict(self) -> dict:
        return {
            'set_type': self.set_type,
            'brand': self.brand,
            'model': self.model,
            'year': self.year,
            'start_club': self.start_club,
            'end_club': self.end_club,
        }


def validate_set_config(set_config: SetConfig) -> None:
    """
    Check that a set configuration describes a real set.

    Raises:
        InvalidSetConfigError: Unknown set type, missing brand/model, or
            an iron range whose ends are not irons or are reversed
    """
    if set_config.set_type not in SetType.values:
        raise InvalidSetConfigError(
            f"Unsupported set type '{set_config.set_type}'. "
            f"Expected one of: {', '.join(SetType.values)}"
        )
    if not set_config.brand or not set_config.model:
        raise InvalidSetConfigError("Set replacements require a brand and model")

    if set_config.set_type == SetType.IRONS:
        start, end = set_config.iron_range
        if start is None or end is None:
            raise InvalidSetConfigError(
                "Iron sets require start_club and end_club irons (e.g. '5-iron' to 'pw')"
            )
        if start > end:
            raise InvalidSetConfigError(
                f"Iron set start '{set_config.start_club}' is after end '{set_config.end_club}'"
            )


def is_set_member(club_type, set_config: SetConfig) -> bool:
    """Whether a club type belongs to the declared set."""
    if set_config.set_type == SetType.IRONS:
        start, end = set_config.iron_range
        rank = get_iron_number(club_type)
        return rank is not None and start <= rank <= end
    return classify_club_type(club_type).category == set_config.category


def _member_sort_key(club: Club):
    classification = classify_club_type(club.club_type)
    return (
        classification.rank if classification.rank is not None else 99,
        classification.normalized,
        club.added_to_bag_at,
    )


def resolve_clubs_to_remove(
    *,
    user: User,
    set_config: SetConfig,
    losing_club: Club
) -> list[Club]:
    """
    Select the active clubs retired by a set replacement.

    Duplicate club types are all included.

    Args:
        user: Bag owner
        set_config: Validated set configuration
        losing_club: Club that lost the test; must belong to the set

    Returns:
        Clubs ordered by rank, then type, then time added

    Raises:
        LosingClubNotInSetError: If the declared set excludes the losing club
    """
    active_clubs = Club.objects.filter(user=user, status=ClubStatus.ACTIVE)
    members = sorted(
        (club for club in active_clubs if is_set_member(club.club_type, set_config)),
        key=_member_sort_key,
    )

    if losing_club.id not in {club.id for club in members}:
        raise LosingClubNotInSetError(
            f"The {losing_club.club_type} being replaced is not part of the declared "
            f"{set_config.set_type} set"
        )

    return members


def _shaft_fields(template_club: Optional[Club], set_config: SetConfig, stock_flex: str) -> dict:
    """Template club first, then the set's brand, then stock defaults."""
    def inherit(field, fallback):
        value = getattr(template_club, field, None) if template_club else None
        return value if value not in (None, '') else fallback

    return {
        'shaft_flex': inherit('shaft_flex', stock_flex),
        'shaft_brand': inherit('shaft_brand', set_config.brand),
        'shaft_model': inherit('shaft_model', STOCK_SHAFT['shaft_model']),
        'shaft_kickpoint': inherit('shaft_kickpoint', STOCK_SHAFT['shaft_kickpoint']),
        'shaft_torque': inherit('shaft_torque', STOCK_SHAFT['shaft_torque']),
    }


def _identification(club_type: str, set_config: SetConfig) -> dict:
    return {
        'club_type': club_type,
        'brand': set_config.brand,
        'model': set_config.model,
        'year': set_config.year,
    }


def get_standard_iron_spec(rank: int) -> IronSpec:
    return IRON_SPECS.get(rank, IRON_SPECS[FALLBACK_IRON_RANK])


def generate_set_clubs(
    *,
    set_config: SetConfig,
    template_club: Optional[Club],
    members: Optional[list[Club]] = None
) -> list[dict]:
    """
    Build Club field dicts for every member of a new set.

    Irons follow IRON_SPECS for each rank in the declared range. Wedges
    always produce the four-club WEDGE_SET. Woods have no standard table,
    so one club is produced per existing wood in ``members``, keeping its
    head geometry.
    """
    generated = []

    if set_config.set_type == SetType.IRONS:
        start, end = set_config.iron_range
        shaft = _shaft_fields(template_club, set_config, STOCK_SHAFT['shaft_flex'])
        for rank in range(start, end + 1):
            spec = get_standard_iron_spec(rank)
            generated.append({
                **_identification(iron_club_type(rank), set_config),
                'loft': spec.loft,
                'lie': spec.lie,
                'length': spec.length,
                **shaft,
                'shaft_weight': spec.shaft_weight,
            })

    elif set_config.set_type == SetType.WEDGES:
        shaft = _shaft_fields(template_club, set_config, STOCK_WEDGE_FLEX)
        for club_type, loft in WEDGE_SET:
            generated.append({
                **_identification(club_type, set_config),
                'loft': loft,
                'lie': WEDGE_LIE,
                'length': WEDGE_LENGTH,
                **shaft,
                'shaft_weight': WEDGE_SHAFT_WEIGHT,
            })

    elif set_config.set_type == SetType.WOODS:
        shaft = _shaft_fields(template_club, set_config, STOCK_SHAFT['shaft_flex'])
        for member in members or []:
            generated.append({
                **_identification(classify_club_type(member.club_type).normalized, set_config),
                'loft': member.loft,
                'lie': member.lie,
                'length': member.length,
                **shaft,
                'shaft_weight': getattr(template_club, 'shaft_weight', None) or member.shaft_weight,
            })

    return generated
