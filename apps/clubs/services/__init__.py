"""
Clubs services - Business logic layer.

This package contains the bag inventory logic:
- Club type classification
- Replacement strategy advice (single club vs. matched set)
- Set membership resolution and set generation
- Archiving and restoring clubs
"""

from .classification import (
    ClubCategory,
    ClubClassification,
    normalize_club_type,
    classify_club_type,
    get_iron_number,
    format_iron_name,
    iron_club_type,
    is_iron,
    is_wedge,
    is_wood,
    is_hybrid,
)

from .replacement_advice import (
    REPLACEMENT_POLICIES,
    get_replacement_policy,
    suggest_replacement,
    analyze_current_set,
)

from .set_membership import (
    SetType,
    SetConfig,
    IRON_SPECS,
    WEDGE_SET,
    validate_set_config,
    resolve_clubs_to_remove,
    generate_set_clubs,
)

from .archiving import (
    calculate_time_in_bag,
    archive_club,
    restore_club,
)

from .exceptions import (
    ClubsServiceError,
    InvalidArgumentError,
    NotFoundError,
    ClubNotFoundError,
    InvalidSetConfigError,
    LosingClubNotInSetError,
)

__all__ = [
    # Classification
    'ClubCategory',
    'ClubClassification',
    'normalize_club_type',
    'classify_club_type',
    'get_iron_number',
    'format_iron_name',
    'iron_club_type',
    'is_iron',
    'is_wedge',
    'is_wood',
    'is_hybrid',
    # Replacement advice
    'REPLACEMENT_POLICIES',
    'get_replacement_policy',
    'suggest_replacement',
    'analyze_current_set',
    # Set membership
    'SetType',
    'SetConfig',
    'IRON_SPECS',
    'WEDGE_SET',
    'validate_set_config',
    'resolve_clubs_to_remove',
    'generate_set_clubs',
    # Archiving
    'calculate_time_in_bag',
    'archive_club',
    'restore_club',
    # Exceptions
    'ClubsServiceError',
    'InvalidArgumentError',
    'NotFoundError',
    'ClubNotFoundError',
    'InvalidSetConfigError',
    'LosingClubNotInSetError',
]
