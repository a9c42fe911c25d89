"""
Bag changes services - Business logic layer.

This package contains the bag mutation and undo engine:
- Applying single-club and set replacements
- Undoing a recorded change within its undo window
- Precondition evaluation (favorite club, undo eligibility)
- Grading service client
"""

from .bag_update import (
    CATEGORY_IMPACT_FIELDS,
    apply_replacement,
    calculate_category_impacts,
    get_undo_window,
)

from .undo import (
    undo_bag_change,
)

from .preconditions import (
    PreconditionReason,
    PreconditionResult,
    evaluate_replacement_preconditions,
    evaluate_undo_eligibility,
    evaluate_undo_supersession,
    raise_for_result,
)

from .grading import (
    BagGrade,
    HttpGradingClient,
    get_grading_client,
    grade_user_bag,
    parse_grade,
)

from .exceptions import (
    BagChangesServiceError,
    MissingSetConfigError,
    InvalidReplacementTypeError,
    ChangeNotFoundError,
    PreconditionFailedError,
    FavoriteClubProtectedError,
    UndoNotAllowedError,
    UndoExpiredError,
    ChangeAlreadyUndoneError,
    ChangeSupersededError,
    GradingUnavailableError,
)

__all__ = [
    # Bag update
    'CATEGORY_IMPACT_FIELDS',
    'apply_replacement',
    'calculate_category_impacts',
    'get_undo_window',
    # Undo
    'undo_bag_change',
    # Preconditions
    'PreconditionReason',
    'PreconditionResult',
    'evaluate_replacement_preconditions',
    'evaluate_undo_eligibility',
    'evaluate_undo_supersession',
    'raise_for_result',
    # Grading
    'BagGrade',
    'HttpGradingClient',
    'get_grading_client',
    'grade_user_bag',
    'parse_grade',
    # Exceptions
    'BagChangesServiceError',
    'MissingSetConfigError',
    'InvalidReplacementTypeError',
    'ChangeNotFoundError',
    'PreconditionFailedError',
    'FavoriteClubProtectedError',
    'UndoNotAllowedError',
    'UndoExpiredError',
    'ChangeAlreadyUndoneError',
    'ChangeSupersededError',
    'GradingUnavailableError',
]
