"""Domain exceptions for bag_changes app."""

from apps.clubs.services.exceptions import InvalidArgumentError, NotFoundError


class BagChangesServiceError(Exception):
    """Base exception for all bag change service errors."""
    code = 'bag_change_error'


class MissingSetConfigError(InvalidArgumentError):
    """Set replacement requested without a set configuration."""
    code = 'missing_set_config'


class InvalidReplacementTypeError(InvalidArgumentError):
    """Replacement type is neither single_club nor set_replacement."""
    code = 'invalid_replacement_type'


class ChangeNotFoundError(NotFoundError):
    """Change record does not exist or belongs to another golfer."""
    code = 'change_not_found'


class PreconditionFailedError(BagChangesServiceError):
    """
    Operation is blocked by the current bag or ledger state.

    ``code`` carries the PreconditionReason value so callers can branch
    on the kind of failure.
    """
    code = 'failed_precondition'


class FavoriteClubProtectedError(PreconditionFailedError):
    """Replacement would retire the golfer's favorite club."""
    code = 'favorite_club_protected'


class UndoNotAllowedError(PreconditionFailedError):
    """Change is no longer undoable."""
    code = 'change_not_undoable'


class UndoExpiredError(PreconditionFailedError):
    """Undo window has closed."""
    code = 'undo_expired'


class ChangeAlreadyUndoneError(PreconditionFailedError):
    """Change was already undone."""
    code = 'change_already_undone'


class ChangeSupersededError(PreconditionFailedError):
    """A later change already retired clubs this change added."""
    code = 'change_superseded'


class GradingUnavailableError(BagChangesServiceError):
    """Grading service failed or returned an unusable grade."""
    code = 'grading_unavailable'
