"""Domain exceptions for clubs app."""


class ClubsServiceError(Exception):
    """Base exception for all clubs service errors."""
    code = 'clubs_error'


class InvalidArgumentError(ClubsServiceError):
    """Missing or malformed input."""
    code = 'invalid_argument'


class NotFoundError(ClubsServiceError):
    """Referenced record does not exist for this golfer."""
    code = 'not_found'


class ClubNotFoundError(NotFoundError):
    """Club does not exist or belongs to another golfer."""
    code = 'club_not_found'


class InvalidSetConfigError(InvalidArgumentError):
    """Set configuration is incomplete or describes an impossible range."""
    code = 'invalid_set_config'


class LosingClubNotInSetError(InvalidArgumentError):
    """Declared set range does not include the club being replaced."""
    code = 'losing_club_not_in_set'
