import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

from apps.bag_changes.services.exceptions import (
    GradingUnavailableError,
    PreconditionFailedError,
)
from apps.clubs.services.exceptions import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


# Most specific first; the first matching base class decides the status
SERVICE_ERROR_STATUSES = (
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PreconditionFailedError, status.HTTP_409_CONFLICT),
    (GradingUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def service_error_response(exc):
    """Map a domain exception from a service onto an API error response."""
    for error_class, status_code in SERVICE_ERROR_STATUSES:
        if isinstance(exc, error_class):
            return Response(
                {'error': str(exc), 'code': exc.code},
                status=status_code
            )
    raise exc


def health_check(request):
    """Liveness check."""
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    logger.error("Unhandled error serving %s", request.path)
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
