import logging
from uuid import UUID

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from .models import ChangeRecord
from .serializers import (
    ChangeRecordSerializer,
    ApplyReplacementInputSerializer,
    ApplyReplacementResponseSerializer,
    UndoResponseSerializer,
)
from .services import (
    BagChangesServiceError,
    ChangeNotFoundError,
    apply_replacement,
    undo_bag_change,
)
from apps.clubs.services import ClubsServiceError
from apps.clubs.views import ErrorResponseSerializer
from config.views import service_error_response

logger = logging.getLogger(__name__)


class ChangeRecordPagination(PageNumberPagination):
    """Custom pagination for the change ledger."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ChangeRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for the bag change ledger.

    list: Get the golfer's change history (newest first)
    retrieve: Get a specific change
    apply: Apply a replacement decided in a testing session
    undo: Undo a change inside its undo window
    """

    serializer_class = ChangeRecordSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ChangeRecordPagination

    def get_queryset(self):
        return ChangeRecord.objects.filter(user=self.request.user)

    @extend_schema(
        request=ApplyReplacementInputSerializer,
        responses={
            201: ApplyReplacementResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            503: ErrorResponseSerializer,
        },
        description="Replace a club or a matched set and record an undoable change.",
    )
    @action(detail=False, methods=['post'])
    def apply(self, request):
        """
        Apply a replacement.

        POST /api/bag-changes/apply/
        Body: {
            "session_id": "...",
            "winning_club_id": "<uuid>",
            "losing_club_id": "<uuid>",
            "replacement_type": "single_club" | "set_replacement",
            "set_config": {...}
        }
        """
        input_serializer = ApplyReplacementInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            result = apply_replacement(user=request.user, **input_serializer.validated_data)
        except (ClubsServiceError, BagChangesServiceError) as e:
            logger.info("Replacement rejected for user %s: %s", request.user.pk, e)
            return service_error_response(e)

        return Response(result, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=None,
        responses={
            200: UndoResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            503: ErrorResponseSerializer,
        },
        description="Undo a change: restore retired clubs and archive the added ones.",
    )
    @action(detail=True, methods=['post'])
    def undo(self, request, pk=None):
        """
        Undo a change.

        POST /api/bag-changes/{id}/undo/
        """
        try:
            change_id = UUID(str(pk))
        except ValueError:
            return service_error_response(ChangeNotFoundError('Change record not found'))

        try:
            result = undo_bag_change(user=request.user, change_id=change_id)
        except (ClubsServiceError, BagChangesServiceError) as e:
            logger.info("Undo rejected for change %s: %s", pk, e)
            return service_error_response(e)

        return Response(result, status=status.HTTP_200_OK)
