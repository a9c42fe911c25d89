from rest_framework import mixins, viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from .models import Club, ArchivedClub
from .serializers import (
    ClubSerializer,
    ArchivedClubSerializer,
    ClubFilterSerializer,
    ReplacementSuggestionInputSerializer,
    ReplacementSuggestionSerializer,
)
from .services import ClubsServiceError, normalize_club_type, suggest_replacement
from config.views import service_error_response


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    code = drf_serializers.CharField()


class ClubPagination(PageNumberPagination):
    """Custom pagination for clubs."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 100


class ClubViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for the golfer's clubs.

    list: Get clubs in the bag (active by default, ?status=archived for retired)
    create: Add a club to the bag
    retrieve: Get a specific club
    favorite: Mark a club as the favorite (protected from replacement)
    archived: List archive snapshots
    replacement_suggestion: Recommend single or set replacement
    """

    serializer_class = ClubSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ClubPagination

    def get_queryset(self):
        """Only the current golfer's clubs; list is filtered by query params."""
        queryset = Club.objects.filter(user=self.request.user)

        if self.action != 'list':
            return queryset

        filter_serializer = ClubFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        queryset = queryset.filter(status=params['status'])
        if params.get('club_type'):
            queryset = queryset.filter(club_type=normalize_club_type(params['club_type']))
        return queryset

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    @extend_schema(
        request=None,
        responses={200: ClubSerializer},
        description="Set this club as the golfer's favorite. The favorite can't be replaced.",
    )
    @action(detail=True, methods=['post'])
    def favorite(self, request, pk=None):
        """
        Mark a club as favorite.

        POST /api/clubs/{id}/favorite/
        """
        club = self.get_object()
        request.user.set_favorite_club(club)
        return Response(ClubSerializer(club).data)

    @extend_schema(responses={200: ArchivedClubSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def archived(self, request):
        """
        List archive snapshots for retired clubs.

        GET /api/clubs/archived/
        """
        entries = ArchivedClub.objects.filter(user=request.user)
        page = self.paginate_queryset(entries)
        if page is not None:
            return self.get_paginated_response(ArchivedClubSerializer(page, many=True).data)
        return Response(ArchivedClubSerializer(entries, many=True).data)

    @extend_schema(
        request=ReplacementSuggestionInputSerializer,
        responses={
            200: ReplacementSuggestionSerializer,
            400: ErrorResponseSerializer,
        },
        description="Recommend replacing a single club or the matched set it belongs to.",
    )
    @action(detail=False, methods=['post'], url_path='replacement-suggestion')
    def replacement_suggestion(self, request):
        """
        Get a replacement suggestion.

        POST /api/clubs/replacement-suggestion/
        Body: {"club_type": "7-iron", "winning_club_id": "<uuid>"}
        """
        input_serializer = ReplacementSuggestionInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            recommendation = suggest_replacement(
                user=request.user,
                **input_serializer.validated_data
            )
        except ClubsServiceError as e:
            return service_error_response(e)

        return Response(recommendation, status=status.HTTP_200_OK)
