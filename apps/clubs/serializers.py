from rest_framework import serializers
from .models import Club, ArchivedClub, ClubStatus
from .services import normalize_club_type


# =============================================================================
# Input Serializers
# =============================================================================

class ClubFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for club listing.

    Query Parameters:
        status (str): active (default) or archived
        club_type (str): Filter by club type
    """

    status = serializers.ChoiceField(
        choices=ClubStatus.choices,
        required=False,
        default=ClubStatus.ACTIVE
    )
    club_type = serializers.CharField(max_length=50, required=False)


class ReplacementSuggestionInputSerializer(serializers.Serializer):
    """
    Validate input for a replacement suggestion.

    Fields:
        club_type (str): Type of the club that lost the test
        winning_club_id (UUID): Club that won the test
    """

    club_type = serializers.CharField(max_length=50)
    winning_club_id = serializers.UUIDField()


# =============================================================================
# Output Serializers
# =============================================================================

class ClubSerializer(serializers.ModelSerializer):
    """Main serializer for clubs."""

    class Meta:
        model = Club
        fields = [
            'id',
            'club_type',
            'brand',
            'model',
            'year',
            'loft',
            'lie',
            'length',
            'shaft_weight',
            'shaft_flex',
            'shaft_kickpoint',
            'shaft_torque',
            'shaft_brand',
            'shaft_model',
            'status',
            'source',
            'test_session_id',
            'final_grade',
            'added_to_bag_at',
            'archived_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'status',
            'source',
            'test_session_id',
            'final_grade',
            'archived_at',
            'created_at',
            'updated_at',
        ]

    def validate_club_type(self, value):
        normalized = normalize_club_type(value)
        if not normalized:
            raise serializers.ValidationError('Club type is required')
        return normalized


class ArchivedClubSerializer(serializers.ModelSerializer):
    """Archived club snapshot."""

    club_id = serializers.UUIDField(read_only=True)
    replaced_by_id = serializers.UUIDField(read_only=True, allow_null=True)
    change_record_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = ArchivedClub
        fields = [
            'id',
            'club_id',
            'club_data',
            'archived_at',
            'archived_reason',
            'replaced_by_id',
            'change_record_id',
            'time_in_bag',
            'final_grade',
            'can_restore',
        ]
        read_only_fields = fields


class SetOptionsSerializer(serializers.Serializer):
    current_range = serializers.CharField()
    suggested_range = serializers.CharField()
    clubs_affected = serializers.IntegerField()


class ReplacementSuggestionSerializer(serializers.Serializer):
    """Serializer for a replacement recommendation."""

    default_option = serializers.ChoiceField(choices=['set', 'single'])
    show_set_option = serializers.BooleanField()
    confidence = serializers.ChoiceField(choices=['high', 'medium', 'low'])
    message = serializers.CharField()
    set_options = SetOptionsSerializer(allow_null=True)
    winning_club_brand = serializers.CharField()
    winning_club_model = serializers.CharField()
