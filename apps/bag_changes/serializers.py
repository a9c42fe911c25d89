from rest_framework import serializers
from .models import ChangeRecord


# =============================================================================
# Input Serializers
# =============================================================================

class SetConfigSerializer(serializers.Serializer):
    """
    Declared set for a set replacement.

    Values are checked by the bag update service, so an unsupported set
    type comes back as an invalid_set_config error instead of a field error.
    """

    set_type = serializers.CharField(max_length=20)
    brand = serializers.CharField(max_length=100, required=False, allow_blank=True)
    model = serializers.CharField(max_length=100, required=False, allow_blank=True)
    year = serializers.IntegerField(required=False, allow_null=True)
    start_club = serializers.CharField(max_length=50, required=False, allow_blank=True)
    end_club = serializers.CharField(max_length=50, required=False, allow_blank=True)


class ApplyReplacementInputSerializer(serializers.Serializer):
    """
    Validate input for applying a replacement.

    Fields:
        session_id (str): Testing session that produced the decision
        winning_club_id (UUID): Club that won the test
        losing_club_id (UUID): Active club that lost the test
        replacement_type (str): single_club or set_replacement
        set_config (dict): Required for set_replacement
    """

    session_id = serializers.CharField(max_length=100)
    winning_club_id = serializers.UUIDField()
    losing_club_id = serializers.UUIDField()
    replacement_type = serializers.CharField(max_length=30)
    set_config = SetConfigSerializer(required=False, allow_null=True)


# =============================================================================
# Output Serializers
# =============================================================================

class ChangeRecordSerializer(serializers.ModelSerializer):
    """Ledger entry with its current undo state."""

    is_undoable = serializers.SerializerMethodField()

    class Meta:
        model = ChangeRecord
        fields = [
            'id',
            'change_type',
            'triggered_by',
            'test_session_id',
            'is_set_replacement',
            'set_type',
            'user_choice',
            'clubs_added',
            'clubs_removed',
            'grade_impact',
            'can_undo',
            'undo_expires_at',
            'undone',
            'undone_at',
            'is_undoable',
            'created_at',
        ]
        read_only_fields = fields

    def get_is_undoable(self, obj) -> bool:
        return obj.is_undoable()


class BagGradeSerializer(serializers.Serializer):
    overall_score = serializers.FloatField()
    letter_grade = serializers.CharField()
    component_scores = serializers.DictField(child=serializers.FloatField())


class ApplyReplacementResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    new_grade = BagGradeSerializer()
    change_id = serializers.UUIDField()
    clubs_added = serializers.IntegerField()
    clubs_removed = serializers.IntegerField()
    improvement = serializers.FloatField()
    improvement_letter = serializers.CharField()


class UndoResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    restored_grade = BagGradeSerializer()
    current_grade = serializers.FloatField()
    current_letter_grade = serializers.CharField()
    message = serializers.CharField()
    clubs_restored = serializers.IntegerField()
    clubs_archived = serializers.IntegerField()
