from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    favorite_club_id = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'favorite_club_id',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields
