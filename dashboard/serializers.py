from rest_framework import serializers

from core.models import Feedback
from core.serializers import CollaborationRequestSerializer
from users.models import User


class AdminUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'name',
            'slug',
            'trust_points',
            'onboarding_status',
            'email_verified',
            'is_staff',
            'is_active',
            'date_joined',
        ]


class AdminRequestSerializer(CollaborationRequestSerializer):
    unit_name = serializers.SerializerMethodField()

    def get_unit_name(self, obj):
        return obj.unit.display_name


class AdminFeedbackSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Feedback
        fields = ['id', 'user_id', 'name', 'email', 'message', 'rating', 'created_at']
