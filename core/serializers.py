from rest_framework import serializers

from users.models import User
from .models import ContactMessage, Feedback
from .sanitizers import sanitize_text, sanitize_title


class UserSummarySerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'slug', 'image', 'trust_points']


class MemberSerializer(serializers.Serializer):
    """Works for any concrete UnitMember (HackTeamMember, ProjectMember)."""
    id = serializers.IntegerField(read_only=True)
    user = UserSummarySerializer(read_only=True)
    role = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    joined_at = serializers.DateTimeField(read_only=True)


class CollaborationRequestSerializer(serializers.Serializer):
    """Works for any concrete CollaborationRequest."""
    id = serializers.IntegerField(read_only=True)
    type = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    sender = UserSummarySerializer(read_only=True)
    receiver = UserSummarySerializer(read_only=True)
    unit_id = serializers.SerializerMethodField()
    message = serializers.CharField(read_only=True)
    github_url = serializers.CharField(read_only=True)
    linkedin_url = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)

    def get_unit_id(self, obj):
        return obj.unit.pk


class CollaborationUnitDetailMixin(serializers.Serializer):
    """
    Adds members + requests to a unit serializer.

    The owner sees every request, other users only the ones they sent or received.
    """
    owner = UserSummarySerializer(read_only=True)
    members = MemberSerializer(many=True, read_only=True)
    requests = serializers.SerializerMethodField()
    is_owner = serializers.SerializerMethodField()

    def _viewer(self):
        request = self.context.get('request')
        return getattr(request, 'user', None)

    def get_is_owner(self, obj):
        viewer = self._viewer()
        return bool(viewer and viewer.is_authenticated and obj.owner_id == viewer.pk)

    def get_requests(self, obj):
        viewer = self._viewer()
        qs = obj.requests.select_related('sender', 'receiver')
        if not self.get_is_owner(obj):
            if not (viewer and viewer.is_authenticated):
                return []
            qs = qs.filter(sender=viewer) | qs.filter(receiver=viewer)
        return CollaborationRequestSerializer(qs, many=True).data


class ContactMessageSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2, max_length=150)
    email = serializers.EmailField()
    message = serializers.CharField(min_length=10)

    class Meta:
        model = ContactMessage
        fields = ['id', 'name', 'email', 'message', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_name(self, value):
        value = sanitize_title(value, max_length=150)
        if len(value) < 2:
            raise serializers.ValidationError("Name must be at least 2 characters.")
        return value

    def validate_email(self, value):
        return value.strip().lower()

    def validate_message(self, value):
        value = sanitize_text(value)
        if len(value) < 10:
            raise serializers.ValidationError("Message must be at least 10 characters.")
        return value


class FeedbackSerializer(serializers.ModelSerializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)

    class Meta:
        model = Feedback
        fields = ['id', 'message', 'rating', 'name', 'email', 'created_at']
        read_only_fields = ['id', 'name', 'email', 'created_at']

    def validate_message(self, value):
        value = sanitize_text(value)
        if not value:
            raise serializers.ValidationError("Message is required.")
        return value
