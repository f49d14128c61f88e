from django.db import transaction
from rest_framework import serializers

from core.sanitizers import normalize_tags, sanitize_text, sanitize_title
from core.serializers import CollaborationUnitDetailMixin, UserSummarySerializer
from .models import Project, ProjectMember


class ProjectSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    stage = serializers.ChoiceField(choices=Project.STAGE_CHOICES)
    commitment = serializers.ChoiceField(choices=Project.COMMITMENT_CHOICES)
    skill_stack = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
    )
    tags = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
    )

    class Meta:
        model = Project
        fields = [
            'id',
            'title',
            'short_desc',
            'detailed_desc',
            'extra_note',
            'stage',
            'skill_stack',
            'tags',
            'commitment',
            'github_url',
            'contact_phone',
            'contact_email',
            'owner_linkedin_url',
            'is_open',
            'current_members',
            'status',
            'owner',
            'created_at',
        ]
        read_only_fields = ['is_open', 'current_members', 'status', 'owner', 'created_at']

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value

    def validate_short_desc(self, value):
        value = sanitize_title(value, max_length=300)
        if not value:
            raise serializers.ValidationError("Short description is required.")
        return value

    def validate_detailed_desc(self, value):
        value = sanitize_text(value)
        if not value:
            raise serializers.ValidationError("Detailed description is required.")
        return value

    def validate_extra_note(self, value):
        return sanitize_text(value)

    def validate_skill_stack(self, value):
        skills = normalize_tags(value)
        if not skills:
            raise serializers.ValidationError("At least one skill is required.")
        return skills

    def validate_tags(self, value):
        tags = normalize_tags(value)
        if not tags:
            raise serializers.ValidationError("At least one tag is required.")
        return tags

    def validate_contact_email(self, value):
        return value.strip().lower()

    def create(self, validated_data):
        owner = self.context['request'].user
        with transaction.atomic():
            project = Project.objects.create(owner=owner, current_members=1, **validated_data)
            ProjectMember.objects.create(
                project=project,
                user=owner,
                role=Project.OWNER_ROLE,
                name=owner.display_name,
            )
        return project


class ProjectDetailSerializer(CollaborationUnitDetailMixin, ProjectSerializer):
    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ['members', 'requests', 'is_owner']
