from django.db import transaction
from rest_framework import serializers

from core.sanitizers import normalize_tags, sanitize_text, sanitize_title
from core.serializers import CollaborationUnitDetailMixin, UserSummarySerializer
from .models import HackTeam, HackTeamMember


class HackTeamSerializer(serializers.ModelSerializer):
    """List rows + create payload."""
    owner = UserSummarySerializer(read_only=True)
    origin_city = serializers.CharField(write_only=True, max_length=100)
    origin_country = serializers.CharField(write_only=True, max_length=100)
    size = serializers.IntegerField(min_value=1)
    skill_stack = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
    )
    hack_mode = serializers.ChoiceField(choices=HackTeam.MODE_CHOICES)

    class Meta:
        model = HackTeam
        fields = [
            'id',
            'name',
            'origin',
            'origin_city',
            'origin_country',
            'team_desc',
            'image',
            'size',
            'spots_left',
            'skill_stack',
            'hack_name',
            'hack_desc',
            'hack_begins',
            'hack_ends',
            'hack_link',
            'hack_location',
            'hack_mode',
            'team_lead_phone',
            'team_lead_email',
            'status',
            'owner',
            'created_at',
        ]
        read_only_fields = ['origin', 'spots_left', 'status', 'owner', 'created_at']

    def validate_name(self, value):
        value = sanitize_title(value, max_length=150)
        if not value:
            raise serializers.ValidationError("Team name is required.")
        return value

    def validate_hack_name(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Hackathon name is required.")
        return value

    def validate_skill_stack(self, value):
        skills = normalize_tags(value)
        if not skills:
            raise serializers.ValidationError("At least one skill is required.")
        return skills

    def validate_team_lead_email(self, value):
        return value.strip().lower()

    def validate(self, attrs):
        for field in ('team_desc', 'hack_desc'):
            if field in attrs:
                attrs[field] = sanitize_text(attrs[field])
        if attrs['hack_ends'] < attrs['hack_begins']:
            raise serializers.ValidationError({'hack_ends': ["Hackathon cannot end before it begins."]})
        return attrs

    def create(self, validated_data):
        owner = self.context['request'].user
        city = sanitize_title(validated_data.pop('origin_city'))
        country = sanitize_title(validated_data.pop('origin_country'))

        with transaction.atomic():
            team = HackTeam.objects.create(
                owner=owner,
                origin=f"{city}, {country}",
                spots_left=validated_data['size'] - 1,
                **validated_data,
            )
            # Lead takes the first seat
            HackTeamMember.objects.create(
                team=team,
                user=owner,
                role=HackTeam.OWNER_ROLE,
                name=owner.display_name,
            )
        return team


class HackTeamDetailSerializer(CollaborationUnitDetailMixin, HackTeamSerializer):
    class Meta(HackTeamSerializer.Meta):
        fields = HackTeamSerializer.Meta.fields + ['members', 'requests', 'is_owner']
