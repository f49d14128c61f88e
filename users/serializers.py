from rest_framework import serializers

from core.sanitizers import normalize_tags, sanitize_text, sanitize_title
from .models import Achievement, Education, User


class UserSerializer(serializers.ModelSerializer):
    """Current user (navbar, /me)."""
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'name',
            'display_name',
            'slug',
            'image',
            'headline',
            'trust_points',
            'onboarding_status',
            'email_verified',
            'is_staff',
            'date_joined',
        ]
        read_only_fields = fields


class UserSearchSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'display_name', 'slug', 'image', 'headline']


class EducationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Education
        fields = [
            'id',
            'institution',
            'degree',
            'field_of_study',
            'start_year',
            'end_year',
            'grade',
            'description',
        ]

    def validate_institution(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Institution is required.")
        return value

    def validate(self, attrs):
        start, end = attrs.get('start_year'), attrs.get('end_year')
        if start and end and end < start:
            raise serializers.ValidationError({'end_year': ["End year cannot be before start year."]})
        return attrs


class AchievementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Achievement
        fields = ['id', 'title', 'description', 'issuer', 'category', 'proof_url', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value


class ProfileSerializer(serializers.ModelSerializer):
    """Public profile page."""
    display_name = serializers.CharField(read_only=True)
    education = EducationSerializer(many=True, read_only=True)
    achievements = AchievementSerializer(many=True, read_only=True)
    followers_count = serializers.SerializerMethodField()
    following_count = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'display_name',
            'slug',
            'image',
            'headline',
            'about',
            'location_city',
            'location_country',
            'organization',
            'linkedin_url',
            'github_url',
            'portfolio_url',
            'x_url',
            'skills',
            'trust_points',
            'education',
            'achievements',
            'followers_count',
            'following_count',
            'date_joined',
        ]

    def get_followers_count(self, obj):
        return obj.follower_links.count()

    def get_following_count(self, obj):
        return obj.following_links.count()


class UpdateProfileSerializer(serializers.ModelSerializer):
    skills = serializers.ListField(child=serializers.CharField(max_length=64), required=False)

    class Meta:
        model = User
        fields = [
            'name',
            'image',
            'headline',
            'about',
            'location_city',
            'location_country',
            'organization',
            'phone',
            'linkedin_url',
            'github_url',
            'portfolio_url',
            'x_url',
            'skills',
        ]

    def validate_name(self, value):
        return sanitize_title(value, max_length=150)

    def validate_headline(self, value):
        return sanitize_title(value)

    def validate_about(self, value):
        return sanitize_text(value)

    def validate_skills(self, value):
        return normalize_tags(value)


# Onboarding steps

class OnboardingBasicSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['headline', 'about', 'location_city', 'location_country']
        extra_kwargs = {field: {'required': True, 'allow_blank': False} for field in fields}

    def validate(self, attrs):
        return {key: sanitize_text(value) for key, value in attrs.items()}


class OnboardingSocialSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'organization',
            'phone',
            'image',
            'linkedin_url',
            'github_url',
            'portfolio_url',
            'x_url',
        ]
        extra_kwargs = {'organization': {'required': True, 'allow_blank': False}}

    def validate_organization(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Organization is required.")
        return value


class OnboardingEducationSerializer(serializers.Serializer):
    education = EducationSerializer(many=True)


class OnboardingSkillsSerializer(serializers.Serializer):
    skills = serializers.ListField(child=serializers.CharField(max_length=64), allow_empty=False)
    achievements = AchievementSerializer(many=True, required=False)

    def validate_skills(self, value):
        skills = normalize_tags(value)
        if not skills:
            raise serializers.ValidationError("At least one skill is required.")
        return skills


class OnboardingStateSerializer(serializers.ModelSerializer):
    education = EducationSerializer(many=True, read_only=True)
    achievements = AchievementSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            'onboarding_status',
            'headline',
            'about',
            'location_city',
            'location_country',
            'organization',
            'phone',
            'image',
            'linkedin_url',
            'github_url',
            'portfolio_url',
            'x_url',
            'skills',
            'education',
            'achievements',
        ]
        read_only_fields = fields
