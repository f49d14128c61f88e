# users/views.py - users, onboarding and profile API
import logging

from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core.exceptions import Conflict, InvalidOperation
from .models import Achievement, Education, Follow, User
from .serializers import (
    AchievementSerializer,
    EducationSerializer,
    OnboardingBasicSerializer,
    OnboardingEducationSerializer,
    OnboardingSkillsSerializer,
    OnboardingSocialSerializer,
    OnboardingStateSerializer,
    ProfileSerializer,
    UpdateProfileSerializer,
    UserSearchSerializer,
    UserSerializer,
)

logger = logging.getLogger("togethr.users")

SEARCH_LIMIT = 10


class UserViewSet(viewsets.GenericViewSet):
    """
    Standard User API
    """
    queryset = User.objects.filter(is_active=True)
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        GET /api/users/me/
        Return current user info
        """
        serializer = self.get_serializer(request.user)
        return Response({"success": True, "data": serializer.data})

    @action(detail=False, methods=['get'])
    def search(self, request):
        """
        GET /api/users/search/?q=ali
        Up to 10 users whose name contains q (case-insensitive).
        """
        query = (request.query_params.get('q') or '').strip()
        if not query:
            return Response({"success": True, "data": []})

        users = self.get_queryset().filter(name__icontains=query).order_by('name')[:SEARCH_LIMIT]
        return Response({"success": True, "data": UserSearchSerializer(users, many=True).data})


class OnboardingViewSet(viewsets.GenericViewSet):
    """
    Four-step onboarding wizard. Every step saves progress and marks the
    user IN_PROGRESS; `complete` marks them COMPLETED.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = OnboardingStateSerializer

    def _state(self, user):
        user.refresh_from_db()
        return Response({"success": True, "data": OnboardingStateSerializer(user).data})

    def _mark_in_progress(self, user):
        # Editing an earlier step never reopens a finished onboarding
        if user.onboarding_status != User.ONBOARDING_COMPLETED:
            user.onboarding_status = User.ONBOARDING_IN_PROGRESS
            user.save(update_fields=['onboarding_status'])

    def _save_profile_step(self, request, serializer_class):
        serializer = serializer_class(request.user, data=request.data, partial=False)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            serializer.save()
            self._mark_in_progress(request.user)
        return self._state(request.user)

    @action(detail=False, methods=['get'])
    def me(self, request):
        """GET /api/onboarding/me/"""
        return self._state(request.user)

    @action(detail=False, methods=['patch'], url_path='step-1-basic')
    def step_basic(self, request):
        return self._save_profile_step(request, OnboardingBasicSerializer)

    @action(detail=False, methods=['patch'], url_path='step-2-social')
    def step_social(self, request):
        return self._save_profile_step(request, OnboardingSocialSerializer)

    @action(detail=False, methods=['patch'], url_path='step-3-education')
    def step_education(self, request):
        """
        Body: {"education": [{...}, ...]}  (replaces the existing list)
        """
        serializer = OnboardingEducationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user

        with transaction.atomic():
            user.education.all().delete()
            Education.objects.bulk_create([
                Education(user=user, **item) for item in serializer.validated_data['education']
            ])
            self._mark_in_progress(user)
        return self._state(user)

    @action(detail=False, methods=['patch'], url_path='step-4-skills-achievements')
    def step_skills(self, request):
        """
        Body: {"skills": [...], "achievements": [{...}]}
        A non-empty achievements list replaces the existing one.
        """
        serializer = OnboardingSkillsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user
        achievements = serializer.validated_data.get('achievements') or []

        with transaction.atomic():
            user.skills = serializer.validated_data['skills']
            user.save(update_fields=['skills'])
            if achievements:
                user.achievements.all().delete()
                Achievement.objects.bulk_create([
                    Achievement(user=user, **item) for item in achievements
                ])
            self._mark_in_progress(user)
        return self._state(user)

    @action(detail=False, methods=['patch'])
    def complete(self, request):
        user = request.user
        user.onboarding_status = User.ONBOARDING_COMPLETED
        user.save(update_fields=['onboarding_status'])
        logger.info(f"Onboarding completed: user={user.pk}")
        return self._state(user)


class ProfileViewSet(viewsets.GenericViewSet):
    """
    GET /api/profile/<slug>/
    GET|PATCH /api/profile/update/
    POST /api/profile/education/
    POST /api/profile/achievement/
    GET|POST|DELETE /api/profile/connections/
    """
    queryset = User.objects.filter(is_active=True)
    serializer_class = ProfileSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'slug'
    lookup_value_regex = r'[-\w]+'

    def get_permissions(self):
        if self.action == 'retrieve':
            return [AllowAny()]
        return super().get_permissions()

    def retrieve(self, request, slug=None):
        profile = get_object_or_404(self.get_queryset(), slug=slug)
        viewer = request.user

        data = ProfileSerializer(profile).data
        data['isOwner'] = viewer.is_authenticated and viewer.pk == profile.pk
        data['isFollowing'] = (
            viewer.is_authenticated
            and Follow.objects.filter(follower=viewer, following=profile).exists()
        )
        return Response({"success": True, "data": data})

    @action(detail=False, methods=['get', 'patch'], url_path='update')
    def edit(self, request):
        user = request.user
        if request.method == 'PATCH':
            serializer = UpdateProfileSerializer(user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
        return Response({"success": True, "data": ProfileSerializer(user).data})

    @action(detail=False, methods=['post'])
    def education(self, request):
        serializer = EducationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(user=request.user)
        return Response({"success": True, "data": serializer.data}, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'])
    def achievement(self, request):
        serializer = AchievementSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(user=request.user)
        return Response({"success": True, "data": serializer.data}, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get', 'post', 'delete'])
    def connections(self, request):
        """
        GET ?slug=<slug>&type=followers|following
        POST {"slug": "<slug>"}    follow
        DELETE {"slug": "<slug>"}  unfollow
        """
        if request.method == 'GET':
            return self._list_connections(request)

        slug = request.data.get('slug') or request.query_params.get('slug')
        if not slug:
            raise ValidationError({'slug': ["This field is required."]})
        target = get_object_or_404(self.get_queryset(), slug=slug)

        if request.method == 'POST':
            return self._follow(request.user, target)
        return self._unfollow(request.user, target)

    def _list_connections(self, request):
        slug = request.query_params.get('slug')
        profile = get_object_or_404(self.get_queryset(), slug=slug) if slug else request.user
        kind = request.query_params.get('type', 'followers')

        if kind == 'followers':
            users = User.objects.filter(following_links__following=profile)
        elif kind == 'following':
            users = User.objects.filter(follower_links__follower=profile)
        else:
            raise ValidationError({'type': ["Must be 'followers' or 'following'."]})

        return Response({"success": True, "data": UserSearchSerializer(users, many=True).data})

    def _follow(self, user, target):
        if target.pk == user.pk:
            raise InvalidOperation("You cannot follow yourself")
        try:
            with transaction.atomic():
                Follow.objects.create(follower=user, following=target)
        except IntegrityError:
            raise Conflict("You already follow this user")
        return Response({"success": True, "message": f"Following {target.display_name}"}, status=status.HTTP_201_CREATED)

    def _unfollow(self, user, target):
        deleted, _ = Follow.objects.filter(follower=user, following=target).delete()
        if not deleted:
            raise NotFound("You do not follow this user")
        return Response({"success": True, "message": f"Unfollowed {target.display_name}"})
