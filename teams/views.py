# teams/views.py - Hack team API

from core.unit_views import CollaborationUnitViewSet, JoinRequestCreateView, RequestStatusView
from .models import HackTeam, HackTeamRequest
from .serializers import HackTeamDetailSerializer, HackTeamSerializer


class HackTeamViewSet(CollaborationUnitViewSet):
    """
    GET|POST /api/hack-team/
    GET /api/hack-team/<id>/
    PATCH /api/hack-team/<id>/complete/ | cancel/
    POST /api/hack-team/<id>/invite/
    """
    unit_model = HackTeam
    serializer_class = HackTeamSerializer
    detail_serializer_class = HackTeamDetailSerializer
    scope_owned = "MY_TEAM"
    scope_joined = "JOINED_IN"

    def filter_listing(self, queryset, params):
        mode = params.get("mode")
        if mode:
            queryset = queryset.filter(hack_mode=mode.upper())

        team_size = params.get("teamSize")
        if team_size and team_size.isdigit():
            queryset = queryset.filter(size=int(team_size))

        location = params.get("location")
        if location:
            queryset = queryset.filter(hack_location__icontains=location.strip())

        hack_name = params.get("hackname")
        if hack_name:
            queryset = queryset.filter(hack_name__icontains=hack_name.strip())

        return self.filter_by_skills(queryset, params.get("skills"))


class HackTeamJoinRequestView(JoinRequestCreateView):
    """POST /api/hack-team-requests/<team_id>/"""
    unit_model = HackTeam
    github_key = "githubURL"
    linkedin_key = "linkedinURL"


class HackTeamRequestStatusView(RequestStatusView):
    """PATCH /api/hack-team-requests/status/<request_id>/"""
    request_model = HackTeamRequest
