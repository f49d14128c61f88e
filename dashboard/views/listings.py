# dashboard/views/listings.py

from rest_framework.views import APIView

from core.pagination import paginated_response
from core.permissions import IsPlatformAdmin
from core.serializers import ContactMessageSerializer
from dashboard.serializers import AdminFeedbackSerializer, AdminRequestSerializer, AdminUserSerializer
from dashboard.services import listings
from projects.serializers import ProjectSerializer
from teams.serializers import HackTeamSerializer


class AdminListView(APIView):
    """
    Paginated admin listing: `list_fn(params)` -> queryset, rendered with
    `serializer_class`.
    """
    permission_classes = [IsPlatformAdmin]
    list_fn = None
    serializer_class = None

    def get(self, request):
        queryset = type(self).list_fn(request.query_params)
        return paginated_response(request, queryset, self.serializer_class)


class AdminUsersView(AdminListView):
    list_fn = listings.list_users
    serializer_class = AdminUserSerializer


class AdminHackTeamsView(AdminListView):
    list_fn = listings.list_hack_teams
    serializer_class = HackTeamSerializer


class AdminHackTeamRequestsView(AdminListView):
    list_fn = listings.list_hack_team_requests
    serializer_class = AdminRequestSerializer


class AdminProjectsView(AdminListView):
    list_fn = listings.list_projects
    serializer_class = ProjectSerializer


class AdminProjectRequestsView(AdminListView):
    list_fn = listings.list_project_requests
    serializer_class = AdminRequestSerializer


class AdminFeedbackView(AdminListView):
    list_fn = listings.list_feedback
    serializer_class = AdminFeedbackSerializer


class AdminQueriesView(AdminListView):
    list_fn = listings.list_queries
    serializer_class = ContactMessageSerializer
