from core.unit_views import CollaborationUnitViewSet, JoinRequestCreateView, RequestStatusView
from .models import Project, ProjectRequest
from .serializers import ProjectDetailSerializer, ProjectSerializer


class ProjectViewSet(CollaborationUnitViewSet):
    """
    Manage Projects.
    Permissions:
    - List: Public (scope=ALL), other scopes need a session
    - Create / detail / transitions / invites: Authenticated
    """
    unit_model = Project
    serializer_class = ProjectSerializer
    detail_serializer_class = ProjectDetailSerializer
    scope_owned = "MY_PROJECT"
    scope_joined = "CONTRIBUTING_IN"

    def filter_listing(self, queryset, params):
        commitment = params.get("commitment")
        if commitment:
            queryset = queryset.filter(commitment=commitment.upper())

        stage = params.get("stage")
        if stage:
            queryset = queryset.filter(stage=stage.upper())

        return self.filter_by_skills(queryset, params.get("skills"))


class ProjectJoinRequestView(JoinRequestCreateView):
    """POST /api/projects-requests/<project_id>/"""
    unit_model = Project
    github_key = "githubUrl"
    linkedin_key = "linkedinUrl"


class ProjectRequestStatusView(RequestStatusView):
    """PATCH /api/projects-requests/status/<request_id>/"""
    request_model = ProjectRequest
