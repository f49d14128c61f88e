# dashboard/services/listings.py
"""
Filtered querysets behind the admin list endpoints.

Each function takes the request's query params and returns a queryset,
newest first. Pagination happens in the view.
"""
from django.db.models import Q

from core.models import ContactMessage, Feedback
from projects.models import Project, ProjectRequest
from teams.models import HackTeam, HackTeamRequest
from users.models import User


def _truthy(value):
    return (value or "").lower() in ("1", "true", "yes")


def _upper(params, key):
    value = params.get(key)
    return value.strip().upper() if value else None


def list_users(params):
    qs = User.objects.all()
    search = (params.get("search") or "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(email__icontains=search))
    return qs.order_by("-date_joined")


def list_hack_teams(params):
    qs = HackTeam.objects.select_related("owner")
    search = (params.get("search") or "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(hack_name__icontains=search))
    status = _upper(params, "status")
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-created_at")


def list_hack_team_requests(params):
    qs = HackTeamRequest.objects.select_related("sender", "receiver", "team")
    status = _upper(params, "status")
    if status:
        qs = qs.filter(status=status)
    req_type = _upper(params, "type")
    if req_type:
        qs = qs.filter(type=req_type)
    team_id = params.get("teamId")
    if team_id and team_id.isdigit():
        qs = qs.filter(team_id=int(team_id))
    return qs.order_by("-created_at")


def list_projects(params):
    qs = Project.objects.select_related("owner")
    search = (params.get("search") or "").strip()
    if search:
        qs = qs.filter(Q(title__icontains=search) | Q(short_desc__icontains=search))
    status = _upper(params, "status")
    if status:
        qs = qs.filter(status=status)
    stage = _upper(params, "stage")
    if stage:
        qs = qs.filter(stage=stage)
    if params.get("isOpen") is not None:
        qs = qs.filter(is_open=_truthy(params.get("isOpen")))
    return qs.order_by("-created_at")


def list_project_requests(params):
    qs = ProjectRequest.objects.select_related("sender", "receiver", "project")
    status = _upper(params, "status")
    if status:
        qs = qs.filter(status=status)
    req_type = _upper(params, "type")
    if req_type:
        qs = qs.filter(type=req_type)
    project_id = params.get("projectId")
    if project_id and project_id.isdigit():
        qs = qs.filter(project_id=int(project_id))
    return qs.order_by("-created_at")


def list_feedback(params):
    qs = Feedback.objects.select_related("user")
    rating = params.get("rating")
    if rating and rating.isdigit():
        qs = qs.filter(rating=int(rating))
    if params.get("hasUser") is not None:
        qs = qs.filter(user__isnull=not _truthy(params.get("hasUser")))
    return qs.order_by("-created_at")


def list_queries(params):
    qs = ContactMessage.objects.all()
    search = (params.get("search") or "").strip()
    if search:
        qs = qs.filter(
            Q(name__icontains=search) | Q(email__icontains=search) | Q(message__icontains=search)
        )
    return qs.order_by("-created_at")
