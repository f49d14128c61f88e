# dashboard/services/overview.py

from datetime import timedelta

from django.db.models import Avg, Count
from django.utils import timezone

from core.models import CollaborationUnit, CollaborationRequest, ContactMessage, Feedback
from projects.models import Project, ProjectMember, ProjectRequest
from teams.models import HackTeam, HackTeamMember, HackTeamRequest
from users.models import User


def _status_counts(model):
    counts = {choice: 0 for choice, _ in CollaborationUnit.STATUS_CHOICES}
    for row in model.objects.values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    counts["total"] = sum(counts.values())
    return counts


def get_overview():
    now = timezone.now()

    # 1️⃣ Users
    users = {
        "total": User.objects.count(),
        "email_verified": User.objects.filter(email_verified=True).count(),
        "onboarded": User.objects.filter(onboarding_status=User.ONBOARDING_COMPLETED).count(),
        "new_last_7_days": User.objects.filter(date_joined__gte=now - timedelta(days=7)).count(),
    }

    # 2️⃣ Units
    hack_teams = _status_counts(HackTeam)
    hack_teams["members"] = HackTeamMember.objects.count()

    projects = _status_counts(Project)
    projects["members"] = ProjectMember.objects.count()
    projects["accepting"] = Project.objects.filter(
        status=Project.STATUS_OPEN, is_open=True
    ).count()

    # 3️⃣ Pending requests
    pending = CollaborationRequest.STATUS_PENDING
    pending_requests = {
        "hack_teams": HackTeamRequest.objects.filter(status=pending).count(),
        "projects": ProjectRequest.objects.filter(status=pending).count(),
    }

    # 4️⃣ Feedback + contact
    feedback_stats = Feedback.objects.aggregate(total=Count("id"), average=Avg("rating"))
    average = feedback_stats["average"]

    return {
        "users": users,
        "hack_teams": hack_teams,
        "projects": projects,
        "pending_requests": pending_requests,
        "feedback": {
            "total": feedback_stats["total"],
            "average_rating": round(average, 2) if average is not None else None,
        },
        "queries": ContactMessage.objects.count(),
    }
