from django.urls import path
from dashboard.views.overview import AdminOverviewView
from dashboard.views.listings import (
    AdminUsersView,
    AdminHackTeamsView,
    AdminHackTeamRequestsView,
    AdminProjectsView,
    AdminProjectRequestsView,
    AdminFeedbackView,
    AdminQueriesView,
)

urlpatterns = [
    path("overview/", AdminOverviewView.as_view(), name="admin-overview"),
    path("users/", AdminUsersView.as_view(), name="admin-users"),
    path("hack-teams/", AdminHackTeamsView.as_view(), name="admin-hack-teams"),
    path("hack-teams-reqs/", AdminHackTeamRequestsView.as_view(), name="admin-hack-team-requests"),
    path("projects/", AdminProjectsView.as_view(), name="admin-projects"),
    path("projects-reqs/", AdminProjectRequestsView.as_view(), name="admin-project-requests"),
    path("feedback/", AdminFeedbackView.as_view(), name="admin-feedback"),
    path("queries/", AdminQueriesView.as_view(), name="admin-queries"),
]
