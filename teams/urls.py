from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import HackTeamJoinRequestView, HackTeamRequestStatusView, HackTeamViewSet

router = SimpleRouter()
router.register(r'hack-team', HackTeamViewSet, basename='hack-team')

urlpatterns = [
    path(
        'hack-team-requests/status/<int:request_id>/',
        HackTeamRequestStatusView.as_view(),
        name='hack-team-request-status',
    ),
    path(
        'hack-team-requests/<int:unit_id>/',
        HackTeamJoinRequestView.as_view(),
        name='hack-team-request-create',
    ),
] + router.urls
