from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import ProjectJoinRequestView, ProjectRequestStatusView, ProjectViewSet

router = SimpleRouter()
router.register(r'projects', ProjectViewSet, basename='project')

urlpatterns = [
    path(
        'projects-requests/status/<int:request_id>/',
        ProjectRequestStatusView.as_view(),
        name='project-request-status',
    ),
    path(
        'projects-requests/<int:unit_id>/',
        ProjectJoinRequestView.as_view(),
        name='project-request-create',
    ),
] + router.urls
