from django.contrib import admin
from django.urls import path, include
from core.views import HealthCheckView
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('authx.urls')),
    path('api/users/', include('users.urls')),
    path('api/onboarding/', include('users.urls_onboarding')),
    path('api/profile/', include('users.urls_profile')),
    path('api/', include('teams.urls')),
    path('api/', include('projects.urls')),
    path('api/', include('core.urls')),
    path('api/notifications/', include('notifications.urls')),
    path('api/admin/', include('dashboard.urls')),
    path("api/health/", HealthCheckView.as_view(), name="health-check"),
]
if settings.DEBUG:
    urlpatterns += static(
        settings.MEDIA_URL,
        document_root=settings.MEDIA_ROOT
    )
