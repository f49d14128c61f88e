# users/urls_onboarding.py

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import OnboardingViewSet

router = SimpleRouter()
router.register(r'', OnboardingViewSet, basename='onboarding')

urlpatterns = [
    path('', include(router.urls)),
]
