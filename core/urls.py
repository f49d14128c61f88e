from django.urls import path

from .views import ContactView, FeedbackView

urlpatterns = [
    path("contact/", ContactView.as_view(), name="contact"),
    path("feedback/", FeedbackView.as_view(), name="feedback"),
]
