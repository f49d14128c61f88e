import logging
import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ContactMessageSerializer, FeedbackSerializer

logger = logging.getLogger("togethr.core")


class HealthCheckView(APIView):
    """
    Lightweight health endpoint for uptime checks.
    - Checks DB connectivity
    - Returns env and simple latency
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        db_ok = True
        try:
            connections["default"].cursor()
        except OperationalError:
            db_ok = False

        duration_ms = int((time.time() - start) * 1000)

        return Response(
            {
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": duration_ms,
            }
        )


class ContactView(APIView):
    """
    POST /api/contact/
    Body: {"name": "...", "email": "...", "message": "..."}
    """
    permission_classes = [AllowAny]
    throttle_scope = "contact"

    def post(self, request):
        serializer = ContactMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        contact = serializer.save()

        logger.info(f"Contact message received: id={contact.id}")
        return Response({"success": True}, status=status.HTTP_201_CREATED)


class FeedbackView(APIView):
    """
    POST /api/feedback/
    Body: {"message": "...", "rating": 1-5 (optional)}

    Anonymous feedback is allowed; a signed-in author is attached.
    """
    permission_classes = [AllowAny]
    throttle_scope = "feedback"

    def post(self, request):
        serializer = FeedbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user if request.user.is_authenticated else None
        feedback = serializer.save(
            user=user,
            name=user.display_name if user else None,
            email=user.email if user else None,
        )

        logger.info(f"Feedback received: id={feedback.id}, rating={feedback.rating}")
        return Response(
            {"success": True, "data": FeedbackSerializer(feedback).data},
            status=status.HTTP_201_CREATED,
        )
