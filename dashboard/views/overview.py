# dashboard/views/overview.py

from rest_framework.views import APIView
from rest_framework.response import Response

from core.permissions import IsPlatformAdmin
from dashboard.services.overview import get_overview


class AdminOverviewView(APIView):
    permission_classes = [IsPlatformAdmin]

    def get(self, request):
        return Response({
            "success": True,
            "data": get_overview(),
        })
