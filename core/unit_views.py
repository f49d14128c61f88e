# core/unit_views.py - shared API for hack teams and projects
import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotAuthenticated, NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .constants import SCOPE_ALL, SCOPE_REQUESTED
from .lifecycle import resolve_request, send_invite, submit_join_request, transition_unit
from .pagination import paginated_response
from .sanitizers import parse_csv
from .serializers import CollaborationRequestSerializer
from .throttles import JoinRequestThrottle

logger = logging.getLogger("togethr.units")


class CollaborationUnitViewSet(viewsets.GenericViewSet):
    """
    list / create / retrieve + complete, cancel and invite actions.

    Subclasses set `unit_model`, `serializer_class`, `detail_serializer_class`,
    the two owner/member scope names, and implement `filter_listing`.
    """
    unit_model = None
    detail_serializer_class = None
    scope_owned = None
    scope_joined = None
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "list":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return self.unit_model.objects.select_related("owner")

    def filter_listing(self, queryset, params):
        return queryset

    def filter_by_skills(self, queryset, raw):
        """`?skills=react,django` keeps units needing any of them."""
        wanted = set(parse_csv(raw))
        if not wanted:
            return queryset
        # skill_stack is stored lowercased; JSONField __contains is unavailable on SQLite
        matching = [
            unit_id
            for unit_id, stack in queryset.values_list("id", "skill_stack")
            if wanted.intersection(stack or [])
        ]
        return queryset.filter(id__in=matching)

    def scoped_queryset(self, scope):
        request_model = self.unit_model.requests.field.model
        qs = self.get_queryset().filter(status=self.unit_model.STATUS_OPEN)
        if scope == SCOPE_ALL:
            return qs

        user = self.request.user
        if not user.is_authenticated:
            raise NotAuthenticated()

        if scope == self.scope_owned:
            return qs.filter(owner=user)
        if scope == SCOPE_REQUESTED:
            return qs.filter(
                requests__sender=user,
                requests__status=request_model.STATUS_PENDING,
            ).distinct()
        if scope == self.scope_joined:
            return qs.filter(members__user=user).distinct()

        allowed = [SCOPE_ALL, self.scope_owned, SCOPE_REQUESTED, self.scope_joined]
        raise ValidationError({"scope": [f"Scope must be one of {', '.join(allowed)}."]})

    def list(self, request):
        """
        GET ?scope=&page=&limit= plus per-unit filters. OPEN units, newest first.
        """
        scope = (request.query_params.get("scope") or SCOPE_ALL).upper()
        qs = self.filter_listing(self.scoped_queryset(scope), request.query_params)
        return paginated_response(request, qs.order_by("-created_at"), self.get_serializer_class())

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        unit = serializer.save()

        logger.info(f"{unit.LABEL} created: id={unit.pk}, owner={request.user.pk}")
        return Response(
            {
                "success": True,
                "message": f"{unit.LABEL.capitalize()} created successfully",
                "data": self.detail_serializer_class(unit, context={"request": request}).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        try:
            unit = self.get_queryset().prefetch_related("members__user").get(pk=pk)
        except self.unit_model.DoesNotExist:
            raise NotFound(f"{self.unit_model.LABEL.capitalize()} not found")

        serializer = self.detail_serializer_class(unit, context={"request": request})
        return Response({"success": True, "data": serializer.data})

    def _transition(self, request, pk, target_status, done):
        unit = transition_unit(self.unit_model, pk, request.user, target_status)
        return Response({
            "success": True,
            "message": f"{unit.LABEL.capitalize()} {done} successfully",
            "data": {"id": unit.pk, "status": unit.status},
        })

    @action(detail=True, methods=["patch"])
    def complete(self, request, pk=None):
        """PATCH .../<id>/complete/ (owner only, rewards every member)"""
        return self._transition(request, pk, self.unit_model.STATUS_COMPLETED, "completed")

    @action(detail=True, methods=["patch"])
    def cancel(self, request, pk=None):
        """PATCH .../<id>/cancel/ (owner only)"""
        return self._transition(request, pk, self.unit_model.STATUS_CANCELLED, "cancelled")

    @action(detail=True, methods=["post"])
    def invite(self, request, pk=None):
        """
        POST .../<id>/invite/
        Body: {"userId": 7, "message": "..."}
        """
        req = send_invite(
            self.unit_model,
            pk,
            request.user,
            request.data.get("userId"),
            _text(request.data.get("message")),
        )
        return Response(
            {
                "success": True,
                "message": "Invite sent successfully",
                "request": CollaborationRequestSerializer(req).data,
            },
            status=status.HTTP_201_CREATED,
        )


def _text(value):
    return value if isinstance(value, str) else ""


class JoinRequestCreateView(APIView):
    """
    POST .../<unit_id>/
    Body: {message, <github_key>, <linkedin_key>}
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [JoinRequestThrottle]
    unit_model = None
    github_key = "githubUrl"
    linkedin_key = "linkedinUrl"

    def post(self, request, unit_id):
        data = request.data if hasattr(request.data, "get") else {}
        req = submit_join_request(
            self.unit_model,
            unit_id,
            request.user,
            _text(data.get("message")),
            _text(data.get(self.github_key)),
            _text(data.get(self.linkedin_key)),
        )
        return Response(
            {
                "success": True,
                "message": "Join request sent successfully",
                "request": CollaborationRequestSerializer(req).data,
            },
            status=status.HTTP_201_CREATED,
        )


class RequestStatusView(APIView):
    """
    PATCH .../status/<request_id>/
    Body: {"status": "ACCEPTED" | "REJECTED" | "CANCELLED"}
    """
    permission_classes = [IsAuthenticated]
    request_model = None

    MESSAGES = {
        "ACCEPTED": "Request accepted successfully",
        "REJECTED": "Request rejected successfully",
        "CANCELLED": "Request withdrawn successfully",
    }

    def patch(self, request, request_id):
        data = request.data if hasattr(request.data, "get") else {}
        new_status = _text(data.get("status")).strip().upper()
        req = resolve_request(self.request_model, request_id, request.user, new_status)
        return Response({
            "success": True,
            "message": self.MESSAGES[req.status],
            "request": CollaborationRequestSerializer(req).data,
        })
