# togethr-backend/core/pagination.py
import math

from django.conf import settings
from rest_framework.response import Response


def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def get_page_params(request):
    """
    Read `page` / `limit` from the query string.

    Missing, non-integer or < 1 values fall back to the defaults
    (page 1, limit DEFAULT_PAGE_SIZE). limit is capped at MAX_PAGE_SIZE.
    """
    default_limit = getattr(settings, "DEFAULT_PAGE_SIZE", 20)
    max_limit = getattr(settings, "MAX_PAGE_SIZE", 100)

    page = _positive_int(request.query_params.get("page"), 1)
    limit = min(_positive_int(request.query_params.get("limit"), default_limit), max_limit)
    return page, limit


def paginate_queryset(queryset, page, limit):
    """
    Slice one page out of `queryset`.

    Returns (items, meta). A page past the end yields no items, not an error.
    """
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit]) if offset < total else []
    meta = {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit),
    }
    return items, meta


def paginated_response(request, queryset, serializer_class, context=None):
    page, limit = get_page_params(request)
    items, meta = paginate_queryset(queryset, page, limit)
    serializer = serializer_class(items, many=True, context=context or {"request": request})
    return Response({
        "success": True,
        "data": {
            "items": serializer.data,
            "meta": meta,
        },
    })
