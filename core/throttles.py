# core/throttles.py

from rest_framework.throttling import SimpleRateThrottle


class JoinRequestThrottle(SimpleRateThrottle):
    """
    Throttle join-request creation per user.

    Scope key: 'join-request'
    Cache key shape:
      throttle_join-request_u<user_id>
    """
    scope = "join-request"

    def get_cache_key(self, request, view):
        # Only throttle POST (request creation)
        if request.method != "POST":
            return None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        return f"throttle_{self.scope}_u{user.id}"
