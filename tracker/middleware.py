from django.conf import settings
from django.http import JsonResponse
import structlog

from tracker.models import User

logger = structlog.get_logger()


# Identity comes from an upstream header; no login step in this service
class HeaderUserMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
        self.header = settings.IDENTITY_HEADER

    def __call__(self, request):
        if request.path.startswith("/api"):
            username = request.headers.get(self.header)
            if username:
                try:
                    request.user = User.objects.get(username=username, is_active=True)
                except User.DoesNotExist:
                    logger.info("identity_rejected", username=username, path=request.path)
                    return JsonResponse(
                        {"error": "User not found or invalid credentials."}, status=401
                    )
                logger.debug("identity_resolved", username=username, path=request.path)
        return self.get_response(request)
