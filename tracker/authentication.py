from django.conf import settings
from rest_framework.authentication import BaseAuthentication


class HeaderUserAuthentication(BaseAuthentication):
    """
    Hands the user resolved by HeaderUserMiddleware to DRF.
    No session is involved, so no CSRF check either.
    """

    def authenticate(self, request):
        user = getattr(request._request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return (user, None)

    def authenticate_header(self, request):
        return settings.IDENTITY_HEADER
