from django.conf import settings
from django.shortcuts import redirect
from django.urls import reverse

class TemporaryPasswordMiddleware:
    """Send users still holding a temporary password to the change form."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, "user", None)
        if user and user.is_authenticated and getattr(user, "must_change_password", False):
            if not self._is_exempt(request.path):
                return redirect("accounts:change_password")
        return self.get_response(request)

    def _is_exempt(self, path):
        exempt = (
            reverse("accounts:change_password"),
            reverse("account_logout"),
            settings.STATIC_URL,
            settings.MEDIA_URL,
        )
        return any(prefix and path.startswith(prefix) for prefix in exempt)
