from allauth.account.adapter import DefaultAccountAdapter
from django.conf import settings
from django.urls import reverse


class InviteOnlyAccountAdapter(DefaultAccountAdapter):
    """Accounts are created by admins and invitations only."""

    def is_open_for_signup(self, request):
        return False

    def is_email_verified(self, request, email):
        site = getattr(settings, "SITE_URL", "")
        if site.startswith("http://localhost:8000"):
            return True
        return super().is_email_verified(request, email)

    def get_login_redirect_url(self, request):
        user = request.user
        if getattr(user, "must_change_password", False):
            return reverse("accounts:change_password")
        return super().get_login_redirect_url(request)
