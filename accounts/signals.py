import logging
from urllib.parse import urlparse

from allauth.account.models import EmailAddress
from allauth.account.signals import user_logged_in
from axes.signals import user_locked_out
from django.conf import settings
from django.contrib import messages
from django.contrib.sites.models import Site
from django.db.models.signals import post_migrate
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    # Admin-created users have no separate verification step
    EmailAddress.objects.update_or_create(
        user=user,
        email=user.email,
        defaults={"verified": True, "primary": True},
    )
    EmailAddress.objects.filter(user=user).exclude(email=user.email).update(primary=False)
    if getattr(user, "must_change_password", False):
        messages.info(request, "Defina uma nova senha para continuar.")


@receiver(user_locked_out)
def on_user_locked_out(sender, request, username=None, ip_address=None, **kwargs):
    logger.warning("Login locked out for %s from %s", username, ip_address)


@receiver(post_migrate)
def sync_site_domain(sender, **kwargs):
    if sender.name != "accounts":
        return
    site_url = getattr(settings, "SITE_URL", "")
    if not site_url:
        return
    host = urlparse(site_url).hostname or "example.com"
    sid = getattr(settings, "SITE_ID", 1)
    Site.objects.update_or_create(id=sid, defaults={"domain": host, "name": "Nosso Templo"})
