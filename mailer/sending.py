import logging

from anymail.message import AnymailMessage
from django.conf import settings
from django.utils.html import strip_tags

from .models import EmailLog

logger = logging.getLogger(__name__)


def deliver_email(to, subject, html, from_email=None, text=None):
    """Send through the configured backend; returns the provider message id.

    Raises whatever the backend raises.
    """
    msg = AnymailMessage(
        subject=subject,
        body=text or strip_tags(html),
        from_email=from_email or settings.DEFAULT_FROM_EMAIL,
        to=[to],
    )
    msg.attach_alternative(html, "text/html")
    msg.send(fail_silently=False)
    status = getattr(msg, "anymail_status", None)
    return getattr(status, "message_id", None) if status else None


def simulate_email(to, subject, html, reason=""):
    logger.info(
        "Simulated email to %s | subject: %s | content: %s",
        to,
        subject,
        strip_tags(html)[:100],
    )
    return EmailLog.objects.create(
        to=to,
        subject=subject,
        status=EmailLog.STATUS_SIMULATED,
        error=reason,
    )


def send_email(to, subject, html, text=None):
    """Deliver an email, falling back to a logged simulation.

    Never raises on delivery problems; callers get the EmailLog row.
    """
    if getattr(settings, "EMAIL_SIMULATE", False):
        return simulate_email(to, subject, html)
    try:
        provider_id = deliver_email(to, subject, html, text=text)
    except Exception as exc:
        logger.warning("Email delivery to %s failed, simulating: %s", to, exc)
        return simulate_email(to, subject, html, reason=str(exc))
    logger.info("Email sent to %s (%s)", to, provider_id)
    return EmailLog.objects.create(
        to=to,
        subject=subject,
        status=EmailLog.STATUS_SENT,
        provider_id=provider_id,
    )
