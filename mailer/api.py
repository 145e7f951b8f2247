import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .models import EmailLog
from .sending import deliver_email

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([IsAdminUser])
def send_email(request):
    """Send one HTML email with the real backend (no simulated fallback)."""
    data = request.data if hasattr(request.data, "get") else {}
    to = data.get("to")
    subject = data.get("subject")
    html = data.get("html")
    if not to or not subject or not html:
        return Response({"message": "Dados incompletos"}, status=status.HTTP_400_BAD_REQUEST)
    try:
        message_id = deliver_email(to, subject, html, from_email=data.get("from"))
    except Exception as exc:
        logger.warning("Email endpoint delivery to %s failed: %s", to, exc)
        return Response(
            {"message": "Erro ao enviar email", "error": str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    EmailLog.objects.create(
        to=to, subject=subject, status=EmailLog.STATUS_SENT, provider_id=message_id
    )
    return Response({"message": "Email enviado com sucesso", "messageId": message_id})
